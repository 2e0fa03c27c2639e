"""
Custom Exceptions - Application-specific error types
"""


class MyCoreException(Exception):
    """Base exception for all myCORE errors"""
    pass


class NotAuthenticatedError(MyCoreException):
    """Raised when a user-scoped operation runs without an active session"""
    pass


class AuthenticationError(MyCoreException):
    """Raised when login, signup or session lookup is rejected"""
    pass


class NotConfiguredError(MyCoreException):
    """Raised when a backend is missing required connection credentials"""
    pass


class InvalidDataError(MyCoreException):
    """Raised when request data fails validation"""
    pass


class OnboardingError(MyCoreException):
    """Raised when onboarding is attempted for an already-onboarded user"""
    pass


class DatabaseError(MyCoreException):
    """Raised when storage operations fail"""
    pass


class ExternalServiceError(MyCoreException):
    """Raised when external services (Supabase auth, Twilio) fail"""
    pass
