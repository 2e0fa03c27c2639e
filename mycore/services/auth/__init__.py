"""
Authentication module
"""
from .service import SupabaseAuthService, LocalAuthService

__all__ = ['SupabaseAuthService', 'LocalAuthService']
