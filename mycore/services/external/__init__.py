"""
External integrations module
Handles connections to external services (WhatsApp via Twilio)
"""
from . import whatsapp

__all__ = ['whatsapp']
