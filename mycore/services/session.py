"""
Session context - the identity and cached profile for one logical session
"""
import logging
from typing import Optional

from mycore.core.exceptions import NotAuthenticatedError
from mycore.models.user import AuthIdentity, User

logger = logging.getLogger(__name__)


class SessionContext:
    """Holds who is signed in; invalidated on logout or reset"""

    def __init__(self, identity: Optional[AuthIdentity] = None):
        self.identity: Optional[AuthIdentity] = identity
        self.user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    def bind(self, identity: AuthIdentity) -> None:
        """Attach an identity, dropping any profile cached for another one"""
        if self.identity is None or self.identity.id != identity.id:
            self.user = None
        self.identity = identity
        logger.info(f"[SESSION] Bound session to {identity.email}")

    def clear(self) -> None:
        if self.identity is not None:
            logger.info(f"[SESSION] Cleared session for {self.identity.email}")
        self.identity = None
        self.user = None

    def require_user_id(self) -> str:
        """
        Get the signed-in user's id

        Raises:
            NotAuthenticatedError: If no identity is bound
        """
        if self.identity is None:
            raise NotAuthenticatedError("No active session")
        return self.identity.id
