"""
Authentication Service - Supabase auth and a local storage-backed variant
Both return an AuthIdentity (durable id + email) or raise AuthenticationError.
"""
import logging
import uuid
from typing import Any, Dict, Optional

from passlib.context import CryptContext

from mycore.core.exceptions import AuthenticationError, NotConfiguredError
from mycore.models.user import AuthIdentity
from mycore.services.storage.base import Storage, ACCOUNTS

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def _identity_from_supabase_user(user) -> AuthIdentity:
    metadata = getattr(user, "user_metadata", None) or {}
    return AuthIdentity(id=str(user.id), email=user.email or "", name=metadata.get("name"))


class SupabaseAuthService:
    """Auth collaborator over supabase-py's auth client"""

    def __init__(self, client):
        if client is None:
            raise NotConfiguredError("Supabase not configured")
        self.client = client

    def check_session(self) -> Optional[AuthIdentity]:
        try:
            session = self.client.auth.get_session()
        except Exception as e:
            logger.error(f"[AUTH] Session lookup failed: {e}")
            raise AuthenticationError(f"Failed to check session: {e}")
        if not session or not session.user:
            return None
        return _identity_from_supabase_user(session.user)

    def login(self, email: str, password: str) -> AuthIdentity:
        try:
            response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.warning(f"[AUTH] Login failed for {email}: {e}")
            raise AuthenticationError(f"Login failed: {e}")
        if not response.user:
            raise AuthenticationError("Login failed: no user returned")
        logger.info(f"[AUTH] Logged in {email}")
        return _identity_from_supabase_user(response.user)

    def signup(self, email: str, password: str) -> AuthIdentity:
        try:
            response = self.client.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": {"name": email.split("@")[0]}}
            })
        except Exception as e:
            logger.warning(f"[AUTH] Signup failed for {email}: {e}")
            raise AuthenticationError(f"Signup failed: {e}")
        if not response.user:
            raise AuthenticationError("Signup failed: no user returned")
        logger.info(f"[AUTH] Signed up {email}")
        return _identity_from_supabase_user(response.user)

    def login_with_google(self) -> Dict[str, Any]:
        """Start the OAuth flow; the caller follows the returned URL"""
        try:
            response = self.client.auth.sign_in_with_oauth({"provider": "google"})
        except Exception as e:
            raise AuthenticationError(f"Google login failed: {e}")
        return {"provider": "google", "url": response.url}

    def logout(self) -> None:
        try:
            self.client.auth.sign_out()
        except Exception as e:
            logger.warning(f"[AUTH] Sign out failed: {e}")


class LocalAuthService:
    """
    Accounts for the local storage backends

    Accounts live in the same Storage as the user's data, keyed by the
    normalized email, so a json-backed install keeps its logins across
    restarts and the user id stays stable.
    """

    def __init__(self, storage: Storage):
        self.storage = storage
        self.current: Optional[AuthIdentity] = None

    @staticmethod
    def _key(email: str) -> str:
        return email.strip().lower()

    def check_session(self) -> Optional[AuthIdentity]:
        return self.current

    def signup(self, email: str, password: str) -> AuthIdentity:
        key = self._key(email)
        if self.storage.get(ACCOUNTS, key) is not None:
            raise AuthenticationError("User already registered")
        self.storage.put(ACCOUNTS, {
            "id": key,
            "user_id": f"u_{uuid.uuid4().hex[:9]}",
            "email": email,
            "password_hash": pwd_context.hash(password)
        })
        logger.info(f"[AUTH] Registered local account {email}")
        return self.login(email, password)

    def login(self, email: str, password: str) -> AuthIdentity:
        account = self.storage.get(ACCOUNTS, self._key(email))
        if account is None or not pwd_context.verify(password, account["password_hash"]):
            raise AuthenticationError("Invalid login credentials")
        self.current = AuthIdentity(id=account["user_id"], email=account["email"],
                                    name=account["email"].split("@")[0])
        return self.current

    def login_with_google(self) -> Dict[str, Any]:
        raise NotConfiguredError("Google login requires the Supabase backend")

    def logout(self) -> None:
        self.current = None
