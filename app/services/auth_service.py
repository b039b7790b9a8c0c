import logging
import secrets
import threading
import uuid
from typing import Dict, Optional

from app import config
from app.errors import EmailAlreadyRegisteredError
from app.schemas.user import SessionOut, UserCreate, UserOut

logger = logging.getLogger(__name__)


class AuthService:
    """
    Mock identity provider.

    Any credentials log in; a session is admin only when the email and password
    match the configured admin credentials. Passwords are never stored.
    """

    def __init__(
        self,
        admin_email: str = config.ADMIN_EMAIL,
        admin_password: str = config.ADMIN_PASSWORD,
    ):
        self._admin_email = admin_email.lower()
        self._admin_password = admin_password
        self._users: Dict[str, UserOut] = {}  # registered users by lowercased email
        self._sessions: Dict[str, UserOut] = {}  # session token -> user
        self._lock = threading.RLock()

    def login(self, email: str, password: str) -> SessionOut:
        """Open a session for the given credentials"""
        key = email.lower()
        is_admin = key == self._admin_email and password == self._admin_password

        with self._lock:
            registered = self._users.get(key)
            user = UserOut(
                id=self._user_id(key),
                email=email,
                name=registered.name if registered else email.split("@")[0],
                isAdmin=is_admin,
            )
            session = self._open_session(user)

        logger.info("User %s logged in (admin=%s)", user.id, is_admin)
        return session

    def register(self, user_data: UserCreate) -> SessionOut:
        """Register a regular (non-admin) user and open a session for them"""
        key = user_data.email.lower()

        with self._lock:
            if key in self._users or key == self._admin_email:
                logger.warning("Registration rejected for existing email")
                raise EmailAlreadyRegisteredError(user_data.email)

            user = UserOut(
                id=self._user_id(key),
                email=user_data.email,
                name=user_data.name,
                isAdmin=False,
            )
            self._users[key] = user
            session = self._open_session(user)

        logger.info("User %s registered", user.id)
        return session

    def logout(self, token: str) -> None:
        with self._lock:
            user = self._sessions.pop(token, None)
        if user is not None:
            logger.info("User %s logged out", user.id)

    def get_user(self, token: str) -> Optional[UserOut]:
        """Resolve a session token to its user, or None if unknown"""
        with self._lock:
            user = self._sessions.get(token)
            return user.model_copy() if user else None

    def _open_session(self, user: UserOut) -> SessionOut:
        token = secrets.token_urlsafe(32)
        self._sessions[token] = user
        return SessionOut(token=token, user=user.model_copy())

    @staticmethod
    def _user_id(email_key: str) -> str:
        # Stable per email so repeated logins act as the same user
        return str(uuid.uuid5(uuid.NAMESPACE_URL, f"mailto:{email_key}"))
