"""Bearer token issuance, resolution and revocation.

Each token handed to a client is a JWT (HS256) wrapping a random session id.
The session id must also be present in the in-memory session table, which is
the source of truth for whether a session is alive. The JWT ``exp`` claim is
an independent absolute lifetime on top of the idle timeout.
"""

import secrets
import string
import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
import structlog

from learnhub.core.modules.session.models import AuthToken, Session
from learnhub.utils import now

logger = structlog.get_logger(__name__)

TOKEN_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "+/"
TOKEN_LENGTH = 40
DEFAULT_IDLE_TIMEOUT_MINUTES = 60
ALGORITHM = "HS256"


class TokenManager:
    """Thread-safe table of active sessions keyed by session id."""

    def __init__(
        self,
        secret_key: str,
        token_lifetime: timedelta | None = timedelta(hours=24),
        clock: Callable[[], datetime] = now,
    ) -> None:
        if not secret_key:
            raise ValueError("secret_key is required to sign tokens")
        self._secret_key = secret_key
        self._token_lifetime = token_lifetime
        self._clock = clock
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def issue_token(self, user_id: Any, idle_timeout_minutes: float = DEFAULT_IDLE_TIMEOUT_MINUTES) -> AuthToken:
        """Create a session for user_id and return its signed token."""
        if idle_timeout_minutes <= 0:
            raise ValueError("idle_timeout_minutes must be positive")

        current = self._clock()
        expires_at = self._expiry_for(current)
        with self._lock:
            self._sweep(current)
            token = self._generate_token()
            while token in self._sessions:
                token = self._generate_token()
            self._sessions[token] = Session(
                token=token,
                user_id=user_id,
                idle_timeout=timedelta(minutes=idle_timeout_minutes),
                last_accessed=current,
                expires_at=expires_at,
            )

        logger.debug("session_issued", user_id=str(user_id), idle_timeout_minutes=idle_timeout_minutes)
        return AuthToken(self._sign(token, current, expires_at))

    def resolve_token(self, auth_token: str) -> Any | None:
        """Return the user id bound to auth_token, or None if it is not valid."""
        current = self._clock()
        token = self._verify(auth_token, current)
        with self._lock:
            self._sweep(current)
            if token is None:
                return None
            session = self._sessions.get(token)
            if session is None:
                return None
            session.touch(current)
            return session.user_id

    def revoke_token(self, auth_token: str) -> bool:
        """Terminate the session behind auth_token. Returns False if there was none."""
        current = self._clock()
        token = self._verify(auth_token, current)
        with self._lock:
            self._sweep(current)
            if token is None:
                return False
            session = self._sessions.pop(token, None)

        if session is None:
            return False
        logger.debug("session_revoked", user_id=str(session.user_id))
        return True

    def revoke_user_sessions(self, user_id: Any) -> int:
        """Terminate every session of a user, returning how many were removed."""
        with self._lock:
            tokens = [token for token, session in self._sessions.items() if session.user_id == user_id]
            for token in tokens:
                del self._sessions[token]
        if tokens:
            logger.debug("user_sessions_revoked", user_id=str(user_id), count=len(tokens))
        return len(tokens)

    def sweep(self) -> int:
        """Remove idle and lifetime-expired sessions, returning how many were removed."""
        with self._lock:
            return self._sweep(self._clock())

    def active_sessions(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _sweep(self, current: datetime) -> int:
        # Caller must hold self._lock
        expired = [token for token, session in self._sessions.items() if session.is_expired(current)]
        for token in expired:
            del self._sessions[token]
        return len(expired)

    @staticmethod
    def _generate_token() -> str:
        return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))

    def _expiry_for(self, issued_at: datetime) -> datetime | None:
        """Absolute expiry of a token issued at issued_at, truncated to whole seconds like the exp claim."""
        if self._token_lifetime is None:
            return None
        return datetime.fromtimestamp(int((issued_at + self._token_lifetime).timestamp()), UTC)

    def _sign(self, token: str, issued_at: datetime, expires_at: datetime | None) -> str:
        payload: dict[str, Any] = {"sid": token, "iat": int(issued_at.timestamp())}
        if expires_at is not None:
            payload["exp"] = int(expires_at.timestamp())
        return jwt.encode(payload, self._secret_key, algorithm=ALGORITHM)

    def _verify(self, auth_token: Any, current: datetime) -> str | None:
        """Return the session id carried by auth_token, or None if it is not trustworthy.

        Time-based claims are checked against the injected clock rather than
        PyJWT's wall clock so both expiry layers agree on what "now" is.
        """
        if not isinstance(auth_token, str) or not auth_token:
            return None
        try:
            payload = jwt.decode(
                auth_token,
                self._secret_key,
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "verify_iat": False, "verify_nbf": False},
            )
        except jwt.PyJWTError as exc:
            logger.debug("token_rejected", reason=str(exc))
            return None

        token = payload.get("sid")
        if not isinstance(token, str):
            logger.debug("token_rejected", reason="missing session id")
            return None

        exp = payload.get("exp")
        if exp is not None and (not isinstance(exp, int | float) or current.timestamp() >= exp):
            logger.debug("token_rejected", reason="token expired")
            return None
        return token
