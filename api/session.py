"""Session management: signed session ids and the in-memory game registry."""

import logging
from datetime import datetime, timedelta
from uuid import uuid4

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from config import config
from core.game import BlackjackGame

logger = logging.getLogger(__name__)


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum token age in seconds, or None to check only the
                signature (the registry expires idle games itself)

        Returns:
            The session ID if valid, None otherwise
        """
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global signer instance
_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class GameRegistry:
    """
    In-memory games keyed by session token.

    Games live only as long as the process and expire after ``ttl`` seconds
    without activity.
    """

    def __init__(self, ttl: int | None = None) -> None:
        self._ttl = ttl or config.session_ttl
        self._games: dict[str, tuple[BlackjackGame, datetime]] = {}

    def create_session_id(self, signed: bool = True) -> str:
        """
        Create a new session ID.

        Args:
            signed: If True, return a signed session token

        Returns:
            A new session ID (signed or unsigned based on parameter)
        """
        session_id = str(uuid4())
        if signed:
            return get_session_signer().sign(session_id)
        return session_id

    async def get(self, session_id: str) -> BlackjackGame | None:
        """Get the game for a session, refreshing its expiry."""
        if session_id not in self._games:
            return None

        game, expiry = self._games[session_id]
        if expiry < datetime.now():
            await self.delete(session_id)
            return None

        self._games[session_id] = (game, self._expiry())
        return game

    async def set(self, session_id: str, game: BlackjackGame) -> None:
        """
        Store a game, replacing any previous game for the session.

        Expired sessions are swept first, so abandoned games do not pile up
        between lookups.
        """
        await self.cleanup_expired()
        self._games[session_id] = (game, self._expiry())

    async def delete(self, session_id: str) -> None:
        """Delete session."""
        self._games.pop(session_id, None)

    async def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        expired = [
            sid for sid, (_, expiry) in self._games.items() if expiry < now
        ]
        for sid in expired:
            await self.delete(sid)
        if expired:
            logger.info("Expired %d game sessions", len(expired))
        return len(expired)

    def _expiry(self) -> datetime:
        return datetime.now() + timedelta(seconds=self._ttl)

    def __len__(self) -> int:
        return len(self._games)


# Global registry instance
_registry: GameRegistry | None = None


def get_registry() -> GameRegistry:
    """Get or create the game registry."""
    global _registry
    if _registry is None:
        _registry = GameRegistry()
    return _registry


def extract_session_id(token: str) -> str | None:
    """
    Extract the raw session ID from a signed token.

    Only the signature is checked; how long a session lives is up to the
    registry's sliding expiry.

    Args:
        token: The signed session token

    Returns:
        The raw session ID if valid, None otherwise
    """
    signer = get_session_signer()
    return signer.unsign(token)
