"""In-memory session store keyed by the session cookie."""

import logging
import secrets
from collections.abc import Callable

from portal.session.lock import ReadWriteLock
from portal.session.seed import build_default_state
from portal.session.state import SessionState

logger = logging.getLogger(__name__)

# Number of random bytes behind each session identifier
SESSION_ID_BYTES = 16


def _short(session_id: str) -> str:
    """Truncate a session ID for log output."""
    return session_id[:6] + "..."


class SessionStore:
    """Thread-safe in-memory registry of session state.

    Maps opaque session identifiers to SessionState instances. A request
    handler calls resolve() with the identifier from the client cookie,
    mutates the returned state, and calls persist() before responding.

    resolve() on a stored identifier returns the stored instance itself,
    so mutations are visible to later requests even without persist().
    A brand new state returned for an unknown identifier is not stored
    until persist() is called. Two concurrent requests carrying the same
    identifier share one instance and may interleave field updates; only
    the map itself is guarded by the lock.

    Sessions are never evicted. The registry grows with the number of
    identifiers ever persisted and is lost on restart.
    """

    def __init__(
        self,
        state_factory: Callable[[], SessionState] = build_default_state,
    ) -> None:
        """Initialize the session store.

        Args:
            state_factory: Builds the default state for new sessions.
        """
        self._sessions: dict[str, SessionState] = {}
        self._lock = ReadWriteLock()
        self._state_factory = state_factory

    def resolve(self, session_id: str | None) -> tuple[SessionState, str | None]:
        """Look up the state for a session identifier.

        Args:
            session_id: Identifier presented by the client, if any.

        Returns:
            Tuple of (state, session_id). For a stored identifier this is the
            live stored state and the same identifier. For a missing or
            unknown identifier it is a freshly seeded state and None.
        """
        if session_id:
            with self._lock.read():
                state = self._sessions.get(session_id)
            if state is not None:
                return state, session_id

            logger.debug("Unknown session id %s, starting new session", _short(session_id))

        return self._state_factory(), None

    def persist(self, session_id: str | None, state: SessionState) -> str:
        """Store a session state and return its identifier.

        If session_id is None a new unique identifier is generated; the
        caller is responsible for handing it to the client. Persisting under
        an existing identifier overwrites the previous entry.

        Args:
            session_id: Identifier from resolve(), or None for a new session.
            state: The state to store.

        Returns:
            The identifier the state is stored under.
        """
        with self._lock.write():
            if session_id is None:
                session_id = secrets.token_urlsafe(SESSION_ID_BYTES)
                while session_id in self._sessions:
                    session_id = secrets.token_urlsafe(SESSION_ID_BYTES)
                logger.debug("Creating session %s", _short(session_id))

            self._sessions[session_id] = state

        return session_id

    def __contains__(self, session_id: object) -> bool:
        with self._lock.read():
            return session_id in self._sessions

    def count(self) -> int:
        """Get the number of stored sessions."""
        with self._lock.read():
            return len(self._sessions)
