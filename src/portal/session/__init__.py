"""Session management for the portal."""

from portal.session.seed import build_default_state
from portal.session.state import PlanAction, PlanStatus, Role, SessionState
from portal.session.store import SessionStore

__all__ = [
    "PlanAction",
    "PlanStatus",
    "Role",
    "SessionState",
    "SessionStore",
    "build_default_state",
]
