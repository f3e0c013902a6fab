from datetime import datetime

from billtrack.modules.api.models import Session, SessionState


def session_state(session: Session) -> SessionState:
    """Get the lifecycle state of a session."""
    if session.stopped_at is not None:
        return SessionState.STOPPED
    return SessionState.RUNNING


def request_stop(session: Session, now: datetime) -> Session:
    """
    Apply a stop request to a session.

    Args:
        session: Current session record
        now: Time of the stop request

    Returns:
        The same session if it is already stopped, otherwise a copy with
        stopped_at and updated_at set to now. The input is never mutated.
    """
    if session_state(session) is SessionState.STOPPED:
        return session

    return session.model_copy(update={"stopped_at": now, "updated_at": now})
