from datetime import datetime

from billtrack.modules.api.models import Session, SessionResponse, SessionState
from billtrack.modules.billing import compute_payment, format_elapsed
from billtrack.modules.lifecycle import session_state


def to_view(session: Session, now: datetime) -> SessionResponse:
    """
    Project a session into its API representation.

    Running sessions are billed against now and carry no elapsed_display.
    Stopped sessions are billed against stopped_at and show the elapsed
    time between created_at and stopped_at.
    """
    state = session_state(session)
    payment = compute_payment(session.rate, session.created_at, session.stopped_at, now)

    elapsed_display = None
    if state is SessionState.STOPPED:
        elapsed_display = format_elapsed(payment.elapsed_seconds)

    return SessionResponse(
        id=session.id,
        status=state,
        created_at=session.created_at,
        updated_at=session.updated_at,
        stopped_at=session.stopped_at,
        title=session.title,
        category=session.category,
        rate=session.rate,
        billable_hours=payment.billable_hours,
        amount_owed=payment.amount_owed,
        elapsed_display=elapsed_display,
    )
