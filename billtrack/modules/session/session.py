import json
import logging
import uuid
from datetime import UTC, datetime
from typing import List, Optional, Tuple

from pydantic import ValidationError

from billtrack.modules.api.models import Session
from billtrack.modules.lifecycle import request_stop

logger = logging.getLogger(__name__)

SESSIONS_INDEX_KEY = "sessions:all"
EVENTS_CHANNEL = "events:session"
EVENTS_HISTORY_KEY = "session:events"


class SessionStoreError(RuntimeError):
    """Raised when a stored session record cannot be decoded."""


class SessionModule:
    def __init__(self, redis_client):
        """
        Initialize session store.

        Args:
            redis_client: Async Redis client (decode_responses=True)
        """
        self.redis = redis_client

    @staticmethod
    def _session_key(session_id: str) -> str:
        return f"session:{session_id}"

    @staticmethod
    def _stop_key(session_id: str) -> str:
        return f"session:{session_id}:stopped"

    async def create_session(
        self,
        title: str,
        category: str,
        rate: float,
        now: Optional[datetime] = None,
    ) -> Session:
        """
        Start a new work session.

        Args:
            title: Free-text label
            category: Free-text classification
            rate: Amount charged per billable hour
            now: Creation time, defaults to the current UTC time

        Returns:
            The stored running session

        Logic:
        1. Generate UUID for session
        2. Stamp created_at and updated_at
        3. Store session record
        4. Append to the creation-ordered index
        """
        now = now or datetime.now(UTC)
        session = Session(
            id=str(uuid.uuid4()),
            title=title,
            category=category,
            rate=rate,
            created_at=now,
            updated_at=now,
        )

        await self.redis.set(self._session_key(session.id), session.model_dump_json())
        await self.redis.rpush(SESSIONS_INDEX_KEY, session.id)

        logger.info(f"Created session {session.id} ({session.category}) at rate {session.rate}")
        await self._publish_event("session.created", session)

        return session

    async def get_session(self, session_id: str) -> Optional[Session]:
        """
        Get a session, running or stopped.

        Args:
            session_id: Session identifier

        Returns:
            Session or None if not found
        """
        data = await self.redis.get(self._session_key(session_id))
        if not data:
            return None
        return self._decode(session_id, data)

    async def list_sessions(self) -> List[Session]:
        """
        Get all sessions in creation order, stopped ones included.

        Records that are missing or cannot be decoded are logged and skipped.

        Returns:
            List of sessions
        """
        session_ids = await self.redis.lrange(SESSIONS_INDEX_KEY, 0, -1)

        sessions = []
        for session_id in session_ids:
            data = await self.redis.get(self._session_key(session_id))
            if not data:
                logger.warning(f"Session {session_id} is indexed but has no record")
                continue
            try:
                sessions.append(self._decode(session_id, data))
            except SessionStoreError:
                logger.warning(f"Skipping unreadable session {session_id}")

        return sessions

    async def stop_session(
        self, session_id: str, now: Optional[datetime] = None
    ) -> Optional[Tuple[Session, bool]]:
        """
        Stop a running session.

        Args:
            session_id: Session identifier
            now: Stop time, defaults to the current UTC time

        Returns:
            (session, stopped_by_this_call) or None if not found.
            Stopping an already stopped session returns it unchanged.

        Logic:
        1. Load the session; already stopped means nothing to do
        2. Claim the stop time with SET NX so only one caller wins
        3. Winner persists the stopped record
        4. Losers rebuild the same record from the winner's stop time and persist it
        """
        session = await self.get_session(session_id)
        if session is None:
            return None
        if session.is_stopped:
            return session, False

        now = now or datetime.now(UTC)
        claimed = await self.redis.set(self._stop_key(session_id), now.isoformat(), nx=True)

        if claimed:
            stopped = request_stop(session, now)
            await self.redis.set(self._session_key(session_id), stopped.model_dump_json())
            logger.info(f"Stopped session {session_id}")
            await self._publish_event("session.stopped", stopped)
            return stopped, True

        winner_stopped_at = await self.redis.get(self._stop_key(session_id))
        if not winner_stopped_at:
            raise SessionStoreError(f"Stop marker for session {session_id} disappeared")

        # The winner may have failed before writing its record; the rebuilt
        # record is identical to the one it would have written.
        stopped = request_stop(session, datetime.fromisoformat(winner_stopped_at))
        await self.redis.set(self._session_key(session_id), stopped.model_dump_json())

        logger.info(f"Session {session_id} was already stopped by a concurrent request")
        return stopped, False

    def _decode(self, session_id: str, data: str) -> Session:
        try:
            return Session.model_validate_json(data)
        except ValidationError as e:
            logger.error(f"Corrupt record for session {session_id}: {e}")
            raise SessionStoreError(f"Corrupt record for session {session_id}") from e

    async def _publish_event(self, event_type: str, session: Session):
        """Publish session event for monitoring"""
        event = {
            "type": event_type,
            "timestamp": datetime.now(UTC).isoformat(),
            "data": session.model_dump(mode="json"),
        }

        await self.redis.publish(EVENTS_CHANNEL, json.dumps(event))

        # Keep the last 1000 events for history
        await self.redis.lpush(EVENTS_HISTORY_KEY, json.dumps(event))
        await self.redis.ltrim(EVENTS_HISTORY_KEY, 0, 999)
