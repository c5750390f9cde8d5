"""
Presence tracker.

Advisory, process-local map of actor id -> last-seen timestamp. Created at
application startup and cleared at shutdown; losing it only means idle
actors are not flipped to away until they are seen again.
"""

from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional
from uuid import UUID

from src.domain.base import utcnow
from src.domain.presence import AUTO_AWAY_MINUTES


class PresenceTracker:
    def __init__(
        self,
        auto_away_minutes: int = AUTO_AWAY_MINUTES,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.auto_away = timedelta(minutes=auto_away_minutes)
        self._clock = clock
        self._last_seen: Dict[UUID, datetime] = {}

    def mark_online(self, user_id: UUID) -> None:
        self._last_seen[user_id] = self._clock()

    def touch(self, user_id: UUID) -> None:
        """Refresh activity for an actor that is already tracked"""
        if user_id in self._last_seen:
            self._last_seen[user_id] = self._clock()

    def forget(self, user_id: UUID) -> None:
        self._last_seen.pop(user_id, None)

    def last_seen(self, user_id: UUID) -> Optional[datetime]:
        return self._last_seen.get(user_id)

    def inactive(self, now: Optional[datetime] = None) -> List[UUID]:
        """Tracked actors idle for longer than the auto-away window"""
        now = now or self._clock()
        return [user_id for user_id, seen in self._last_seen.items() if now - seen > self.auto_away]

    def clear(self) -> None:
        self._last_seen.clear()

    def __len__(self) -> int:
        return len(self._last_seen)

    def __contains__(self, user_id: UUID) -> bool:
        return user_id in self._last_seen
