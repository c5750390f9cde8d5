from datetime import datetime, timedelta
from uuid import uuid4

from src.app.services.presence_tracker import PresenceTracker
from src.domain.entities import UserStatus
from src.domain.presence import can_transition


class TestTransitions:
    def test_allowed(self):
        assert can_transition(UserStatus.offline, UserStatus.online)
        assert can_transition(UserStatus.online, UserStatus.away)
        assert can_transition(UserStatus.online, UserStatus.offline)
        assert can_transition(UserStatus.away, UserStatus.online)
        assert can_transition(UserStatus.away, UserStatus.offline)

    def test_offline_cannot_go_away(self):
        assert not can_transition(UserStatus.offline, UserStatus.away)

    def test_same_status_is_allowed(self):
        assert can_transition(UserStatus.away, UserStatus.away)


class FakeClock:
    def __init__(self):
        self.now = datetime(2025, 1, 1, 9, 0)

    def __call__(self):
        return self.now


class TestPresenceTracker:
    def test_idle_actor_is_reported_after_window(self):
        clock = FakeClock()
        tracker = PresenceTracker(auto_away_minutes=15, clock=clock)
        user_id = uuid4()
        tracker.mark_online(user_id)

        clock.now += timedelta(minutes=15)
        assert tracker.inactive() == []

        clock.now += timedelta(seconds=1)
        assert tracker.inactive() == [user_id]

    def test_touch_only_refreshes_tracked_actors(self):
        clock = FakeClock()
        tracker = PresenceTracker(clock=clock)
        tracked, untracked = uuid4(), uuid4()
        tracker.mark_online(tracked)

        clock.now += timedelta(minutes=10)
        tracker.touch(tracked)
        tracker.touch(untracked)

        assert tracker.last_seen(tracked) == clock.now
        assert untracked not in tracker

    def test_forget_and_clear(self):
        tracker = PresenceTracker()
        first, second = uuid4(), uuid4()
        tracker.mark_online(first)
        tracker.mark_online(second)

        tracker.forget(first)
        assert len(tracker) == 1

        tracker.clear()
        assert len(tracker) == 0
