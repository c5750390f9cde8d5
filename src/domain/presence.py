"""Presence status transitions."""

from src.domain.entities import UserStatus

VALID_STATUS_TRANSITIONS = {
    UserStatus.offline: (UserStatus.online,),
    UserStatus.online: (UserStatus.away, UserStatus.offline),
    UserStatus.away: (UserStatus.online, UserStatus.offline),
}

AUTO_AWAY_MINUTES = 15


def can_transition(current: UserStatus, new: UserStatus) -> bool:
    """Staying in the same status is always allowed"""
    if current == new:
        return True
    return UserStatus(new) in VALID_STATUS_TRANSITIONS.get(UserStatus(current), ())
