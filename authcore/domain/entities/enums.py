from enum import Enum


class UserStatus(str, Enum):
    """
    Account status.

    Disabled accounts keep their row (and sessions until they next
    authenticate) but can neither log in nor use an existing session.
    """

    active = "active"
    disabled = "disabled"

    @property
    def can_authenticate(self) -> bool:
        return self is UserStatus.active
