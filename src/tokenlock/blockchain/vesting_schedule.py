from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any

from tokenlock.core.vesting_exceptions import UnknownPoolError


class Pool(Enum):
    """The four independent allocation pools."""

    TEAM = "team"
    PRESALE1 = "presale1"
    PRESALE2 = "presale2"
    PRESALE3 = "presale3"

    @classmethod
    def ordered(cls) -> tuple["Pool", ...]:
        """Fixed order in which pools are aggregated."""
        return (cls.TEAM, cls.PRESALE1, cls.PRESALE2, cls.PRESALE3)

    @classmethod
    def parse(cls, value: "Pool | str") -> "Pool":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise UnknownPoolError(
                f"Unknown vesting pool: {value!r}",
                details={"pool": value, "valid": [p.value for p in cls]},
            ) from exc


@dataclass
class VestingSchedule:
    """
    Lock terms and remaining balance of one account in one pool.

    ``remaining_locked`` only decreases after creation and reaching zero marks
    the schedule as fully vested. ``last_released_period_index`` counts the
    periods already applied and only increases.
    """

    cliff_duration: int
    period_length: int
    period_amount: int
    remaining_locked: int
    last_released_period_index: int = 0

    @property
    def is_fully_vested(self) -> bool:
        return self.remaining_locked == 0

    def copy(self) -> "VestingSchedule":
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
