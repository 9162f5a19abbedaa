from __future__ import annotations

import logging

from tokenlock.core import safe_math
from tokenlock.core.vesting_exceptions import CliffNotElapsedError

from .vesting_schedule import VestingSchedule

logger = logging.getLogger("tokenlock.blockchain.vesting_accrual")


class VestingAccrualEngine:
    """
    Advances a schedule to the number of release periods due at a given time.

    Release is periods-due-inclusive: the moment the cliff ends the first
    period is already due. The period count is computed by division, so the
    cost does not depend on how long the schedule has been running.
    """

    def periods_due(self, schedule: VestingSchedule, reference_time: int, current_time: int) -> int:
        """
        Number of periods released in total as of current_time.

        Raises:
            CliffNotElapsedError: If current_time is not past the cliff end
            ArithmeticFaultError: On overflow or a zero period length
        """
        cliff_end = safe_math.add(reference_time, schedule.cliff_duration)
        if current_time <= cliff_end:
            raise CliffNotElapsedError(
                f"Cliff ends at {cliff_end}, current time is {current_time}",
                details={"cliff_end": cliff_end, "current_time": current_time},
            )
        elapsed = safe_math.sub(current_time, cliff_end)
        return safe_math.add(safe_math.div(elapsed, schedule.period_length), 1)

    def accrue(self, schedule: VestingSchedule, reference_time: int, current_time: int) -> VestingSchedule:
        """
        Return a copy of schedule with remaining_locked advanced to current_time.

        The input schedule is never modified; callers commit the returned copy
        once every schedule in the operation has accrued successfully.

        A fully vested schedule or a zero reference_time (vesting not yet
        anchored) is returned unchanged.
        """
        if schedule.remaining_locked == 0 or reference_time == 0:
            return schedule.copy()

        periods_since_cliff = self.periods_due(schedule, reference_time, current_time)
        new_periods = safe_math.sub(periods_since_cliff, schedule.last_released_period_index)
        released = safe_math.mul(schedule.period_amount, new_periods)

        remaining = safe_math.sub_clamped(schedule.remaining_locked, released)
        if released > schedule.remaining_locked or remaining < schedule.period_amount:
            # Final partial period vests in full
            remaining = 0

        updated = schedule.copy()
        updated.remaining_locked = remaining
        updated.last_released_period_index = periods_since_cliff

        if new_periods:
            logger.debug(
                "Accrued %d period(s): released %d, remaining %d",
                new_periods,
                schedule.remaining_locked - remaining,
                remaining,
                extra={
                    "event": "vesting.accrued",
                    "periods": periods_since_cliff,
                    "remaining": remaining,
                },
            )
        return updated
