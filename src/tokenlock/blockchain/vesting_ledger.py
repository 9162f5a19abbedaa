from __future__ import annotations

import logging
from typing import Iterator

from .vesting_schedule import Pool, VestingSchedule

logger = logging.getLogger("tokenlock.blockchain.vesting_ledger")


class VestingLedger:
    """Account -> VestingSchedule storage for a single pool."""

    def __init__(self, pool: Pool):
        self.pool = pool
        # {account: VestingSchedule}
        self._schedules: dict[str, VestingSchedule] = {}

    def get(self, account: str) -> VestingSchedule | None:
        return self._schedules.get(account)

    def put(self, account: str, schedule: VestingSchedule) -> None:
        """Store a schedule, replacing any previous one for the account."""
        replaced = account in self._schedules
        self._schedules[account] = schedule
        logger.debug(
            "Ledger %s %s schedule for %s",
            self.pool.value,
            "replaced" if replaced else "stored",
            account,
            extra={"event": "vesting.ledger_put", "pool": self.pool.value, "replaced": replaced},
        )

    def accounts(self) -> Iterator[str]:
        return iter(list(self._schedules))

    def __contains__(self, account: object) -> bool:
        return account in self._schedules

    def __len__(self) -> int:
        return len(self._schedules)
