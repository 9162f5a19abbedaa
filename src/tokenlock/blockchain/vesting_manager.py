from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable

from pydantic import ValidationError

from tokenlock.core import safe_math
from tokenlock.core.access_control import PrincipalRegistry
from tokenlock.core.config import load_principal_addresses
from tokenlock.core.input_validation_schemas import LockedBalanceQueryInput, VestingSetupInput
from tokenlock.core.logging_config import setup_vesting_logging
from tokenlock.core.vesting_exceptions import InvalidScheduleError, VestingError, VestingValidationError

from .vesting_accrual import VestingAccrualEngine
from .vesting_ledger import VestingLedger
from .vesting_schedule import Pool, VestingSchedule

logger = logging.getLogger("tokenlock.blockchain.vesting_manager")


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg', 'invalid value')}"


class VestingManager:
    """
    Registers vesting schedules and reports locked balances across the
    team and presale pools.

    Every public operation runs under one reentrant lock, so accrual's
    read-modify-write never interleaves with registration.
    """

    def __init__(
        self,
        registry: PrincipalRegistry | None = None,
        time_provider: Callable[[], int] | None = None,
        engine: VestingAccrualEngine | None = None,
    ):
        self.registry = registry or PrincipalRegistry()
        self.engine = engine or VestingAccrualEngine()
        self.ledgers: dict[Pool, VestingLedger] = {pool: VestingLedger(pool) for pool in Pool.ordered()}
        self._time_provider = time_provider or (lambda: int(time.time()))
        self._lock = threading.RLock()
        logger.info("VestingManager initialized with deterministic time provider: %s", bool(time_provider))

    @classmethod
    def from_env(
        cls,
        time_provider: Callable[[], int] | None = None,
        configure_logging: bool = True,
    ) -> "VestingManager":
        """
        Build a manager whose principals come from TOKENLOCK_* environment variables.

        Unless configure_logging is False, the "tokenlock" logger is first set
        up with JSON output from the selected network config.
        """
        if configure_logging:
            setup_vesting_logging()
        registry = PrincipalRegistry.from_config(load_principal_addresses())
        return cls(registry=registry, time_provider=time_provider)

    def _current_time(self) -> int:
        timestamp = self._time_provider()
        try:
            return int(timestamp)
        except (TypeError, ValueError) as exc:
            raise ValueError("time_provider must return an integer timestamp") from exc

    # ==================== Registration ====================

    def setup_vesting(
        self,
        caller: str,
        pool: Pool | str,
        account: str,
        cliff_duration: int,
        period_length: int,
        period_amount: int,
        total_locked_amount: int,
    ) -> None:
        """
        Register the vesting schedule of an account in a pool.

        Any schedule the account already has in that pool is replaced.

        Raises:
            UnknownPoolError: If pool is not one of the four pools
            UnauthorizedError: If caller is not the pool's principal
            InvalidScheduleError: If account is empty, an amount is out of
                uint256 range or period_length is zero
        """
        pool = Pool.parse(pool)
        self.registry.require_pool_principal(caller, pool.value)

        try:
            data = VestingSetupInput(
                account=account,
                cliff_duration=cliff_duration,
                period_length=period_length,
                period_amount=period_amount,
                total_locked_amount=total_locked_amount,
            )
        except ValidationError as exc:
            raise InvalidScheduleError(
                f"Invalid vesting schedule: {_first_error(exc)}",
                details={"pool": pool.value},
            ) from exc

        schedule = VestingSchedule(
            cliff_duration=data.cliff_duration,
            period_length=data.period_length,
            period_amount=data.period_amount,
            remaining_locked=data.total_locked_amount,
            last_released_period_index=0,
        )
        with self._lock:
            self.ledgers[pool].put(data.account, schedule)

        logger.info(
            "Vesting schedule registered in %s for %s",
            pool.value,
            data.account,
            extra={
                "event": "vesting.setup",
                "pool": pool.value,
                "total_locked": data.total_locked_amount,
                "period_amount": data.period_amount,
            },
        )

    # ==================== Locked balance ====================

    def _accrue_all(self, account: str, reference_time: int, current_time: int) -> tuple[int, dict[Pool, VestingSchedule]]:
        """Accrue every active schedule of account without committing anything."""
        total = 0
        updated: dict[Pool, VestingSchedule] = {}
        for pool in Pool.ordered():
            schedule = self.ledgers[pool].get(account)
            if schedule is None or schedule.is_fully_vested:
                continue
            accrued = self.engine.accrue(schedule, reference_time, current_time)
            updated[pool] = accrued
            total = safe_math.add(total, accrued.remaining_locked)
        return total, updated

    def _validate_query(self, account: str, reference_time: int, current_time: int | None) -> LockedBalanceQueryInput:
        if current_time is None:
            current_time = self._current_time()
        try:
            return LockedBalanceQueryInput(
                account=account, reference_time=reference_time, current_time=current_time
            )
        except ValidationError as exc:
            raise VestingValidationError(f"Invalid locked balance query: {_first_error(exc)}") from exc

    def check_locked(
        self,
        caller: str,
        account: str,
        reference_time: int,
        current_time: int | None = None,
    ) -> int:
        """
        Total amount still locked for account across all pools.

        Each active schedule is accrued up to current_time and the result is
        written back to its ledger. Either every pool accrues and is
        committed, or the call raises and no ledger changes.

        Args:
            caller: Address of the calling principal
            account: Beneficiary account
            reference_time: Public sale timestamp the cliffs are measured
                from; 0 means vesting has not been anchored yet
            current_time: Evaluation instant, defaults to the time provider

        Raises:
            UnauthorizedError: If caller is not the query principal
            CliffNotElapsedError: If any active schedule is still in its cliff
            ArithmeticFaultError: On overflow, underflow or division by zero
        """
        self.registry.require_query_principal(caller)

        with self._lock:
            # Clock is read under the lock so commits land in time order
            query = self._validate_query(account, reference_time, current_time)
            try:
                total, updated = self._accrue_all(query.account, query.reference_time, query.current_time)
            except VestingError as exc:
                logger.warning(
                    "Locked balance query for %s rejected: %s",
                    query.account,
                    exc.message,
                    extra={"event": "vesting.check_locked_rejected", "error_type": type(exc).__name__},
                )
                raise
            for pool, schedule in updated.items():
                self.ledgers[pool].put(query.account, schedule)

        logger.debug(
            "Locked balance for %s: %d",
            query.account,
            total,
            extra={"event": "vesting.check_locked", "pools": [p.value for p in updated], "total_locked": total},
        )
        return total

    def preview_locked(self, account: str, reference_time: int, current_time: int | None = None) -> int:
        """Same result as check_locked but leaves every ledger untouched."""
        with self._lock:
            query = self._validate_query(account, reference_time, current_time)
            total, _ = self._accrue_all(query.account, query.reference_time, query.current_time)
        return total

    # ==================== Inspection ====================

    def get_schedule(self, pool: Pool | str, account: str) -> VestingSchedule | None:
        """Copy of the stored schedule, or None when the account has none in pool."""
        pool = Pool.parse(pool)
        with self._lock:
            schedule = self.ledgers[pool].get(account)
            return schedule.copy() if schedule is not None else None

    def get_vesting_info(self, account: str) -> dict[str, Any]:
        """Stored schedules of account per pool and their total still locked."""
        with self._lock:
            pools: dict[str, dict[str, Any] | None] = {}
            total = 0
            for pool in Pool.ordered():
                schedule = self.ledgers[pool].get(account)
                pools[pool.value] = schedule.to_dict() if schedule is not None else None
                if schedule is not None:
                    total = safe_math.add(total, schedule.remaining_locked)
        return {"account": account, "pools": pools, "total_locked": total}
