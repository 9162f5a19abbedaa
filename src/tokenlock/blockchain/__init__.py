"""
tokenlock Blockchain Module

Vesting components:
- VestingSchedule and Pool: per-account, per-pool lock terms
- VestingLedger: account -> schedule storage for one pool
- VestingAccrualEngine: cliff-plus-periodic release accounting
- VestingManager: schedule registration and locked balance aggregation
"""

__all__ = []
