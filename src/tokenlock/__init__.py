"""
tokenlock - vesting lock tracking for team and presale token allocations.
"""

from tokenlock.blockchain.vesting_manager import VestingManager
from tokenlock.blockchain.vesting_schedule import Pool, VestingSchedule

__version__ = "0.1.0"

__all__ = ["VestingManager", "Pool", "VestingSchedule", "__version__"]
