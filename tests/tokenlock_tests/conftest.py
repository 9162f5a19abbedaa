import logging

import pytest

from tokenlock.blockchain.vesting_manager import VestingManager
from tokenlock.core.access_control import Principal, PrincipalRegistry

T0 = 1_700_000_000

OWNER = "0xowner"
TOKEN = "0xtoken"
PRESALE1 = "0xpresale1"
PRESALE2 = "0xpresale2"
PRESALE3 = "0xpresale3"


class ManualClock:
    def __init__(self, start_time: int):
        self.current_time = start_time

    def now(self) -> int:
        return self.current_time

    def advance(self, seconds: int):
        self.current_time += seconds


@pytest.fixture
def clock():
    return ManualClock(start_time=T0)


@pytest.fixture
def registry():
    return PrincipalRegistry(
        owner=OWNER,
        principals={
            Principal.TOKEN_CONTRACT: TOKEN,
            Principal.PRESALE1: PRESALE1,
            Principal.PRESALE2: PRESALE2,
            Principal.PRESALE3: PRESALE3,
        },
    )


@pytest.fixture
def manager(registry, clock):
    return VestingManager(registry=registry, time_provider=clock.now)


@pytest.fixture
def cleanup_loggers():
    """Names appended here get their handlers closed and level reset after the test."""
    names = []
    yield names
    for name in names:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
