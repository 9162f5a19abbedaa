from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, conint, constr

from .safe_math import UINT256_MAX


def _within_uint256(value: int) -> int:
    if value > UINT256_MAX:
        raise ValueError("value exceeds uint256 range")
    return value


Uint256 = Annotated[conint(strict=True, ge=0), AfterValidator(_within_uint256)]
PositiveUint256 = Annotated[conint(strict=True, gt=0), AfterValidator(_within_uint256)]
Account = constr(strip_whitespace=True, min_length=1)


class VestingSetupInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    account: Account
    cliff_duration: Uint256
    period_length: PositiveUint256
    period_amount: Uint256
    total_locked_amount: Uint256


class LockedBalanceQueryInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    account: Account
    reference_time: Uint256
    current_time: Uint256
