"""
Principal-based access control for vesting operations.

Holds the administrative owner and the contract principals allowed to drive
the vesting core: the token contract (team pool registration and locked
balance queries) and one presale contract per presale pool.

Callers are identified by address only; proving ownership of an address is
the responsibility of the surrounding platform.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .vesting_exceptions import InvalidNewOwnerError, InvalidPrincipalError, UnauthorizedError

logger = logging.getLogger(__name__)


class Principal(Enum):
    """Identities the vesting core recognizes."""
    OWNER = "owner"
    TOKEN_CONTRACT = "token_contract"
    PRESALE1 = "presale1"
    PRESALE2 = "presale2"
    PRESALE3 = "presale3"


# Principal allowed to register schedules in each pool, keyed by Pool value
POOL_PRINCIPALS: Dict[str, Principal] = {
    "team": Principal.TOKEN_CONTRACT,
    "presale1": Principal.PRESALE1,
    "presale2": Principal.PRESALE2,
    "presale3": Principal.PRESALE3,
}

QUERY_PRINCIPAL = Principal.TOKEN_CONTRACT


def _normalize(address: Optional[str]) -> str:
    return (address or "").strip().lower()


@dataclass
class PrincipalRegistry:
    """
    Owner-administered registry of authorized principals.

    Security:
    - Only the owner can change principals or transfer ownership
    - Unset principals match no caller
    - Audit trail of every change
    """

    owner: str = ""

    # Principal -> normalized address
    principals: Dict[Principal, str] = field(default_factory=dict)

    # Audit log
    changes: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.owner = _normalize(self.owner)
        self.principals = {
            Principal(key): _normalize(value) for key, value in self.principals.items()
        }
        self.principals.pop(Principal.OWNER, None)

    @classmethod
    def from_config(cls, addresses: Mapping[str, str]) -> "PrincipalRegistry":
        """
        Build a registry from a principal-name -> address mapping.

        Args:
            addresses: Output of config.load_principal_addresses()
        """
        return cls(
            owner=addresses.get(Principal.OWNER.value, ""),
            principals={
                Principal(name): address
                for name, address in addresses.items()
                if name != Principal.OWNER.value and address
            },
        )

    # ==================== Checks ====================

    def address_of(self, principal: Principal) -> str:
        if principal is Principal.OWNER:
            return self.owner
        return self.principals.get(principal, "")

    def is_principal(self, caller: str, principal: Principal) -> bool:
        expected = self.address_of(principal)
        return bool(expected) and _normalize(caller) == expected

    def _require(self, caller: str, principal: Principal, operation: str) -> None:
        if not self.is_principal(caller, principal):
            logger.warning(
                "Access denied: %s is not %s",
                _normalize(caller)[:10],
                principal.value,
                extra={
                    "event": "access_control.unauthorized",
                    "principal": principal.value,
                    "operation": operation,
                },
            )
            raise UnauthorizedError(
                f"Caller is not authorized for {operation}",
                details={"principal": principal.value, "operation": operation},
            )

    def require_owner(self, caller: str) -> None:
        self._require(caller, Principal.OWNER, "admin")

    def require_pool_principal(self, caller: str, pool: str) -> None:
        """Raise UnauthorizedError unless caller registers schedules for pool."""
        self._require(caller, POOL_PRINCIPALS[pool], f"setup_vesting:{pool}")

    def require_query_principal(self, caller: str) -> None:
        self._require(caller, QUERY_PRINCIPAL, "check_locked")

    # ==================== Administration ====================

    def set_principal(self, caller: str, principal: Principal, address: str) -> None:
        """
        Assign the address of a contract principal.

        Raises:
            UnauthorizedError: If caller is not the owner
            InvalidPrincipalError: If principal is unknown or OWNER, or address is empty
        """
        self.require_owner(caller)
        try:
            principal = Principal(principal)
        except ValueError as exc:
            raise InvalidPrincipalError(
                f"Unknown principal: {principal}",
                details={"principal": str(principal), "valid": [p.value for p in Principal]},
            ) from exc
        if principal is Principal.OWNER:
            raise InvalidPrincipalError("Use transfer_ownership to change the owner")
        new_address = _normalize(address)
        if not new_address:
            raise InvalidPrincipalError(
                f"{principal.value} address cannot be empty",
                details={"principal": principal.value},
            )

        previous = self.principals.get(principal, "")
        self.principals[principal] = new_address
        self._record("set_principal", principal.value, previous, new_address)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """
        Transfer the owner capability.

        Raises:
            UnauthorizedError: If caller is not the owner
            InvalidNewOwnerError: If new_owner is empty
        """
        self.require_owner(caller)
        new_owner_norm = _normalize(new_owner)
        if not new_owner_norm:
            raise InvalidNewOwnerError("New owner cannot be empty")

        previous = self.owner
        self.owner = new_owner_norm
        self._record("transfer_ownership", Principal.OWNER.value, previous, new_owner_norm)

    def _record(self, action: str, principal: str, previous: str, new: str) -> None:
        self.changes.append({
            "action": action,
            "principal": principal,
            "previous": previous,
            "new": new,
            "timestamp": int(time.time()),
        })
        logger.info(
            "Principal %s changed",
            principal,
            extra={
                "event": f"access_control.{action}",
                "principal": principal,
                "new_address": new[:10],
            },
        )
