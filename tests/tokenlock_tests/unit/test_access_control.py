"""
Unit tests for PrincipalRegistry.

Coverage targets:
- Pool and query principals gate callers
- Owner-only principal updates and ownership transfer
- Empty identities rejected
"""

import pytest

from tokenlock.core.access_control import POOL_PRINCIPALS, Principal, PrincipalRegistry
from tokenlock.core.vesting_exceptions import (
    InvalidNewOwnerError,
    InvalidPrincipalError,
    UnauthorizedError,
)


def test_pool_principals_cover_every_pool():
    assert POOL_PRINCIPALS == {
        "team": Principal.TOKEN_CONTRACT,
        "presale1": Principal.PRESALE1,
        "presale2": Principal.PRESALE2,
        "presale3": Principal.PRESALE3,
    }


def test_require_pool_principal(registry):
    registry.require_pool_principal("0xtoken", "team")
    registry.require_pool_principal("0xpresale2", "presale2")
    with pytest.raises(UnauthorizedError) as exc_info:
        registry.require_pool_principal("0xpresale2", "presale1")
    assert exc_info.value.details["principal"] == "presale1"


def test_require_query_principal(registry):
    registry.require_query_principal("0xToken")
    with pytest.raises(UnauthorizedError):
        registry.require_query_principal("0xowner")


def test_unset_principal_matches_no_caller():
    registry = PrincipalRegistry(owner="0xowner")
    assert registry.is_principal("", Principal.PRESALE1) is False
    with pytest.raises(UnauthorizedError):
        registry.require_pool_principal("", "presale1")


def test_owner_sets_principal(registry):
    registry.set_principal("0xowner", Principal.PRESALE1, "0xNewPresale")
    assert registry.address_of(Principal.PRESALE1) == "0xnewpresale"
    registry.require_pool_principal("0xnewpresale", "presale1")
    with pytest.raises(UnauthorizedError):
        registry.require_pool_principal("0xpresale1", "presale1")

    change = registry.changes[-1]
    assert change["action"] == "set_principal"
    assert change["previous"] == "0xpresale1"
    assert change["new"] == "0xnewpresale"


def test_set_principal_accepts_principal_names(registry):
    registry.set_principal("0xowner", "token_contract", "0xtoken2")
    assert registry.address_of(Principal.TOKEN_CONTRACT) == "0xtoken2"


def test_non_owner_cannot_set_principal(registry):
    with pytest.raises(UnauthorizedError):
        registry.set_principal("0xtoken", Principal.PRESALE1, "0xattacker")
    assert registry.address_of(Principal.PRESALE1) == "0xpresale1"
    assert registry.changes == []


@pytest.mark.parametrize("address", ["", "   ", None])
def test_set_principal_rejects_empty_address(registry, address):
    with pytest.raises(InvalidPrincipalError):
        registry.set_principal("0xowner", Principal.PRESALE3, address)


def test_set_principal_cannot_replace_owner(registry):
    with pytest.raises(InvalidPrincipalError):
        registry.set_principal("0xowner", Principal.OWNER, "0xother")


def test_set_principal_rejects_unknown_principal_name(registry):
    with pytest.raises(InvalidPrincipalError) as exc_info:
        registry.set_principal("0xowner", "presale9", "0xother")
    assert exc_info.value.details["principal"] == "presale9"
    assert "presale3" in exc_info.value.details["valid"]
    assert registry.changes == []


def test_transfer_ownership(registry):
    registry.transfer_ownership("0xowner", "0xNewOwner")
    assert registry.owner == "0xnewowner"
    registry.require_owner("0xnewowner")
    with pytest.raises(UnauthorizedError):
        registry.require_owner("0xowner")
    assert registry.changes[-1]["action"] == "transfer_ownership"


def test_transfer_ownership_rejects_empty_identity(registry):
    with pytest.raises(InvalidNewOwnerError):
        registry.transfer_ownership("0xowner", "")
    assert registry.owner == "0xowner"


def test_from_config_skips_unset_principals():
    registry = PrincipalRegistry.from_config(
        {
            "owner": "0xOwner",
            "token_contract": "0xToken",
            "presale1": "",
            "presale2": "0xP2",
            "presale3": "",
        }
    )
    assert registry.owner == "0xowner"
    assert registry.principals == {
        Principal.TOKEN_CONTRACT: "0xtoken",
        Principal.PRESALE2: "0xp2",
    }
