# =============================================================================
# File: tests/test_membership.py
# Description: Membership Authority gate
# =============================================================================

import pytest

from collabhub.common.exceptions.exceptions import AuthorizationError
from collabhub.membership.enums import Capability
from collabhub.membership.exceptions import CapabilityDeniedError, NotAMemberError
from collabhub.membership.read_models import Capabilities

from tests.fakes.scenario import ALICE, DAVE, EVE, PROJECT_ID


def test_capability_defaults_follow_table_defaults():
    caps = Capabilities()
    assert caps.has(Capability.MANAGE_TASKS)
    assert caps.has(Capability.MANAGE_FILES)
    assert caps.has(Capability.CHAT)
    assert not caps.has(Capability.CHANGE_NAME)
    assert not caps.has(Capability.ADD_MEMBERS)


@pytest.mark.asyncio
async def test_capabilities_of_member(authority):
    caps = await authority.capabilities_of(PROJECT_ID, ALICE)
    assert caps.chat is True


@pytest.mark.asyncio
async def test_non_member_is_hard_deny(authority):
    with pytest.raises(NotAMemberError) as exc_info:
        await authority.capabilities_of(PROJECT_ID, DAVE)
    assert isinstance(exc_info.value, AuthorizationError)
    assert exc_info.value.user_id == DAVE


@pytest.mark.asyncio
async def test_require_denies_missing_capability(authority):
    with pytest.raises(CapabilityDeniedError) as exc_info:
        await authority.require(PROJECT_ID, EVE, Capability.CHAT)
    assert exc_info.value.capability is Capability.CHAT


@pytest.mark.asyncio
async def test_require_passes_with_capability(authority):
    caps = await authority.require(PROJECT_ID, EVE, Capability.MANAGE_TASKS)
    assert caps.manage_tasks


@pytest.mark.asyncio
async def test_require_checks_membership_first(authority):
    with pytest.raises(NotAMemberError):
        await authority.require(PROJECT_ID, DAVE, Capability.MANAGE_TASKS)


@pytest.mark.asyncio
async def test_is_member(authority):
    assert await authority.is_member(PROJECT_ID, ALICE)
    assert not await authority.is_member(PROJECT_ID, DAVE)
