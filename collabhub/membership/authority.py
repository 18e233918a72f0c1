# =============================================================================
# File: collabhub/membership/authority.py
# Description: Membership Authority - capability lookup for (project, user)
# =============================================================================

from __future__ import annotations

import logging

from collabhub.membership.enums import Capability
from collabhub.membership.exceptions import NotAMemberError, CapabilityDeniedError
from collabhub.membership.ports.membership_port import MembershipPort
from collabhub.membership.read_models import Capabilities

log = logging.getLogger("collabhub.membership.authority")


class MembershipAuthority:
    """
    Pure lookup against persisted membership. No side effects.

    NotAMemberError is a hard deny for every action in the realtime core;
    chat additionally requires Capability.CHAT.
    """

    def __init__(self, memberships: MembershipPort):
        self._memberships = memberships

    async def capabilities_of(self, project_id: int, user_id: int) -> Capabilities:
        membership = await self._memberships.get_membership(project_id, user_id)
        if membership is None:
            raise NotAMemberError(project_id, user_id)
        return membership.capabilities

    async def require(self, project_id: int, user_id: int, capability: Capability) -> Capabilities:
        """Raise unless the user is a member holding the capability."""
        capabilities = await self.capabilities_of(project_id, user_id)
        if not capabilities.has(capability):
            log.debug(f"Capability {capability.value} denied for user {user_id} in project {project_id}")
            raise CapabilityDeniedError(project_id, user_id, capability)
        return capabilities

    async def is_member(self, project_id: int, user_id: int) -> bool:
        return await self._memberships.get_membership(project_id, user_id) is not None
