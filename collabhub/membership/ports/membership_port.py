# =============================================================================
# File: collabhub/membership/ports/membership_port.py
# Description: Port interface for persisted project memberships
# Pattern: Hexagonal Architecture / Ports & Adapters
# =============================================================================

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from collabhub.membership.read_models import ProjectMembership


@runtime_checkable
class MembershipPort(Protocol):
    """
    Port: Project Membership lookup

    Defined by: Membership domain
    Implemented by: MembershipReadRepo (collabhub/infra/read_repos/membership_repo.py)
    """

    async def get_membership(self, project_id: int, user_id: int) -> Optional[ProjectMembership]:
        """Return the membership row or None when the user is not a member."""
        ...

    async def list_member_ids(self, project_id: int) -> List[int]:
        """All current member user ids of the project, ascending."""
        ...
