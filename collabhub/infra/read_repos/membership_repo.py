# =============================================================================
# File: collabhub/infra/read_repos/membership_repo.py
# Description: PostgreSQL membership lookups
# =============================================================================

from __future__ import annotations

import logging
from typing import List, Optional

from collabhub.infra.persistence import pg_client
from collabhub.membership.read_models import Capabilities, ProjectMembership

log = logging.getLogger("collabhub.membership.read_repo")


class MembershipReadRepo:
    """Implements MembershipPort on project_members."""

    @staticmethod
    async def get_membership(project_id: int, user_id: int) -> Optional[ProjectMembership]:
        row = await pg_client.fetchrow(
            """
            SELECT project_id, user_id, can_manage_tasks, can_manage_files, can_chat,
                   can_change_project_name, can_add_members, member_role, joined_at
            FROM project_members
            WHERE project_id = $1 AND user_id = $2
            """,
            project_id, user_id,
        )
        if row is None:
            return None

        return ProjectMembership(
            project_id=row["project_id"],
            user_id=row["user_id"],
            capabilities=Capabilities(
                manage_tasks=row["can_manage_tasks"],
                manage_files=row["can_manage_files"],
                chat=row["can_chat"],
                change_name=row["can_change_project_name"],
                add_members=row["can_add_members"],
            ),
            role=row["member_role"],
            joined_at=row["joined_at"],
        )

    @staticmethod
    async def list_member_ids(project_id: int) -> List[int]:
        rows = await pg_client.fetch(
            "SELECT user_id FROM project_members WHERE project_id = $1 ORDER BY user_id",
            project_id,
        )
        return [r["user_id"] for r in rows]
