# =============================================================================
# File: collabhub/infra/read_repos/user_repo.py
# Description: PostgreSQL user and project directory lookups
# =============================================================================

from __future__ import annotations

from typing import List, Optional

from collabhub.infra.persistence import pg_client
from collabhub.membership.read_models import UserSummary


class UserReadRepo:
    """Implements UserDirectoryPort."""

    @staticmethod
    async def find_by_id(user_id: int) -> Optional[UserSummary]:
        row = await pg_client.fetchrow("SELECT id, name, email FROM users WHERE id = $1", user_id)
        return UserSummary.model_validate(dict(row)) if row else None

    @staticmethod
    async def find_roster(project_id: int, exclude_user_id: Optional[int] = None) -> List[UserSummary]:
        rows = await pg_client.fetch(
            """
            SELECT u.id, u.name, u.email
            FROM project_members pm
            JOIN users u ON u.id = pm.user_id
            WHERE pm.project_id = $1
              AND ($2::bigint IS NULL OR u.id <> $2::bigint)
            ORDER BY u.id
            """,
            project_id, exclude_user_id,
        )
        return [UserSummary.model_validate(dict(r)) for r in rows]


class ProjectReadRepo:
    """Implements ProjectDirectoryPort."""

    @staticmethod
    async def get_title(project_id: int) -> Optional[str]:
        return await pg_client.fetchval("SELECT title FROM projects WHERE id = $1", project_id)
