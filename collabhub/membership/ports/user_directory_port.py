# =============================================================================
# File: collabhub/membership/ports/user_directory_port.py
# Description: Port interface for user and project directory lookups
# Pattern: Hexagonal Architecture / Ports & Adapters
# =============================================================================

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from collabhub.membership.read_models import UserSummary


@runtime_checkable
class UserDirectoryPort(Protocol):
    """
    Port: User directory

    Implemented by: UserReadRepo (collabhub/infra/read_repos/user_repo.py)
    """

    async def find_by_id(self, user_id: int) -> Optional[UserSummary]:
        ...

    async def find_roster(self, project_id: int, exclude_user_id: Optional[int] = None) -> List[UserSummary]:
        """Members of the project with display names and emails."""
        ...


@runtime_checkable
class ProjectDirectoryPort(Protocol):
    """
    Port: Project directory

    Implemented by: ProjectReadRepo (collabhub/infra/read_repos/project_repo.py)
    """

    async def get_title(self, project_id: int) -> Optional[str]:
        ...
