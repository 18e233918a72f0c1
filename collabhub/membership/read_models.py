# =============================================================================
# File: collabhub/membership/read_models.py
# Description: Membership read models (PostgreSQL: project_members, users)
# =============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from collabhub.membership.enums import Capability


class Capabilities(BaseModel):
    """Capability flags of one membership. Defaults mirror the table defaults."""
    manage_tasks: bool = True
    manage_files: bool = True
    chat: bool = True
    change_name: bool = False
    add_members: bool = False

    model_config = ConfigDict(frozen=True)

    def has(self, capability: Capability) -> bool:
        return bool(getattr(self, capability.value))


class ProjectMembership(BaseModel):
    """Read model for a (project, user) membership row"""
    project_id: int
    user_id: int
    capabilities: Capabilities = Capabilities()
    role: str = "member"
    joined_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    """Directory entry for a user, as needed by chat and notifications"""
    id: int
    name: str
    email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
