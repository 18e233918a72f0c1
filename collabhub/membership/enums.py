# =============================================================================
# File: collabhub/membership/enums.py
# Description: Membership domain enumerations
# =============================================================================

from enum import Enum


class Capability(str, Enum):
    """Named permission flags on a project membership"""
    MANAGE_TASKS = "manage_tasks"
    MANAGE_FILES = "manage_files"
    CHAT = "chat"
    CHANGE_NAME = "change_name"
    ADD_MEMBERS = "add_members"


class MemberRole(str, Enum):
    """Role labels stored with a membership"""
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
