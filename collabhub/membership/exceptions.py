# =============================================================================
# File: collabhub/membership/exceptions.py
# Description: Membership domain exceptions
# =============================================================================

from collabhub.common.exceptions.exceptions import AuthorizationError
from collabhub.membership.enums import Capability


class NotAMemberError(AuthorizationError):
    """User holds no membership in the project"""
    def __init__(self, project_id: int, user_id: int):
        super().__init__(f"User {user_id} is not a member of project {project_id}")
        self.project_id = project_id
        self.user_id = user_id


class CapabilityDeniedError(AuthorizationError):
    """Membership exists but lacks the required capability"""
    def __init__(self, project_id: int, user_id: int, capability: Capability):
        super().__init__(
            f"User {user_id} lacks capability '{capability.value}' in project {project_id}"
        )
        self.project_id = project_id
        self.user_id = user_id
        self.capability = capability
