# =============================================================================
# File: collabhub/notification/exceptions.py
# Description: Notification domain exceptions
# =============================================================================

from collabhub.common.exceptions.exceptions import ResourceNotFoundError


class NotificationNotFoundError(ResourceNotFoundError):
    """Notification does not exist or belongs to another user"""
    def __init__(self, notification_id: int):
        super().__init__("Notification not found")
        self.notification_id = notification_id
