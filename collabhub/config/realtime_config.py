# =============================================================================
# File: collabhub/config/realtime_config.py
# Description: Realtime chat / notification fan-out configuration
# =============================================================================

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from collabhub.common.base.base_config import BaseConfig, BASE_CONFIG_DICT


class RealtimeConfig(BaseConfig):
    """
    Realtime gateway configuration (REALTIME_ prefix).

    Usage:
        from collabhub.config.realtime_config import get_realtime_config

        config = get_realtime_config()
        limit = config.notification_preview_length
    """

    model_config = SettingsConfigDict(
        **BASE_CONFIG_DICT,
        env_prefix='REALTIME_',
        validate_assignment=True,
    )

    # =========================================================================
    # Notification Text
    # =========================================================================

    notification_preview_length: int = Field(
        default=120,
        ge=10,
        le=2000,
        description="Max characters of message body in member notifications (ellipsis included)"
    )

    notification_ellipsis: str = Field(
        default="...",
        description="Marker appended to truncated previews"
    )

    mention_preview_length: int = Field(
        default=200,
        ge=10,
        le=4000,
        description="Characters of message body carried in mention notifications and emails"
    )

    # =========================================================================
    # Connection Settings
    # =========================================================================

    max_message_size: int = Field(
        default=64 * 1024,
        ge=1024,
        description="Max inbound frame size in bytes"
    )

    send_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for a single outbound frame to one connection"
    )

    expected_disconnect_reasons: List[str] = Field(
        default_factory=lambda: [
            "transport close",
            "transport error",
            "ping timeout",
            "client namespace disconnect",
            "server namespace disconnect",
        ],
        description="Disconnect reasons classified as expected (transport-level closures)"
    )

    expected_close_codes: List[int] = Field(
        default_factory=lambda: [1000, 1001, 1005, 1006],
        description="WebSocket close codes classified as expected"
    )

    require_auth: bool = Field(
        default=False,
        description="Reject WebSocket handshakes without a valid JWT; when false, anonymous connections may register freely"
    )

    # =========================================================================
    # Side Effects
    # =========================================================================

    side_effect_failure_log_size: int = Field(
        default=500,
        ge=1,
        description="How many failed side-effect outcomes are retained for inspection"
    )

    side_effect_drain_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="How long shutdown waits for pending side effects"
    )

    def is_expected_disconnect(self, reason: str) -> bool:
        """True when the reason (text or close code) is a transport-level closure."""
        if str(reason).strip().lower() in {r.lower() for r in self.expected_disconnect_reasons}:
            return True
        try:
            return int(reason) in self.expected_close_codes
        except (TypeError, ValueError):
            return False


# =============================================================================
# Factory Function
# =============================================================================

@lru_cache(maxsize=1)
def get_realtime_config() -> RealtimeConfig:
    """Get realtime configuration singleton (cached)."""
    return RealtimeConfig()


def reset_realtime_config() -> None:
    """Reset config singleton (for testing)."""
    get_realtime_config.cache_clear()
