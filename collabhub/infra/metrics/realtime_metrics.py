# collabhub/infra/metrics/realtime_metrics.py
"""
Realtime Metrics - Prometheus export for chat, reactions, notifications
and the connection layer.
"""

from prometheus_client import Counter, Histogram, Gauge


# ============================================================================
# Commands
# ============================================================================

command_counter = Counter(
    'collabhub_commands_total',
    'Commands dispatched through the command bus',
    ['command', 'outcome']
)

command_latency = Histogram(
    'collabhub_command_latency_seconds',
    'Command handling latency',
    ['command'],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)

# ============================================================================
# Chat
# ============================================================================

messages_persisted_total = Counter(
    'collabhub_messages_persisted_total',
    'Chat messages appended to the message store'
)

chat_errors_total = Counter(
    'collabhub_chat_errors_total',
    'chatError events sent to invoking connections',
    ['reason']
)

reactions_toggled_total = Counter(
    'collabhub_reactions_toggled_total',
    'Reaction toggles by outcome',
    ['applied']
)

mentions_resolved_total = Counter(
    'collabhub_mentions_total',
    'Mention tokens by resolution result',
    ['resolved']
)

# ============================================================================
# Notifications & side effects
# ============================================================================

notifications_created_total = Counter(
    'collabhub_notifications_created_total',
    'Notification rows persisted',
    ['kind']
)

notifications_failed_total = Counter(
    'collabhub_notifications_failed_total',
    'Recipients whose notification could not be persisted',
    ['kind']
)

side_effect_failures_total = Counter(
    'collabhub_side_effect_failures_total',
    'Best-effort side effects that failed',
    ['name']
)

side_effects_pending = Gauge(
    'collabhub_side_effects_pending',
    'Best-effort side effects still running'
)

# ============================================================================
# Connections
# ============================================================================

ws_connections_active = Gauge(
    'collabhub_connections_active',
    'Number of active realtime connections'
)

ws_disconnections_total = Counter(
    'collabhub_disconnections_total',
    'Realtime disconnections by classification',
    ['kind']
)

ws_send_failures_total = Counter(
    'collabhub_send_failures_total',
    'Outbound frames that failed to reach a connection',
    ['event']
)

ws_events_received_total = Counter(
    'collabhub_events_received_total',
    'Inbound realtime events',
    ['event']
)
