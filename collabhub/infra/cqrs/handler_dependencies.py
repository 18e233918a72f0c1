"""
Handler Dependencies - CollabHub

Dependencies container handed to every command handler.

Architecture: Ports & Adapters
- Ports are defined in domain: collabhub/{domain}/ports/
- Adapters implement ports: collabhub/infra/read_repos/*, collabhub/infra/email/*
- Handlers depend on port types, never on concrete adapters
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collabhub.chat.ports.message_store_port import MessageStorePort
    from collabhub.chat.ports.reaction_ledger_port import ReactionLedgerPort
    from collabhub.membership.authority import MembershipAuthority
    from collabhub.membership.ports.user_directory_port import UserDirectoryPort
    from collabhub.notification.ports.notification_store_port import NotificationStorePort


@dataclass
class HandlerDependencies:
    """
    Container for all handler dependencies, built once at startup.

    Tests build it from the in-memory fakes in tests/fakes/.
    """

    membership: 'MembershipAuthority'
    message_store: 'MessageStorePort'
    reaction_ledger: 'ReactionLedgerPort'
    notification_store: 'NotificationStorePort'
    users: 'UserDirectoryPort'
