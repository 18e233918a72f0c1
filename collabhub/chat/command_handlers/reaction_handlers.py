# =============================================================================
# File: collabhub/chat/command_handlers/reaction_handlers.py
# Description: Command handler for reaction toggles
# =============================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from collabhub.chat.commands import ToggleReactionCommand
from collabhub.chat.exceptions import MessageNotFoundError
from collabhub.chat.read_models import ReactionsUpdate
from collabhub.chat.value_objects import ensure_emoji
from collabhub.infra.cqrs.command_bus import ICommandHandler
from collabhub.infra.cqrs.decorators import command_handler
from collabhub.infra.metrics.realtime_metrics import reactions_toggled_total
from collabhub.membership.enums import Capability

if TYPE_CHECKING:
    from collabhub.infra.cqrs.handler_dependencies import HandlerDependencies

log = logging.getLogger("collabhub.chat.handlers.reaction")


@command_handler(ToggleReactionCommand)
class ToggleReactionHandler(ICommandHandler):
    """
    Toggle a reaction and return the fresh aggregate.

    Reacting requires the same gate as chatting: membership plus the chat
    capability. The target message must belong to the given project, so a
    member of one project cannot react inside another.
    """

    def __init__(self, deps: 'HandlerDependencies'):
        self.membership = deps.membership
        self.messages = deps.message_store
        self.ledger = deps.reaction_ledger

    async def handle(self, command: ToggleReactionCommand) -> ReactionsUpdate:
        await self.membership.require(command.project_id, command.user_id, Capability.CHAT)
        ensure_emoji(command.emoji)

        message = await self.messages.get(command.message_id)
        if message is None or message.project_id != command.project_id:
            raise MessageNotFoundError(command.message_id)

        applied = await self.ledger.toggle(command.message_id, command.user_id, command.emoji)
        reactions_toggled_total.labels(applied=applied.value).inc()
        log.debug(f"Reaction {command.emoji!r} {applied.value} on message {command.message_id} by {command.user_id}")

        reactions = await self.ledger.aggregate(command.message_id)
        return ReactionsUpdate(
            message_id=command.message_id,
            project_id=command.project_id,
            applied=applied.value,
            reactions=reactions,
        )
