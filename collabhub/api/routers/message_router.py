# =============================================================================
# File: collabhub/api/routers/message_router.py
# Description: Chat history and reaction aggregate endpoints
# =============================================================================

from __future__ import annotations

import logging
from typing import Annotated, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from collabhub.api.dependencies.state_deps import (
    get_membership_authority,
    get_message_store,
    get_reaction_ledger,
    get_user_directory,
)
from collabhub.api.models.realtime_api_models import MessageReactionsResponse
from collabhub.chat.command_handlers.message_handlers import UNKNOWN_SENDER_NAME
from collabhub.chat.ports.message_store_port import MessageStorePort
from collabhub.chat.ports.reaction_ledger_port import ReactionLedgerPort
from collabhub.chat.read_models import ChatMessageView
from collabhub.membership.authority import MembershipAuthority
from collabhub.membership.exceptions import NotAMemberError
from collabhub.membership.ports.user_directory_port import UserDirectoryPort
from collabhub.security.jwt_auth import get_current_user

log = logging.getLogger("collabhub.api.messages")

router = APIRouter(prefix="/messages", tags=["Chat"])


async def _require_member(authority: MembershipAuthority, project_id: int, user_id: int) -> None:
    try:
        await authority.capabilities_of(project_id, user_id)
    except NotAMemberError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


@router.get("/{project_id}", response_model=List[ChatMessageView])
async def get_project_messages(
    project_id: int,
    current_user: Annotated[int, Depends(get_current_user)],
    authority: MembershipAuthority = Depends(get_membership_authority),
    messages: MessageStorePort = Depends(get_message_store),
    users: UserDirectoryPort = Depends(get_user_directory),
) -> List[ChatMessageView]:
    """Full history of a project, oldest first, with sender names."""
    await _require_member(authority, project_id, current_user)

    history = await messages.list_by_project(project_id)

    names: Dict[int, str] = {}
    for sender_id in {m.sender_id for m in history}:
        user = await users.find_by_id(sender_id)
        names[sender_id] = user.name if user else UNKNOWN_SENDER_NAME

    return [
        ChatMessageView(**m.model_dump(), sender_name=names.get(m.sender_id, UNKNOWN_SENDER_NAME))
        for m in history
    ]


@router.get("/{project_id}/{message_id}/reactions", response_model=MessageReactionsResponse)
async def get_message_reactions(
    project_id: int,
    message_id: int,
    current_user: Annotated[int, Depends(get_current_user)],
    authority: MembershipAuthority = Depends(get_membership_authority),
    messages: MessageStorePort = Depends(get_message_store),
    reactions: ReactionLedgerPort = Depends(get_reaction_ledger),
) -> MessageReactionsResponse:
    await _require_member(authority, project_id, current_user)

    message = await messages.get(message_id)
    if message is None or message.project_id != project_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")

    return MessageReactionsResponse(messageId=message_id, reactions=await reactions.aggregate(message_id))
