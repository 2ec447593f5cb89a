"""Chat Listings — read-only projections for the admin console.

Invariants:
    - Customer-agent listing: every customer_to_agent chat with participants and details
    - Team listing: every group_chat, plus team_chat rows the admin belongs to
    - Team listing hides the calling admin from participants
    - Team listing attaches at most one message per chat (the most recent)
"""

import logging

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from supportdesk.core.domain_types import ChatType
from supportdesk.models.chat import Chat
from supportdesk.models.chat_participant import ChatParticipant
from supportdesk.models.message import Message
from supportdesk.schemas.chat import (
    ChatGroupInfo, CustomerAgentChatView, MessageView, ParticipantView,
    TeamChatView,
)

logger = logging.getLogger(__name__)


async def list_customer_agent_chats(db: AsyncSession) -> list[CustomerAgentChatView]:
    result = await db.execute(
        select(Chat)
        .where(Chat.chat_type == ChatType.CUSTOMER_TO_AGENT.value)
        .order_by(Chat.id)
    )
    return [CustomerAgentChatView.model_validate(c) for c in result.scalars().all()]


async def list_team_chats(db: AsyncSession, admin_id: int) -> list[TeamChatView]:
    membership = (
        select(ChatParticipant.chat_id)
        .where(ChatParticipant.user_id == admin_id)
    )
    result = await db.execute(
        select(Chat)
        .where(or_(
            and_(
                Chat.chat_type == ChatType.TEAM_CHAT.value,
                Chat.id.in_(membership),
            ),
            Chat.chat_type == ChatType.GROUP_CHAT.value,
        ))
        .order_by(Chat.id)
    )
    chats = result.scalars().all()
    latest = await latest_messages(db, [c.id for c in chats])
    logger.debug(
        f"Team listing: {len(chats)} chats, {len(latest)} with messages",
        extra={"user_id": admin_id},
    )

    return [
        TeamChatView(
            id=c.id,
            chat_type=c.chat_type,
            created_at=c.created_at,
            updated_at=c.updated_at,
            chat_group=(
                ChatGroupInfo.model_validate(c.chat_group) if c.chat_group else None
            ),
            participants=[
                ParticipantView.model_validate(p)
                for p in c.participants if p.user_id != admin_id
            ],
            messages=[MessageView.model_validate(latest[c.id])] if c.id in latest else [],
        )
        for c in chats
    ]


async def latest_messages(db: AsyncSession, chat_ids: list[int]) -> dict[int, Message]:
    """Most recent message per chat, keyed by chat id."""
    if not chat_ids:
        return {}
    ranked = (
        select(
            Message.id,
            func.row_number().over(
                partition_by=Message.chat_id,
                order_by=(Message.created_at.desc(), Message.id.desc()),
            ).label("rank"),
        )
        .where(Message.chat_id.in_(chat_ids))
        .subquery()
    )
    result = await db.execute(
        select(Message).join(ranked, Message.id == ranked.c.id).where(ranked.c.rank == 1)
    )
    return {m.chat_id: m for m in result.scalars().all()}
