"""Chat-Group Writer — creates an admin-owned group chat and its member rows.

Invariants:
    - Chat, ChatGroup and every ChatParticipant are written in ONE transaction:
      either all rows commit or none do
    - Every requested agent id must resolve to a user; otherwise nothing is written
    - The admin is always a participant; user ids are deduplicated

Design Decisions:
    - flush() after the Chat insert gives the participant rows a chat id without
      committing; rollback() on any failure replaces the old compensating delete
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from supportdesk.core.domain_types import ChatType
from supportdesk.core.errors import InternalError, ErrorContext
from supportdesk.models.agent import Agent
from supportdesk.models.chat import Chat
from supportdesk.models.chat_group import ChatGroup
from supportdesk.models.chat_participant import ChatParticipant
from supportdesk.models.user import User

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to create chat group"


class ChatGroupWriter:
    """Creates group chats on behalf of an admin."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_group(
        self, admin: User, group_name: str, agent_ids: list[int],
    ) -> Chat:
        # rollback expires the caller row; only the captured id is safe afterwards
        admin_id = admin.id
        try:
            chat = Chat(
                chat_type=ChatType.GROUP_CHAT.value,
                chat_group=ChatGroup(group_name=group_name, admin_id=admin_id),
            )
            self.db.add(chat)
            await self.db.flush()

            member_ids = await self._resolve_agent_user_ids(agent_ids, chat.id, admin_id)
            for user_id in _with_admin(member_ids, admin_id):
                self.db.add(ChatParticipant(chat_id=chat.id, user_id=user_id))
            await self.db.flush()
            await self.db.commit()
        except InternalError:
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Chat group write failed, rolled back: {e}",
                extra={"user_id": admin_id},
            )
            raise InternalError(FAILURE_MESSAGE, ErrorContext(user_id=admin_id))

        await self.db.refresh(chat)
        logger.info(
            f"Chat group '{group_name}' created with {len(chat.participants)} participants",
            extra={"user_id": admin_id, "chat_id": chat.id},
        )
        return chat

    async def _resolve_agent_user_ids(
        self, agent_ids: list[int], chat_id: int, admin_id: int,
    ) -> list[int]:
        """Map agent ids to their user ids, in request order."""
        requested = list(dict.fromkeys(agent_ids))
        result = await self.db.execute(
            select(Agent.id, Agent.user_id).where(Agent.id.in_(requested)),
        )
        by_agent = {agent_id: user_id for agent_id, user_id in result.all()}

        missing = [a for a in requested if a not in by_agent]
        if not by_agent or missing:
            logger.warning(
                f"Agent lookup failed for chat group (missing={missing})",
                extra={"user_id": admin_id, "chat_id": chat_id},
            )
            raise InternalError(
                FAILURE_MESSAGE,
                ErrorContext(user_id=admin_id, chat_id=chat_id,
                             debug_info={"missing_agent_ids": missing}),
            )
        return [by_agent[a] for a in requested]


def _with_admin(member_ids: list[int], admin_id: int) -> list[int]:
    """Member user ids plus the admin, without duplicates."""
    return list(dict.fromkeys([*member_ids, admin_id]))
