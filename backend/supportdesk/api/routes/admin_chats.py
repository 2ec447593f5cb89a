"""Admin Chat Routes — chat-group creation and chat listings for admins.

Invariants:
    - Every endpoint is gated by require_admin (401 for any other role, no writes)
    - Responses use the {status, data, message} envelope
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from supportdesk.api.dependencies import require_admin
from supportdesk.api.responses import api_response
from supportdesk.infrastructure.database import get_db
from supportdesk.models.user import User
from supportdesk.schemas.chat import ChatGroupCreate, ChatGroupSummary
from supportdesk.services.chat_groups import ChatGroupWriter
from supportdesk.services.chat_queries import (
    list_customer_agent_chats, list_team_chats,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/admin/chats", tags=["admin-chats"])


@router.post("/groups", status_code=status.HTTP_201_CREATED)
async def create_chat_group(
    body: ChatGroupCreate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create a group chat with the given agents plus the calling admin."""
    chat = await ChatGroupWriter(db).create_group(
        admin, body.group_name, [p.id for p in body.participants],
    )
    return api_response(
        status.HTTP_201_CREATED,
        ChatGroupSummary.model_validate(chat),
        "Chat group created successfully",
    )


@router.get("/customer-agent")
async def get_customer_agent_chats(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    chats = await list_customer_agent_chats(db)
    return api_response(status.HTTP_200_OK, chats, "Chats found")


@router.get("/team")
async def get_team_chats(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Group chats and the admin's team chats, each with its latest message."""
    chats = await list_team_chats(db, admin.id)
    return api_response(status.HTTP_200_OK, chats, "Chats fetched successfully")
