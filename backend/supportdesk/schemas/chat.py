"""Chat Schemas — chat-group creation input and listing projections.

Invariants:
    - ChatGroupCreate.group_name: 1-100 chars, stripped
    - Participant references are agent ids (resolved to user ids by the service)
    - Listing projections expose only id/username/names/role of a user
"""

from datetime import datetime

from pydantic import Field, field_validator

from supportdesk.schemas.common import MAX_ROW_ID, CamelModel


class ParticipantRef(CamelModel):
    """Agent reference in a chat-group request."""
    id: int = Field(gt=0, le=MAX_ROW_ID)


class ChatGroupCreate(CamelModel):
    participants: list[ParticipantRef]
    group_name: str = Field(min_length=1, max_length=100)

    @field_validator("group_name")
    @classmethod
    def strip_group_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("groupName cannot be empty or whitespace")
        return v


class ChatGroupInfo(CamelModel):
    group_name: str
    admin_id: int


class ChatGroupSummary(CamelModel):
    """Created group chat returned from POST."""
    id: int
    chat_type: str
    created_at: datetime
    updated_at: datetime
    chat_group: ChatGroupInfo | None = None


# --- Listing projections -----------------------------------------------------

class UserSummary(CamelModel):
    id: int
    username: str
    firstname: str
    lastname: str
    role: str


class ParticipantView(CamelModel):
    user: UserSummary


class CategoryView(CamelModel):
    id: int
    title: str


class ChatDetailsView(CamelModel):
    status: str
    category: CategoryView | None = None


class CustomerAgentChatView(CamelModel):
    id: int
    chat_type: str
    created_at: datetime
    updated_at: datetime
    participants: list[ParticipantView]
    chat_details: ChatDetailsView | None = None


class MessageView(CamelModel):
    id: int
    chat_id: int
    sender_id: int
    message: str
    is_read: bool
    created_at: datetime


class TeamChatView(CamelModel):
    id: int
    chat_type: str
    created_at: datetime
    updated_at: datetime
    chat_group: ChatGroupInfo | None = None
    participants: list[ParticipantView]
    messages: list[MessageView]
