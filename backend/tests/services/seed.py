"""Seed helpers — build users, agents, chats and messages directly in the test DB."""

from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from supportdesk.config import get_settings
from supportdesk.core.domain_types import ChatStatus, ChatType, UserRole
from supportdesk.infrastructure.security import create_access_token
from supportdesk.models import (
    Agent, Category, Chat, ChatDetails, ChatParticipant, Message, User,
)


class RecordingMailer:
    """Stands in for BrevoMailer; keeps every code it was asked to send."""

    api_key = "test"

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    async def send_verification_code(self, to_email: str, otp: str) -> bool:
        self.sent.append((to_email, otp))
        return True


def auth_headers(user: User) -> dict:
    settings = get_settings()
    token = create_access_token(
        user.id, user.username, user.role,
        secret_key=settings.jwt_secret_key, algorithm=settings.jwt_algorithm,
        expires_delta=timedelta(minutes=5),
    )
    return {"Authorization": f"Bearer {token}"}


async def make_user(
    db: AsyncSession, username: str, role: UserRole = UserRole.CUSTOMER,
    user_id: int | None = None, password: str = "not-a-hash",
) -> User:
    user = User(
        id=user_id,
        username=username,
        email=f"{username}@example.com",
        firstname=username.capitalize(),
        lastname="Tester",
        password=password,
        role=role.value,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def make_agent(
    db: AsyncSession, username: str, agent_id: int | None = None,
) -> tuple[User, Agent]:
    user = await make_user(db, username, UserRole.AGENT)
    agent = Agent(id=agent_id, user_id=user.id)
    db.add(agent)
    await db.commit()
    await db.refresh(agent)
    return user, agent


async def make_support_chat(
    db: AsyncSession,
    members: list[User],
    status: ChatStatus = ChatStatus.PENDING,
    chat_id: int | None = None,
    category: Category | None = None,
) -> Chat:
    chat = Chat(id=chat_id, chat_type=ChatType.CUSTOMER_TO_AGENT.value)
    db.add(chat)
    await db.flush()
    db.add(ChatDetails(
        chat_id=chat.id, status=status.value,
        category_id=category.id if category else None,
    ))
    for member in members:
        db.add(ChatParticipant(chat_id=chat.id, user_id=member.id))
    await db.commit()
    return chat


async def make_team_chat(
    db: AsyncSession, members: list[User], chat_type: ChatType = ChatType.TEAM_CHAT,
) -> Chat:
    chat = Chat(chat_type=chat_type.value)
    db.add(chat)
    await db.flush()
    for member in members:
        db.add(ChatParticipant(chat_id=chat.id, user_id=member.id))
    await db.commit()
    return chat


async def add_message(
    db: AsyncSession, chat: Chat, sender: User, text: str, minutes_ago: int = 0,
) -> Message:
    message = Message(
        chat_id=chat.id, sender_id=sender.id, message=text,
        created_at=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
    )
    db.add(message)
    await db.commit()
    return message


