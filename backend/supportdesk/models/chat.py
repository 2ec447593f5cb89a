"""Chat ORM — container entity for a conversation.

Invariants:
    - chat_type is one of ChatType values
    - group_chat rows own one ChatGroup; customer_to_agent rows own one ChatDetails
    - participants, chat_group and chat_details are deleted with the chat

Design Decisions:
    - selectin loading for participants/group/details: async sessions cannot lazy-load
    - No messages relationship: listings fetch only the latest message per chat
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from supportdesk.db.base import Base


class Chat(Base):
    __tablename__ = "chats"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chat_type: Mapped[str] = mapped_column(String(30), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    participants: Mapped[list["ChatParticipant"]] = relationship(
        "ChatParticipant", back_populates="chat",
        cascade="all, delete-orphan", lazy="selectin",
    )
    chat_group: Mapped["ChatGroup"] = relationship(
        "ChatGroup", back_populates="chat", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )
    chat_details: Mapped["ChatDetails"] = relationship(
        "ChatDetails", back_populates="chat", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )
