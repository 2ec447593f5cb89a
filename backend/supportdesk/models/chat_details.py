"""ChatDetails ORM — status and category of a customer support chat.

Invariants:
    - status is one of ChatStatus values; transactions require pending
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from supportdesk.db.base import Base


class ChatDetails(Base):
    __tablename__ = "chat_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    chat_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("chats.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    category_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=True,
    )

    chat: Mapped["Chat"] = relationship("Chat", back_populates="chat_details")
    category: Mapped["Category"] = relationship("Category", lazy="selectin")
