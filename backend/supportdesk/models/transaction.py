"""Transaction ORM — card or crypto trade recorded by an agent against a support chat.

Invariants:
    - agent_id references agents.id; customer_id references users.id
    - status starts as pending
    - Card rows fill card_type/card_number; crypto rows fill crypto_amount/from/to addresses
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from supportdesk.db.base import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    department_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("departments.id"), nullable=False,
    )
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=False,
    )
    sub_category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sub_categories.id"), nullable=False,
    )
    country_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("countries.id"), nullable=False,
    )
    agent_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("agents.id"), nullable=False, index=True,
    )
    customer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )

    card_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    card_number: Mapped[str | None] = mapped_column(String(50), nullable=True)

    amount: Mapped[float] = mapped_column(Float, nullable=False)
    exchange_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    amount_naira: Mapped[float | None] = mapped_column(Float, nullable=True)

    crypto_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    from_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    to_address: Mapped[str | None] = mapped_column(String(255), nullable=True)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
