"""Country ORM — reference data for transaction classification."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from supportdesk.db.base import Base


class Country(Base):
    __tablename__ = "countries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
