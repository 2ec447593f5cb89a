"""Transaction Schemas — card and crypto transaction inputs.

Invariants:
    - Required ids and amount must be present and positive (zero counts as missing)
    - Ids above MAX_ROW_ID are rejected here instead of overflowing the INTEGER column
    - Numeric strings are coerced ("100" -> 100.0)
    - Optional numeric fields: 0 or "" become None
    - Crypto variant additionally requires exchange_rate
"""

from datetime import datetime

from pydantic import Field, field_validator

from supportdesk.schemas.common import MAX_ROW_ID, CamelModel


def _blank_to_none(v):
    if v in ("", 0, None):
        return None
    return v


class TransactionCreateBase(CamelModel):
    department_id: int = Field(gt=0, le=MAX_ROW_ID)
    category_id: int = Field(gt=0, le=MAX_ROW_ID)
    sub_category_id: int = Field(gt=0, le=MAX_ROW_ID)
    country_id: int = Field(gt=0, le=MAX_ROW_ID)
    chat_id: int = Field(gt=0, le=MAX_ROW_ID)
    amount: float = Field(gt=0)
    exchange_rate: float | None = Field(None, gt=0)
    amount_naira: float | None = Field(None, gt=0)

    @field_validator("exchange_rate", "amount_naira", mode="before")
    @classmethod
    def optional_numbers(cls, v):
        return _blank_to_none(v)


class CardTransactionCreate(TransactionCreateBase):
    card_type: str | None = Field(None, max_length=50)
    card_number: str | None = Field(None, max_length=50)

    @field_validator("card_type", "card_number", mode="before")
    @classmethod
    def optional_strings(cls, v):
        return _blank_to_none(v)


class CryptoTransactionCreate(TransactionCreateBase):
    exchange_rate: float = Field(gt=0)
    crypto_amount: float | None = Field(None, gt=0)
    from_address: str | None = Field(None, max_length=255)
    to_address: str | None = Field(None, max_length=255)

    @field_validator("crypto_amount", "from_address", "to_address", mode="before")
    @classmethod
    def optional_crypto_fields(cls, v):
        return _blank_to_none(v)


class TransactionSummary(CamelModel):
    id: int
    department_id: int
    category_id: int
    sub_category_id: int
    country_id: int
    agent_id: int
    customer_id: int
    amount: float
    exchange_rate: float | None = None
    amount_naira: float | None = None
    card_type: str | None = None
    card_number: str | None = None
    crypto_amount: float | None = None
    from_address: str | None = None
    to_address: str | None = None
    status: str
    created_at: datetime
