"""Transaction Schemas — input coercion and required-field rules.

Tests cover:
    - camelCase aliases and snake_case field names both populate the model
    - Numeric strings are coerced
    - Zero / blank optional values become None, zero required values fail
    - Crypto requires exchangeRate, card does not
"""

import pytest
from pydantic import ValidationError

from supportdesk.schemas.common import MAX_ROW_ID
from supportdesk.schemas.transaction import (
    CardTransactionCreate, CryptoTransactionCreate,
)

BASE = {
    "departmentId": 1,
    "categoryId": 2,
    "subCategoryId": 3,
    "countryId": 4,
    "chatId": 42,
    "amount": 100,
}


def test_card_accepts_minimal_body():
    body = CardTransactionCreate.model_validate(BASE)
    assert body.chat_id == 42
    assert body.amount == 100.0
    assert body.exchange_rate is None
    assert body.card_type is None


def test_snake_case_names_also_accepted():
    body = CardTransactionCreate(
        department_id=1, category_id=2, sub_category_id=3, country_id=4,
        chat_id=5, amount=10,
    )
    assert body.sub_category_id == 3


def test_numeric_strings_are_coerced():
    body = CardTransactionCreate.model_validate(
        {**BASE, "chatId": "42", "amount": "99.5", "amountNaira": "150000"},
    )
    assert body.chat_id == 42
    assert body.amount == 99.5
    assert body.amount_naira == 150000.0


def test_blank_optional_values_become_none():
    body = CardTransactionCreate.model_validate(
        {**BASE, "exchangeRate": 0, "amountNaira": "", "cardNumber": ""},
    )
    assert body.exchange_rate is None
    assert body.amount_naira is None
    assert body.card_number is None


@pytest.mark.parametrize("field", list(BASE))
def test_required_fields(field):
    data = dict(BASE)
    del data[field]
    with pytest.raises(ValidationError):
        CardTransactionCreate.model_validate(data)


@pytest.mark.parametrize("field", ["amount", "chatId", "departmentId"])
def test_zero_required_value_is_rejected(field):
    with pytest.raises(ValidationError):
        CardTransactionCreate.model_validate({**BASE, field: 0})


def test_crypto_requires_exchange_rate():
    with pytest.raises(ValidationError):
        CryptoTransactionCreate.model_validate(BASE)
    with pytest.raises(ValidationError):
        CryptoTransactionCreate.model_validate({**BASE, "exchangeRate": 0})


def test_crypto_variant_fields():
    body = CryptoTransactionCreate.model_validate({
        **BASE,
        "exchangeRate": "1600",
        "cryptoAmount": "0.5",
        "fromAddress": "bc1qsender",
        "toAddress": "",
    })
    assert body.exchange_rate == 1600.0
    assert body.crypto_amount == 0.5
    assert body.from_address == "bc1qsender"
    assert body.to_address is None


@pytest.mark.parametrize("field", ["chatId", "departmentId", "categoryId", "subCategoryId", "countryId"])
def test_ids_are_bounded_by_integer_column(field):
    assert CardTransactionCreate.model_validate({**BASE, field: MAX_ROW_ID}) is not None
    with pytest.raises(ValidationError):
        CardTransactionCreate.model_validate({**BASE, field: MAX_ROW_ID + 1})
