"""Agent Transaction Routes — card and crypto transaction creation.

Invariants:
    - Gated by require_agent (401 for any other role, no Transaction row)
    - Body validation (400) runs after the role check and before any chat lookup
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from supportdesk.api.dependencies import require_agent
from supportdesk.api.responses import api_response
from supportdesk.infrastructure.database import get_db
from supportdesk.models.user import User
from supportdesk.schemas.transaction import (
    CardTransactionCreate, CryptoTransactionCreate, TransactionSummary,
)
from supportdesk.services.transactions import TransactionWriter

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/agent/transactions", tags=["agent-transactions"])


@router.post("/card", status_code=status.HTTP_201_CREATED)
async def create_card_transaction(
    body: CardTransactionCreate,
    agent: User = Depends(require_agent),
    db: AsyncSession = Depends(get_db),
):
    transaction = await TransactionWriter(db).create_card(agent, body)
    return api_response(
        status.HTTP_201_CREATED,
        TransactionSummary.model_validate(transaction),
        "Transaction created successfully",
    )


@router.post("/crypto", status_code=status.HTTP_201_CREATED)
async def create_crypto_transaction(
    body: CryptoTransactionCreate,
    agent: User = Depends(require_agent),
    db: AsyncSession = Depends(get_db),
):
    transaction = await TransactionWriter(db).create_crypto(agent, body)
    return api_response(
        status.HTTP_201_CREATED,
        TransactionSummary.model_validate(transaction),
        "Transaction created successfully",
    )
