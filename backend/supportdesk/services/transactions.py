"""Transaction Writer — records card and crypto transactions against a pending support chat.

Invariants:
    - The chat must exist, have status pending, and include the caller as participant;
      anything else is reported as "Chat not found" (404)
    - agent_id / customer_id come from classify_participants (exactly one of each side)
    - A failed insert is rolled back and reported as 400
    - Status is always pending on creation
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from supportdesk.core.classify_participants import (
    ParticipantRecord, ResolvedParties, classify_participants,
)
from supportdesk.core.domain_types import (
    ChatStatus, TransactionStatus, TransactionVariant,
)
from supportdesk.core.errors import (
    ErrorContext, RequestValidationFailed, ResourceNotFoundError,
)
from supportdesk.models.chat import Chat
from supportdesk.models.chat_details import ChatDetails
from supportdesk.models.chat_participant import ChatParticipant
from supportdesk.models.transaction import Transaction
from supportdesk.models.user import User
from supportdesk.schemas.transaction import (
    CardTransactionCreate, CryptoTransactionCreate, TransactionCreateBase,
)

logger = logging.getLogger(__name__)


class TransactionWriter:
    """Creates Transaction rows for the calling agent."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_card(self, agent: User, body: CardTransactionCreate) -> Transaction:
        return await self._create(
            agent, body, TransactionVariant.CARD,
            card_type=body.card_type,
            card_number=body.card_number,
        )

    async def create_crypto(self, agent: User, body: CryptoTransactionCreate) -> Transaction:
        return await self._create(
            agent, body, TransactionVariant.CRYPTO,
            crypto_amount=body.crypto_amount,
            from_address=body.from_address,
            to_address=body.to_address,
        )

    async def _create(
        self,
        agent: User,
        body: TransactionCreateBase,
        variant: TransactionVariant,
        **variant_fields,
    ) -> Transaction:
        # rollback expires the caller row; only the captured id is safe afterwards
        agent_user_id = agent.id
        parties = await self.resolve_parties(body.chat_id, agent_user_id)
        transaction = Transaction(
            department_id=body.department_id,
            category_id=body.category_id,
            sub_category_id=body.sub_category_id,
            country_id=body.country_id,
            agent_id=parties.agent_id,
            customer_id=parties.customer_id,
            amount=body.amount,
            exchange_rate=body.exchange_rate,
            amount_naira=body.amount_naira,
            status=TransactionStatus.PENDING.value,
            **variant_fields,
        )
        try:
            self.db.add(transaction)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"{variant.value} transaction insert failed: {e}",
                extra={"user_id": agent_user_id, "chat_id": body.chat_id},
            )
            raise RequestValidationFailed(
                "Transaction not created",
                context=ErrorContext(user_id=agent_user_id, chat_id=body.chat_id),
            )

        logger.info(
            f"{variant.value} transaction created",
            extra={
                "user_id": agent_user_id,
                "chat_id": body.chat_id,
                "transaction_id": transaction.id,
            },
        )
        return transaction

    async def resolve_parties(self, chat_id: int, caller_id: int) -> ResolvedParties:
        """Load the pending chat the caller belongs to and classify its members."""
        caller_chats = select(ChatParticipant.chat_id).where(
            ChatParticipant.user_id == caller_id,
        )
        result = await self.db.execute(
            select(Chat)
            .join(ChatDetails, ChatDetails.chat_id == Chat.id)
            .where(Chat.id == chat_id)
            .where(Chat.id.in_(caller_chats))
            .where(ChatDetails.status == ChatStatus.PENDING.value)
        )
        chat = result.scalar_one_or_none()
        if chat is None or not chat.participants:
            raise ResourceNotFoundError(
                "Chat not found",
                ErrorContext(user_id=caller_id, chat_id=chat_id),
            )

        records = [
            ParticipantRecord(
                user_id=p.user_id,
                agent_id=p.user.agent.id if p.user.agent else None,
            )
            for p in chat.participants
        ]
        return classify_participants(records, chat_id=chat_id)
