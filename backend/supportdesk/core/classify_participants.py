"""Participant Classification — splits a chat's members into agent side and customer side.

Invariants:
    - classify_participants is PURE: operates on already-loaded participant records
    - Agent side contributes the Agent profile id, customer side the raw user id
    - Exactly one of each side is required; anything else raises ParticipantResolutionError

Design Decisions:
    - Ambiguity is an explicit error instead of "last one wins" iteration: a
      transaction attributed to the wrong agent is worse than a rejected request
"""

from dataclasses import dataclass
from typing import Protocol

from supportdesk.core.domain_types import AgentId, UserId
from supportdesk.core.errors import ParticipantResolutionError


class ParticipantLike(Protocol):
    """Structural contract: a chat member with an optional agent profile id."""
    user_id: int
    agent_id: int | None


@dataclass(frozen=True)
class ParticipantRecord:
    """Flat projection of a ChatParticipant joined to its user's agent profile."""
    user_id: int
    agent_id: int | None = None


@dataclass(frozen=True)
class ResolvedParties:
    """The two sides a transaction is written against."""
    agent_id: AgentId
    customer_id: UserId


def classify_participants(
    participants: list[ParticipantLike], chat_id: int | None = None,
) -> ResolvedParties:
    """Resolve exactly one agent id and one customer id from chat participants."""
    agent_ids = sorted({p.agent_id for p in participants if p.agent_id is not None})
    customer_ids = sorted({p.user_id for p in participants if p.agent_id is None})

    if len(agent_ids) != 1:
        raise ParticipantResolutionError(
            _side_message("agent", len(agent_ids)), chat_id=chat_id,
        )
    if len(customer_ids) != 1:
        raise ParticipantResolutionError(
            _side_message("customer", len(customer_ids)), chat_id=chat_id,
        )
    return ResolvedParties(
        agent_id=AgentId(agent_ids[0]), customer_id=UserId(customer_ids[0]),
    )


def _side_message(side: str, count: int) -> str:
    if count == 0:
        return f"Chat has no {side} participant"
    return f"Chat has {count} {side} participants; expected exactly one"
