"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, AgentId, ChatId wrap ints — a Transaction stores an AgentId, never a UserId, on the agent side
    - All valid states encoded as Enums — no raw string matching
    - Enum values equal the persisted column values

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
AgentId = NewType("AgentId", int)
ChatId = NewType("ChatId", int)
TransactionId = NewType("TransactionId", int)


# ─── Enums ───────────────────────────────────────────────────────

class UserRole(str, Enum):
    """Caller roles — the Access Guard compares against these."""
    ADMIN = "admin"
    AGENT = "agent"
    CUSTOMER = "customer"


class ChatType(str, Enum):
    """Chat container kinds."""
    CUSTOMER_TO_AGENT = "customer_to_agent"
    TEAM_CHAT = "team_chat"
    GROUP_CHAT = "group_chat"


class ChatStatus(str, Enum):
    """Support chat lifecycle — only pending chats accept transactions."""
    PENDING = "pending"
    SUCCESSFUL = "successful"
    DECLINED = "declined"
    UNSUCCESSFUL = "unsuccessful"


class TransactionStatus(str, Enum):
    """Transaction lifecycle — rows are always created as pending."""
    PENDING = "pending"
    SUCCESSFUL = "successful"
    FAILED = "failed"


class TransactionVariant(str, Enum):
    """Which variant-specific fields a transaction carries."""
    CARD = "card"
    CRYPTO = "crypto"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
