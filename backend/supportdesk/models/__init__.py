"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Chat is the aggregate root for participants, group metadata and support details

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from supportdesk.models.user import User  # noqa: F401
from supportdesk.models.agent import Agent  # noqa: F401
from supportdesk.models.user_otp import UserOTP  # noqa: F401
from supportdesk.models.department import Department  # noqa: F401
from supportdesk.models.category import Category  # noqa: F401
from supportdesk.models.sub_category import SubCategory  # noqa: F401
from supportdesk.models.country import Country  # noqa: F401
from supportdesk.models.chat import Chat  # noqa: F401
from supportdesk.models.chat_group import ChatGroup  # noqa: F401
from supportdesk.models.chat_details import ChatDetails  # noqa: F401
from supportdesk.models.chat_participant import ChatParticipant  # noqa: F401
from supportdesk.models.message import Message  # noqa: F401
from supportdesk.models.transaction import Transaction  # noqa: F401
