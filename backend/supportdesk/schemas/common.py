"""Common Schema Base — camelCase wire format shared by every request/response model.

Invariants:
    - Fields are snake_case in Python, camelCase on the wire (alias_generator)
    - Either name is accepted on input (populate_by_name)
    - Response models read straight from ORM objects (from_attributes)
    - Row ids fit the INTEGER column range (1..MAX_ROW_ID)
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

MAX_ROW_ID = 2_147_483_647


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
