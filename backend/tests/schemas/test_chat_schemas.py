"""Chat Schemas — group creation input and listing serialization."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from supportdesk.schemas.chat import (
    ChatGroupCreate, ChatGroupInfo, ChatGroupSummary, UserSummary,
)
from supportdesk.schemas.common import MAX_ROW_ID


def test_group_create_parses_camel_case():
    body = ChatGroupCreate.model_validate(
        {"participants": [{"id": 7}, {"id": 8}], "groupName": "  Ops  "},
    )
    assert [p.id for p in body.participants] == [7, 8]
    assert body.group_name == "Ops"


def test_group_create_allows_empty_participant_list():
    body = ChatGroupCreate.model_validate({"participants": [], "groupName": "Solo"})
    assert body.participants == []


@pytest.mark.parametrize("payload", [
    {"participants": [{"id": 7}]},
    {"groupName": "Ops"},
    {"participants": [{"id": 7}], "groupName": "   "},
    {"participants": [{"id": 0}], "groupName": "Ops"},
    {"participants": [{"id": MAX_ROW_ID + 1}], "groupName": "Ops"},
    {"participants": [{"id": 7}], "groupName": "x" * 101},
])
def test_group_create_rejects_invalid_bodies(payload):
    with pytest.raises(ValidationError):
        ChatGroupCreate.model_validate(payload)


def test_summary_serializes_with_camel_case_keys():
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    summary = ChatGroupSummary(
        id=1, chat_type="group_chat", created_at=now, updated_at=now,
        chat_group=ChatGroupInfo(group_name="Ops", admin_id=2),
    )
    dumped = summary.model_dump(by_alias=True, mode="json")
    assert dumped["chatType"] == "group_chat"
    assert dumped["chatGroup"] == {"groupName": "Ops", "adminId": 2}
    assert "createdAt" in dumped


def test_user_summary_reads_from_attributes_and_drops_extras():
    class Row:
        id = 3
        username = "bob"
        firstname = "Bob"
        lastname = "Tester"
        role = "agent"
        password = "hash"

    dumped = UserSummary.model_validate(Row()).model_dump()
    assert "password" not in dumped
    assert dumped["username"] == "bob"
