"""Chat-Group Creation — verifies admin gating, member rows and all-or-nothing writes.

Invariants:
    - Only admins may create groups; other roles get 401 and nothing is written
    - Admin + every resolved agent user becomes a participant, once each
    - Any failed step leaves no Chat row behind
"""

from sqlalchemy import func, select

import supportdesk.services.chat_groups as chat_groups_module
from supportdesk.core.domain_types import ChatType, UserRole
from supportdesk.models import Chat, ChatGroup, ChatParticipant
from tests.services.seed import auth_headers, make_agent, make_user

URL = "/api/v1/admin/chats/groups"


async def _count(db, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def test_admin_creates_group_with_agent_and_self(client, test_db, admin):
    """Scenario: admin creates "Ops" with participants [agentId=7]."""
    agent_user, _ = await make_agent(test_db, "bob", agent_id=7)

    res = await client.post(
        URL, json={"participants": [{"id": 7}], "groupName": "Ops"},
        headers=auth_headers(admin),
    )

    assert res.status_code == 201
    body = res.json()
    assert body["status"] == 201
    assert body["message"] == "Chat group created successfully"
    assert body["data"]["chatType"] == ChatType.GROUP_CHAT.value
    assert body["data"]["chatGroup"] == {"groupName": "Ops", "adminId": admin.id}

    chats = (await test_db.execute(select(Chat.id, Chat.chat_type))).all()
    assert len(chats) == 1
    assert chats[0].chat_type == "group_chat"
    members = (await test_db.execute(
        select(ChatParticipant.user_id).where(ChatParticipant.chat_id == chats[0].id),
    )).scalars().all()
    assert sorted(members) == sorted([admin.id, agent_user.id])


async def test_duplicate_agent_ids_produce_one_row_each(client, test_db, admin):
    agent_user, agent = await make_agent(test_db, "bob")

    res = await client.post(
        URL,
        json={"participants": [{"id": agent.id}, {"id": agent.id}], "groupName": "Ops"},
        headers=auth_headers(admin),
    )

    assert res.status_code == 201
    assert await _count(test_db, ChatParticipant) == 2


async def test_non_admin_is_rejected_without_writes(client, test_db):
    _, agent = await make_agent(test_db, "bob")
    for role in (UserRole.AGENT, UserRole.CUSTOMER):
        caller = await make_user(test_db, f"caller-{role.value}", role)
        res = await client.post(
            URL, json={"participants": [{"id": agent.id}], "groupName": "Ops"},
            headers=auth_headers(caller),
        )
        assert res.status_code == 401
        assert res.json()["message"] == "You are not authorized"

    assert await _count(test_db, Chat) == 0
    assert await _count(test_db, ChatParticipant) == 0


async def test_role_check_precedes_body_validation(client, test_db, customer):
    res = await client.post(URL, json={}, headers=auth_headers(customer))
    assert res.status_code == 401


async def test_missing_token_is_unauthenticated(client):
    res = await client.post(URL, json={"participants": [], "groupName": "Ops"})
    assert res.status_code == 401
    assert res.json()["code"] == "NOT_AUTHENTICATED"


async def test_missing_group_name_is_bad_request(client, admin):
    res = await client.post(
        URL, json={"participants": [{"id": 1}]}, headers=auth_headers(admin),
    )
    assert res.status_code == 400
    assert res.json()["details"][0]["field"] == "body.groupName"


async def test_unknown_agent_rolls_back_chat(client, test_db, admin):
    """Failed participant resolution must not leave the Chat row behind."""
    res = await client.post(
        URL, json={"participants": [{"id": 999}], "groupName": "Ghosts"},
        headers=auth_headers(admin),
    )

    assert res.status_code == 500
    assert res.json()["message"] == "Failed to create chat group"
    assert await _count(test_db, Chat) == 0
    assert await _count(test_db, ChatGroup) == 0


async def test_partially_resolved_agents_roll_back(client, test_db, admin):
    _, agent = await make_agent(test_db, "bob")

    res = await client.post(
        URL,
        json={"participants": [{"id": agent.id}, {"id": 999}], "groupName": "Ops"},
        headers=auth_headers(admin),
    )

    assert res.status_code == 500
    assert await _count(test_db, Chat) == 0
    assert await _count(test_db, ChatParticipant) == 0


async def test_empty_participant_list_rolls_back(client, test_db, admin):
    res = await client.post(
        URL, json={"participants": [], "groupName": "Solo"},
        headers=auth_headers(admin),
    )

    assert res.status_code == 500
    assert await _count(test_db, Chat) == 0


async def test_participant_insert_failure_rolls_back(client, test_db, admin, monkeypatch):
    """A constraint violation on the participant rows discards the chat too."""
    _, agent = await make_agent(test_db, "bob")
    # Duplicate (chat_id, user_id) pairs violate the unique constraint
    monkeypatch.setattr(
        chat_groups_module, "_with_admin",
        lambda member_ids, admin_id: [admin_id, admin_id],
    )

    res = await client.post(
        URL, json={"participants": [{"id": agent.id}], "groupName": "Ops"},
        headers=auth_headers(admin),
    )

    assert res.status_code == 500
    assert res.json()["message"] == "Failed to create chat group"
    assert res.json()["code"] == "INTERNAL_ERROR"
    assert await _count(test_db, Chat) == 0
    assert await _count(test_db, ChatParticipant) == 0


async def test_unparseable_body_is_rejected_before_role_check(client, customer):
    """JSON decoding happens ahead of dependencies, so even a non-admin gets 400."""
    res = await client.post(
        URL, content="{not json",
        headers={**auth_headers(customer), "Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"
