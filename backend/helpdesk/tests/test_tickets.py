import uuid

import pytest
from httpx import AsyncClient


@pytest.mark.anyio("asyncio")
async def test_open_and_list_tickets_by_group(async_client: AsyncClient, auth_headers):
    group_resp = await async_client.post("/api/v1/groups/create", json={"name": "Network"}, headers=auth_headers)
    group_id = group_resp.json()["group"]["id"]

    create_resp = await async_client.post(
        "/api/v1/tickets", json={"subject": "Switch offline", "group_id": group_id}, headers=auth_headers
    )
    assert create_resp.status_code == 201
    assert create_resp.json()["group_id"] == group_id
    await async_client.post("/api/v1/tickets", json={"subject": "Unassigned"}, headers=auth_headers)

    by_group = await async_client.get("/api/v1/tickets", params={"group_id": group_id}, headers=auth_headers)
    assert by_group.status_code == 200
    assert [ticket["subject"] for ticket in by_group.json()] == ["Switch offline"]

    everything = await async_client.get("/api/v1/tickets", headers=auth_headers)
    assert len(everything.json()) == 2


@pytest.mark.anyio("asyncio")
async def test_open_ticket_for_unknown_group(async_client: AsyncClient, auth_headers):
    response = await async_client.post(
        "/api/v1/tickets", json={"subject": "Lost", "group_id": str(uuid.uuid4())}, headers=auth_headers
    )
    assert response.status_code == 404
