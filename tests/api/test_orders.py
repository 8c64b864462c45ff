"""API tests for orders."""

import pytest
from httpx import AsyncClient

ITEMS = [
    {"item_id": "a", "product_id": "P1", "quantity": 10, "unit_price": 12.5},
    {"item_id": "b", "product_id": "P2", "quantity": 4, "unit_price": 20},
]


@pytest.fixture
async def order(client: AsyncClient) -> dict:
    response = await client.post("/api/orders", json={"client_id": "c1", "items": ITEMS})
    assert response.status_code == 201
    return response.json()


class TestOrdersAPI:
    async def test_create_computes_totals(self, order: dict):
        assert order["status"] == "DRAFT"
        assert order["orderNumber"].startswith("AUR-ORD-")
        assert order["orderNumber"].endswith("-001")
        assert order["totalItems"] == 2
        assert order["totalQuantity"] == 14
        assert order["totalValue"] == 205
        assert [item["totalPrice"] for item in order["items"]] == [125, 80]

    async def test_order_numbers_increase(self, client: AsyncClient, order: dict):
        second = (await client.post("/api/orders", json={"client_id": "c2"})).json()
        assert second["orderNumber"].endswith("-002")

    async def test_replace_items_recomputes_totals(self, client: AsyncClient, order: dict):
        response = await client.put(
            f"/api/orders/{order['id']}/items",
            json={"items": [{"product_id": "P3", "quantity": 3, "unit_price": 7}]},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["totalItems"] == 1
        assert data["totalValue"] == 21
        assert data["version"] == order["version"] + 1

    async def test_duplicate_item_ids_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/orders", json={"client_id": "c1", "items": [ITEMS[0], ITEMS[0]]}
        )
        assert response.status_code == 400

    async def test_status_transitions(self, client: AsyncClient, order: dict):
        url = f"/api/orders/{order['id']}/status"

        response = await client.post(url, json={"status": "COMPLETED"})
        assert response.status_code == 409
        assert response.json()["error_code"] == "ILLEGAL_TRANSITION"

        response = await client.post(url, json={"status": "CONFIRMED", "notes": "ok"})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "CONFIRMED"
        assert data["approvedBy"] == "emp-1"
        assert data["statusHistory"][-1]["changedBy"] == "emp-1"

    async def test_items_of_closed_order_are_frozen(self, client: AsyncClient, order: dict):
        await client.post(f"/api/orders/{order['id']}/status", json={"status": "CANCELLED"})
        response = await client.put(
            f"/api/orders/{order['id']}/items", json={"items": ITEMS[:1]}
        )
        assert response.status_code == 400

    async def test_unknown_status_value(self, client: AsyncClient, order: dict):
        response = await client.post(
            f"/api/orders/{order['id']}/status", json={"status": "SHIPPED"}
        )
        assert response.status_code == 422

    async def test_list_filters(self, client: AsyncClient, order: dict):
        await client.post("/api/orders", json={"client_id": "c2"})

        by_client = (await client.get("/api/orders", params={"client_id": "c1"})).json()
        assert [o["id"] for o in by_client["items"]] == [order["id"]]

        drafts = (await client.get("/api/orders", params={"status": "DRAFT"})).json()
        assert drafts["count"] == 2

    async def test_get_unknown(self, client: AsyncClient):
        assert (await client.get("/api/orders/missing")).status_code == 404

    async def test_new_order_is_unassigned(self, order: dict):
        assert order["assignedContractorId"] is None


@pytest.fixture
async def contractor(client: AsyncClient) -> dict:
    response = await client.post(
        "/api/contractors", json={"contact_person_name": "Ravi", "phone": "555-0101"}
    )
    assert response.status_code == 201
    return response.json()


def as_user(user_id: str, role: str) -> dict:
    return {"X-User-Id": user_id, "X-User-Role": role}


class TestOrderVisibility:
    async def test_employees_see_only_their_orders(self, client: AsyncClient, order: dict):
        await client.post("/api/orders", json={"client_id": "c9"}, headers={"X-User-Id": "emp-2"})

        mine = (await client.get("/api/orders")).json()
        assert [o["id"] for o in mine["items"]] == [order["id"]]

        everything = (await client.get("/api/orders", headers=as_user("boss", "ADMIN"))).json()
        assert everything["count"] == 2

    async def test_contractors_see_assigned_orders(
        self, client: AsyncClient, order: dict, contractor: dict
    ):
        await client.post(f"/api/orders/{order['id']}/status", json={"status": "CONFIRMED"})
        await client.post(f"/api/orders/{order['id']}/assign", json={"contractor_id": contractor["id"]})
        await client.post("/api/orders", json={"client_id": "c2"})

        seen = (
            await client.get("/api/orders", headers=as_user(contractor["id"], "CONTRACTOR"))
        ).json()
        assert [o["id"] for o in seen["items"]] == [order["id"]]

        stranger = (await client.get("/api/orders", headers=as_user("cont-x", "CONTRACTOR"))).json()
        assert stranger["items"] == []


class TestAssignOrderAPI:
    async def test_assign_confirmed_order(self, client: AsyncClient, order: dict, contractor: dict):
        await client.post(f"/api/orders/{order['id']}/status", json={"status": "CONFIRMED"})

        response = await client.post(
            f"/api/orders/{order['id']}/assign", json={"contractor_id": contractor["id"]}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "IN_PROGRESS"
        assert data["assignedContractorId"] == contractor["id"]
        assert data["assignedTo"] == "emp-1"

    async def test_draft_order_conflicts(self, client: AsyncClient, order: dict, contractor: dict):
        response = await client.post(
            f"/api/orders/{order['id']}/assign", json={"contractor_id": contractor["id"]}
        )
        assert response.status_code == 409

    async def test_unknown_contractor(self, client: AsyncClient, order: dict):
        response = await client.post(
            f"/api/orders/{order['id']}/assign", json={"contractor_id": "nobody"}
        )
        assert response.status_code == 400
