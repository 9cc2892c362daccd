"""
Tests for order endpoints.

Tests cover:
- Price snapshot (item + modifiers) and totals
- All-or-nothing creation on unknown items
- Status updates and confirmation routing
"""

from sqlalchemy import func, select

from rest_api.models import Order, OrderItem
from tests.conftest import next_id


def orders_url(location_id, suffix=""):
    return f"/api/locations/{location_id}/orders{suffix}"


class TestCreateOrder:
    """Test order creation and pricing."""

    def test_unit_price_includes_modifiers(self, client, auth_headers, seed_location, seed_menu):
        """1200 item with a 300 modifier, three times: unit 1500, total 4500."""
        response = client.post(
            orders_url(seed_location.id),
            json={
                "items": [{
                    "menu_item_id": seed_menu["burger"].id,
                    "modifier_ids": [seed_menu["cheese"].id],
                    "quantity": 3,
                }],
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "pending"
        assert data["type"] == "dine_in"
        assert data["total_cents"] == 4500
        assert len(data["items"]) == 1
        assert data["items"][0]["unit_price_cents"] == 1500
        assert data["items"][0]["quantity"] == 3

    def test_total_sums_lines(self, client, auth_headers, seed_location, seed_menu, seed_tables):
        response = client.post(
            orders_url(seed_location.id),
            json={
                "table_id": seed_tables[0].id,
                "customer_name": "Grace",
                "items": [
                    {"menu_item_id": seed_menu["burger"].id, "quantity": 2},
                    {"menu_item_id": seed_menu["fries"].id, "quantity": 1, "notes": "extra salt"},
                    {"menu_item_id": seed_menu["soda"].id, "quantity": 4},
                ],
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["total_cents"] == 2 * 1200 + 500 + 4 * 250
        assert data["table_id"] == seed_tables[0].id
        assert data["items"][1]["notes"] == "extra salt"

    def test_prices_are_snapshotted(self, client, auth_headers, db_session, seed_location, seed_menu):
        """Later menu price changes do not touch existing orders."""
        created = client.post(
            orders_url(seed_location.id),
            json={"items": [{"menu_item_id": seed_menu["fries"].id, "quantity": 2}]},
            headers=auth_headers,
        ).json()

        seed_menu["fries"].price_cents = 900
        db_session.commit()

        fetched = client.get(orders_url(seed_location.id, f"/{created['id']}"), headers=auth_headers).json()
        assert fetched["total_cents"] == 1000
        assert fetched["items"][0]["unit_price_cents"] == 500

    def test_takeaway_order(self, client, auth_headers, seed_location, seed_menu):
        response = client.post(
            orders_url(seed_location.id),
            json={"type": "takeaway", "items": [{"menu_item_id": seed_menu["soda"].id, "quantity": 1}]},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["type"] == "takeaway"
        assert response.json()["table_id"] is None

    def test_unknown_item_creates_nothing(self, client, auth_headers, db_session, seed_location, seed_menu):
        response = client.post(
            orders_url(seed_location.id),
            json={
                "items": [
                    {"menu_item_id": seed_menu["burger"].id, "quantity": 1},
                    {"menu_item_id": next_id(), "quantity": 1},
                ],
            },
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert db_session.scalar(select(func.count()).select_from(Order)) == 0
        assert db_session.scalar(select(func.count()).select_from(OrderItem)) == 0

    def test_item_of_another_location_is_not_found(
        self, client, auth_headers, db_session, seed_location, seed_menu, other_location
    ):
        from rest_api.models import MenuItem

        foreign = MenuItem(location_id=other_location.id, name="Pasta", price_cents=1100)
        db_session.add(foreign)
        db_session.commit()

        response = client.post(
            orders_url(seed_location.id),
            json={"items": [{"menu_item_id": foreign.id, "quantity": 1}]},
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_modifier_of_another_item_is_not_found(self, client, auth_headers, seed_location, seed_menu):
        response = client.post(
            orders_url(seed_location.id),
            json={
                "items": [{
                    "menu_item_id": seed_menu["fries"].id,
                    "modifier_ids": [seed_menu["cheese"].id],
                    "quantity": 1,
                }],
            },
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_unavailable_item_rejected(self, client, auth_headers, seed_location, seed_menu):
        response = client.post(
            orders_url(seed_location.id),
            json={"items": [{"menu_item_id": seed_menu["soup"].id, "quantity": 1}]},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_unknown_table(self, client, auth_headers, seed_location, seed_menu):
        response = client.post(
            orders_url(seed_location.id),
            json={"table_id": next_id(), "items": [{"menu_item_id": seed_menu["soda"].id, "quantity": 1}]},
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_zero_quantity_rejected(self, client, auth_headers, seed_location, seed_menu):
        response = client.post(
            orders_url(seed_location.id),
            json={"items": [{"menu_item_id": seed_menu["soda"].id, "quantity": 0}]},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_large_quantity_accepted(self, client, auth_headers, seed_location, seed_menu):
        response = client.post(
            orders_url(seed_location.id),
            json={"items": [{"menu_item_id": seed_menu["soda"].id, "quantity": 150}]},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["total_cents"] == 150 * 250

    def test_empty_order_rejected(self, client, auth_headers, seed_location, seed_menu):
        response = client.post(orders_url(seed_location.id), json={"items": []}, headers=auth_headers)
        assert response.status_code == 400

    def test_publishes_order_created(self, client, auth_headers, seed_location, seed_menu, fake_redis):
        client.post(
            orders_url(seed_location.id),
            json={"items": [{"menu_item_id": seed_menu["soda"].id, "quantity": 1}]},
            headers=auth_headers,
        )
        assert fake_redis.event_types(f"location:{seed_location.id}:kitchen") == ["order.created"]
        assert fake_redis.event_types(f"location:{seed_location.id}:staff") == ["order.created"]


class TestOrderQueries:
    def test_list_filters_by_status(self, client, auth_headers, seed_location, seed_menu):
        ids = []
        for _ in range(2):
            ids.append(client.post(
                orders_url(seed_location.id),
                json={"items": [{"menu_item_id": seed_menu["soda"].id, "quantity": 1}]},
                headers=auth_headers,
            ).json()["id"])
        client.patch(
            orders_url(seed_location.id, f"/{ids[0]}/status"),
            json={"status": "served"},
            headers=auth_headers,
        )

        all_orders = client.get(orders_url(seed_location.id), headers=auth_headers).json()
        assert {o["id"] for o in all_orders} == set(ids)

        served = client.get(orders_url(seed_location.id), params={"status": "served"}, headers=auth_headers).json()
        assert [o["id"] for o in served] == [ids[0]]

    def test_get_unknown_order(self, client, auth_headers, seed_location):
        response = client.get(orders_url(seed_location.id, f"/{next_id()}"), headers=auth_headers)
        assert response.status_code == 404

    def test_other_tenant_orders_hidden(self, client, auth_headers, other_location):
        response = client.get(orders_url(other_location.id), headers=auth_headers)
        assert response.status_code == 404


class TestOrderStatus:
    def test_any_status_is_accepted(self, client, auth_headers, seed_location, seed_menu):
        order_id = client.post(
            orders_url(seed_location.id),
            json={"items": [{"menu_item_id": seed_menu["soda"].id, "quantity": 1}]},
            headers=auth_headers,
        ).json()["id"]

        for new_status in ["paid", "pending"]:
            response = client.patch(
                orders_url(seed_location.id, f"/{order_id}/status"),
                json={"status": new_status},
                headers=auth_headers,
            )
            assert response.status_code == 200
            assert response.json()["status"] == new_status

    def test_unknown_status_rejected(self, client, auth_headers, seed_location, seed_menu):
        order_id = client.post(
            orders_url(seed_location.id),
            json={"items": [{"menu_item_id": seed_menu["soda"].id, "quantity": 1}]},
            headers=auth_headers,
        ).json()["id"]

        response = client.patch(
            orders_url(seed_location.id, f"/{order_id}/status"),
            json={"status": "eaten"},
            headers=auth_headers,
        )
        assert response.status_code == 400
