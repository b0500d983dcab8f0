from datetime import date
from decimal import Decimal
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from jobshop.db.schema import payments
from jobshop.db.store import TableStore


def _create(client: TestClient, **fields) -> dict:
    body = {"client_name": "Raj Industries", **fields}
    response = client.post("/orders/", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestOrdersAPI:
    """Order CRUD, pipeline moves, assignments and payments over HTTP."""

    def test_create_order_prices_it(self, client: TestClient):
        order = _create(client, base_price=1000, additional_charges=500)

        assert Decimal(order["final_price"]) == Decimal("1500")
        assert order["status"] == "lead"
        assert order["payment_status"] == "not_paid"
        assert Decimal(order["outstanding"]) == Decimal("1500")

    def test_create_requires_client_name(self, client: TestClient):
        response = client.post("/orders/", json={"client_name": ""})
        assert response.status_code == 422

    def test_create_rejects_negative_base_price(self, client: TestClient):
        response = client.post("/orders/", json={"client_name": "Raj", "base_price": -1})
        assert response.status_code == 422

    def test_create_rejects_sub_cent_prices(self, client: TestClient):
        response = client.post("/orders/", json={"client_name": "Raj", "base_price": "0.333"})
        assert response.status_code == 422

    def test_create_rejects_unknown_status(self, client: TestClient):
        response = client.post("/orders/", json={"client_name": "Raj", "status": "archived"})
        assert response.status_code == 422

    def test_discount_allowed(self, client: TestClient):
        order = _create(client, base_price=1000, additional_charges=-150)
        assert Decimal(order["final_price"]) == Decimal("850")

    def test_unknown_service_is_404(self, client: TestClient):
        response = client.post("/orders/", json={"client_name": "Raj", "service_id": 9999})
        assert response.status_code == 404

    def test_get_order(self, client: TestClient):
        created = _create(client)

        response = client.get(f"/orders/{created['id']}")

        assert response.status_code == 200
        assert response.json()["client_name"] == "Raj Industries"

    def test_get_missing_order(self, client: TestClient):
        response = client.get("/orders/9999")
        assert response.status_code == 404

    def test_patch_recomputes_final_price(self, client: TestClient):
        created = _create(client, base_price=1000, additional_charges=500)

        response = client.patch(f"/orders/{created['id']}", json={"base_price": 2000})

        assert response.status_code == 200
        assert Decimal(response.json()["final_price"]) == Decimal("2500")

    def test_patch_selecting_service_overwrites_base_price(self, client: TestClient, shop_api):
        created = _create(client, base_price=1000)

        response = client.patch(f"/orders/{created['id']}", json={"service_id": shop_api["CNC Cutting"]})

        body = response.json()
        assert Decimal(body["base_price"]) == Decimal("2500")
        assert Decimal(body["final_price"]) == Decimal("2500")
        assert body["service_name"] == "CNC Cutting"

    def test_patch_null_client_name_rejected(self, client: TestClient):
        created = _create(client)

        response = client.patch(f"/orders/{created['id']}", json={"client_name": None})

        assert response.status_code == 400

    def test_delete(self, client: TestClient):
        created = _create(client)

        assert client.delete(f"/orders/{created['id']}").status_code == 204
        assert client.get(f"/orders/{created['id']}").status_code == 404
        assert client.delete(f"/orders/{created['id']}").status_code == 404

    def test_list_filters(self, client: TestClient):
        _create(client, client_name="Raj Industries", phone="+91 9876543210")
        _create(client, client_name="Sharma Enterprises", phone="+91 8765432109", status="confirmed")

        everything = client.get("/orders/").json()
        confirmed = client.get("/orders/", params={"status": "confirmed"}).json()
        by_phone = client.get("/orders/", params={"q": "98765"}).json()

        assert [o["client_name"] for o in everything] == ["Sharma Enterprises", "Raj Industries"]
        assert [o["client_name"] for o in confirmed] == ["Sharma Enterprises"]
        assert [o["client_name"] for o in by_phone] == ["Raj Industries"]


class TestBoardAPI:
    def test_board_has_all_columns(self, client: TestClient):
        _create(client, status="progressing")

        board = client.get("/orders/board").json()

        assert [c["status"] for c in board["columns"]] == [
            "lead", "contacted", "confirmed", "progressing", "completed", "cancelled",
        ]
        assert [c["label"] for c in board["columns"]][2:4] == ["Order Confirmed", "In Production"]
        assert board["total"] == 1
        assert board["columns"][3]["count"] == 1

    def test_board_search(self, client: TestClient):
        _create(client, client_name="Raj Industries")
        _create(client, client_name="Mehta Construction")

        board = client.get("/orders/board", params={"q": "mehta"}).json()

        assert board["total"] == 1

    def test_move_backwards_is_allowed(self, client: TestClient):
        created = _create(client, status="completed")

        response = client.put(f"/orders/{created['id']}/status", json={"status": "lead"})

        assert response.status_code == 200
        assert response.json()["status"] == "lead"

    def test_move_to_unknown_status(self, client: TestClient):
        created = _create(client)

        response = client.put(f"/orders/{created['id']}/status", json={"status": "archived"})

        assert response.status_code == 422

    def test_move_missing_order(self, client: TestClient):
        response = client.put("/orders/9999/status", json={"status": "lead"})
        assert response.status_code == 404


class TestAssignmentsAPI:
    def test_staff_replaced_wholesale(self, client: TestClient, shop_api):
        created = _create(client)
        url = f"/orders/{created['id']}/staff"

        client.put(url, json={"staff_ids": [shop_api["Rahul Sharma"], shop_api["Priya Singh"]]})
        response = client.put(url, json={"staff_ids": [shop_api["Priya Singh"], shop_api["Ankit Patel"]]})

        assigned = {s["id"] for s in response.json()["assigned_staff"]}
        assert assigned == {shop_api["Priya Singh"], shop_api["Ankit Patel"]}

    def test_unknown_staff(self, client: TestClient, shop_api):
        created = _create(client)

        response = client.put(f"/orders/{created['id']}/staff", json={"staff_ids": [9999]})

        assert response.status_code == 404

    def test_machine_set_and_clear(self, client: TestClient, shop_api):
        created = _create(client)
        url = f"/orders/{created['id']}/machine"

        assigned = client.put(url, json={"machine_id": shop_api["CNC Plasma"]}).json()
        cleared = client.put(url, json={"machine_id": None}).json()

        assert assigned["machine_name"] == "CNC Plasma"
        assert cleared["machine_id"] is None


class TestPaymentsAPI:
    def test_full_payment(self, client: TestClient):
        created = _create(client, base_price=1000, additional_charges=500)

        response = client.post(f"/orders/{created['id']}/payments", json={"method": "cash", "amount": 1500})

        assert response.status_code == 201
        body = response.json()
        assert Decimal(body["outstanding"]) == Decimal("0")
        assert body["payment_status"] == "fully_paid"

    def test_partial_payments(self, client: TestClient):
        created = _create(client, base_price=2000)
        url = f"/orders/{created['id']}/payments"

        client.post(url, json={"method": "upi", "amount": 800, "date": "2025-04-08"})
        body = client.post(url, json={"method": "card", "amount": 700, "date": "2025-04-10"}).json()

        assert Decimal(body["total_paid"]) == Decimal("1500")
        assert Decimal(body["outstanding"]) == Decimal("500")
        assert body["payment_status"] == "partially_paid"

        listed = client.get(url).json()
        assert [p["date"] for p in listed] == ["2025-04-08", "2025-04-10"]

    def test_overpayment_accepted(self, client: TestClient):
        created = _create(client, base_price=100)

        body = client.post(f"/orders/{created['id']}/payments", json={"method": "cash", "amount": 150}).json()

        assert Decimal(body["outstanding"]) == Decimal("-50")
        assert body["payment_status"] == "fully_paid"

    def test_non_positive_amount_rejected(self, client: TestClient):
        created = _create(client, base_price=100)
        url = f"/orders/{created['id']}/payments"

        assert client.post(url, json={"method": "cash", "amount": 0}).status_code == 422
        assert client.post(url, json={"method": "cash", "amount": -5}).status_code == 422
        assert client.get(url).json() == []

    def test_sub_cent_amount_rejected(self, client: TestClient):
        created = _create(client, base_price=100)
        url = f"/orders/{created['id']}/payments"

        assert client.post(url, json={"method": "cash", "amount": "0.004"}).status_code == 422
        assert client.get(url).json() == []

    def test_unknown_method_rejected(self, client: TestClient):
        created = _create(client, base_price=100)

        response = client.post(f"/orders/{created['id']}/payments", json={"method": "cheque", "amount": 10})

        assert response.status_code == 422

    def test_payment_on_missing_order(self, client: TestClient):
        response = client.post("/orders/9999/payments", json={"method": "cash", "amount": 10})
        assert response.status_code == 404


class TestStoreFailure:
    def test_store_error_is_generic_500(self, client: TestClient):
        with patch("jobshop.services.orders.load_orders") as mock_load:
            mock_load.side_effect = OperationalError("SELECT", {}, Exception("db down"))

            response = client.get("/orders/1")

        assert response.status_code == 500
        assert response.json() == {"detail": "Something went wrong. Please try again."}

    def test_failed_write_changes_nothing(self, client: TestClient):
        created = _create(client, base_price=100)

        with patch("jobshop.services.ledger.TableStore.insert") as mock_insert:
            mock_insert.side_effect = OperationalError("INSERT", {}, Exception("db down"))
            response = client.post(f"/orders/{created['id']}/payments", json={"method": "cash", "amount": 10})

        assert response.status_code == 500
        assert client.get(f"/orders/{created['id']}").json()["payments"] == []

    def test_unknown_payment_method_in_store_is_generic_500(self, client: TestClient, engine):
        created = _create(client, base_price=100)
        with engine.begin() as conn:
            TableStore(conn, payments).insert({
                "order_id": created["id"], "method": "cheque",
                "amount": Decimal("10"), "date": date(2025, 4, 10),
            })

        response = client.get(f"/orders/{created['id']}/payments")

        assert response.status_code == 500
        assert response.json() == {"detail": "Something went wrong. Please try again."}
