import pytest

from jobshop.errors import NotFoundError
from jobshop.models.orders import OrderCreate
from jobshop.services.assignments import (
    assigned_staff_ids,
    set_assigned_machine,
    set_assigned_staff,
)
from jobshop.services.orders import create_order, get_order


@pytest.fixture()
def order_id(conn, shop):
    return create_order(conn, OrderCreate(client_name="Raj Industries"))


class TestStaff:
    def test_replaces_instead_of_merging(self, conn, shop, order_id):
        rahul, priya, ankit = shop["Rahul Sharma"], shop["Priya Singh"], shop["Ankit Patel"]

        set_assigned_staff(conn, order_id, {rahul, priya})
        set_assigned_staff(conn, order_id, {priya, ankit})

        assert assigned_staff_ids(conn, order_id) == sorted([priya, ankit])

    def test_same_set_twice_is_idempotent(self, conn, shop, order_id):
        team = {shop["Rahul Sharma"], shop["Ankit Patel"]}

        set_assigned_staff(conn, order_id, team)
        once = assigned_staff_ids(conn, order_id)
        set_assigned_staff(conn, order_id, team)

        assert assigned_staff_ids(conn, order_id) == once == sorted(team)

    def test_duplicates_collapse(self, conn, shop, order_id):
        rahul = shop["Rahul Sharma"]

        assert set_assigned_staff(conn, order_id, [rahul, rahul]) == [rahul]
        assert assigned_staff_ids(conn, order_id) == [rahul]

    def test_empty_set_clears(self, conn, shop, order_id):
        set_assigned_staff(conn, order_id, [shop["Rahul Sharma"]])
        set_assigned_staff(conn, order_id, [])

        assert assigned_staff_ids(conn, order_id) == []

    def test_unknown_staff_leaves_existing_links(self, conn, shop, order_id):
        set_assigned_staff(conn, order_id, [shop["Rahul Sharma"]])

        with pytest.raises(NotFoundError):
            set_assigned_staff(conn, order_id, [shop["Priya Singh"], 9999])

        assert assigned_staff_ids(conn, order_id) == [shop["Rahul Sharma"]]

    def test_unknown_order(self, conn, shop):
        with pytest.raises(NotFoundError):
            set_assigned_staff(conn, 9999, [shop["Rahul Sharma"]])

    def test_names_show_on_order(self, conn, shop, order_id):
        set_assigned_staff(conn, order_id, [shop["Rahul Sharma"], shop["Ankit Patel"]])

        names = [s.name for s in get_order(conn, order_id).assigned_staff]
        assert names == ["Ankit Patel", "Rahul Sharma"]


class TestMachine:
    def test_set_and_overwrite(self, conn, shop, order_id):
        set_assigned_machine(conn, order_id, shop["CNC Plasma"])
        set_assigned_machine(conn, order_id, shop["Laser Cutter"])

        order = get_order(conn, order_id)
        assert order.machine_id == shop["Laser Cutter"]
        assert order.machine_name == "Laser Cutter"

    def test_none_clears(self, conn, shop, order_id):
        set_assigned_machine(conn, order_id, shop["CNC Plasma"])
        set_assigned_machine(conn, order_id, None)

        order = get_order(conn, order_id)
        assert order.machine_id is None
        assert order.machine_name is None

    def test_unknown_machine(self, conn, order_id):
        with pytest.raises(NotFoundError):
            set_assigned_machine(conn, order_id, 9999)

    def test_unknown_order(self, conn, shop):
        with pytest.raises(NotFoundError):
            set_assigned_machine(conn, 9999, shop["CNC Plasma"])
