# jobshop/api/orders.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.engine import Engine

from jobshop.db.engine import get_engine
from jobshop.models.orders import (
    STATUS_LABELS,
    BoardColumn,
    BoardOut,
    MachineAssignment,
    OrderCreate,
    OrderOut,
    OrderStatus,
    OrderUpdate,
    PaymentIn,
    PaymentOut,
    StaffAssignment,
    StatusMove,
)
from jobshop.services import assignments, ledger, orders as order_service, pipeline
from jobshop.services.board import OrderBoard

router = APIRouter(prefix="/orders", tags=["orders"])


def _reloaded(board: OrderBoard, order_id: int) -> OrderOut:
    order = board.find(order_id)
    if order is None:
        # deleted between the write and the refresh
        with board.engine.connect() as conn:
            return order_service.get_order(conn, order_id)
    return order


@router.get("/", response_model=List[OrderOut])
def list_orders(
    status: Optional[OrderStatus] = Query(default=None),
    q: Optional[str] = Query(
        default=None,
        description="Client name (case-insensitive) or phone digits",
    ),
    engine: Engine = Depends(get_engine),
) -> List[OrderOut]:
    """
    All orders newest first, optionally narrowed to one stage and/or a search term.
    """
    board = OrderBoard(engine)
    board.refresh()

    if status is not None:
        return board.in_status(status, q)
    return [o for o in board.orders if pipeline.matches_search(o, q)]


@router.get("/board", response_model=BoardOut)
def get_board(
    q: Optional[str] = Query(default=None),
    engine: Engine = Depends(get_engine),
) -> BoardOut:
    """
    Pipeline view: one column per stage, in stage order, each newest first.
    """
    board = OrderBoard(engine)
    board.refresh()

    columns = [
        BoardColumn(
            status=status,
            label=STATUS_LABELS[status],
            count=len(items),
            orders=items,
        )
        for status, items in board.columns(q).items()
    ]
    return BoardOut(columns=columns, total=sum(c.count for c in columns))


@router.post("/", response_model=OrderOut, status_code=201)
def create_order(payload: OrderCreate, engine: Engine = Depends(get_engine)) -> OrderOut:
    board = OrderBoard(engine)
    order_id = board.mutate(lambda conn: order_service.create_order(conn, payload))
    return _reloaded(board, order_id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, engine: Engine = Depends(get_engine)) -> OrderOut:
    with engine.connect() as conn:
        return order_service.get_order(conn, order_id)


@router.patch("/{order_id}", response_model=OrderOut)
def update_order(
    order_id: int, payload: OrderUpdate, engine: Engine = Depends(get_engine)
) -> OrderOut:
    """
    Edit an order. Only fields sent in the body change; final_price is
    recomputed, and staff_ids (when sent) replaces the whole staff list.
    """
    patch = payload.model_dump(exclude_unset=True)
    board = OrderBoard(engine)
    board.mutate(lambda conn: order_service.update_order(conn, order_id, patch))
    return _reloaded(board, order_id)


@router.delete("/{order_id}", status_code=204)
def delete_order(order_id: int, engine: Engine = Depends(get_engine)) -> Response:
    with engine.begin() as conn:
        order_service.delete_order(conn, order_id)
    return Response(status_code=204)


@router.put("/{order_id}/status", response_model=OrderOut)
def move_order(
    order_id: int, payload: StatusMove, engine: Engine = Depends(get_engine)
) -> OrderOut:
    """
    Move an order to another stage. Every stage is reachable from every other.
    """
    board = OrderBoard(engine)
    board.mutate(lambda conn: pipeline.move_order(conn, order_id, payload.status))
    return _reloaded(board, order_id)


@router.put("/{order_id}/staff", response_model=OrderOut)
def assign_staff(
    order_id: int, payload: StaffAssignment, engine: Engine = Depends(get_engine)
) -> OrderOut:
    board = OrderBoard(engine)
    board.mutate(
        lambda conn: assignments.set_assigned_staff(conn, order_id, payload.staff_ids)
    )
    return _reloaded(board, order_id)


@router.put("/{order_id}/machine", response_model=OrderOut)
def assign_machine(
    order_id: int, payload: MachineAssignment, engine: Engine = Depends(get_engine)
) -> OrderOut:
    board = OrderBoard(engine)
    board.mutate(
        lambda conn: assignments.set_assigned_machine(conn, order_id, payload.machine_id)
    )
    return _reloaded(board, order_id)


@router.get("/{order_id}/payments", response_model=List[PaymentOut])
def list_payments(order_id: int, engine: Engine = Depends(get_engine)) -> List[PaymentOut]:
    with engine.connect() as conn:
        rows = ledger.list_payments(conn, order_id)

    return [ledger.row_to_payment(row) for row in rows]


@router.post("/{order_id}/payments", response_model=OrderOut, status_code=201)
def add_payment(
    order_id: int, payload: PaymentIn, engine: Engine = Depends(get_engine)
) -> OrderOut:
    """
    Record a payment and return the order with its new paid/outstanding totals.
    Paying more than is outstanding is accepted.
    """
    board = OrderBoard(engine)
    board.mutate(
        lambda conn: ledger.add_payment(
            conn, order_id, payload.method, payload.amount, payload.date
        )
    )
    return _reloaded(board, order_id)
