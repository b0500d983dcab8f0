# jobshop/services/board.py

import logging
from typing import Callable, Dict, List, Optional, TypeVar

from sqlalchemy.engine import Engine, Connection

from jobshop.models.orders import OrderOut, OrderStatus
from jobshop.services import pipeline
from jobshop.services.orders import load_orders

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OrderBoard:
    """
    Owns a snapshot of every order and rebuilds it wholesale after each write.

    Nothing is applied to the snapshot optimistically: `mutate` runs the write
    in its own transaction and only refreshes once it has committed, so a
    failed write leaves the previous snapshot untouched.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.orders: List[OrderOut] = []

    def refresh(self) -> List[OrderOut]:
        with self.engine.connect() as conn:
            self.orders = load_orders(conn)
        return self.orders

    def mutate(self, write: Callable[[Connection], T]) -> T:
        with self.engine.begin() as conn:
            result = write(conn)
        self.refresh()
        return result

    def in_status(self, status, query: Optional[str] = None) -> List[OrderOut]:
        return pipeline.orders_in_status(self.orders, status, query)

    def columns(self, query: Optional[str] = None) -> Dict[OrderStatus, List[OrderOut]]:
        return pipeline.group_by_status(self.orders, query)

    def find(self, order_id: int) -> Optional[OrderOut]:
        for order in self.orders:
            if order.id == order_id:
                return order
        return None
