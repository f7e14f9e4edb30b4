"""Change notifications for the orders table.

``OrderFeed`` watches the SQLAlchemy session and, once a transaction that
touched any ``Order`` commits, tells every subscriber. ``OrderBoard`` is the
admin's view of all orders: any change marks it stale and the next read
re-fetches the complete collection. Rows written by other processes never
reach this feed, so a board built with ``refresh_on_read`` re-fetches on
every read as well. There is no diffing and no debouncing; a burst of
changes simply means the last full reload wins.
"""
import logging
import threading
from collections import namedtuple
from typing import Callable, List

from flask import current_app
from sqlalchemy import event

from models.order import Order

logger = logging.getLogger(__name__)

OrderChange = namedtuple("OrderChange", ["kind", "order_id"])

_PENDING_KEY = "pending_order_changes"


class OrderFeed:
    def __init__(self):
        self._subscribers: List[Callable[[OrderChange], None]] = []
        self._lock = threading.Lock()
        self._installed = False

    def subscribe(self, callback: Callable[[OrderChange], None]) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, change: OrderChange) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(change)
            except Exception:
                logger.exception("Order change subscriber failed")

    def install(self, session) -> None:
        """Hook into ``session`` (a session, sessionmaker or scoped_session)."""
        if self._installed:
            return
        event.listen(session, "after_flush", self._collect)
        event.listen(session, "after_commit", self._deliver)
        event.listen(session, "after_rollback", self._discard)
        self._installed = True

    def _collect(self, session, flush_context):
        pending = session.info.setdefault(_PENDING_KEY, [])
        for kind, objects in (("insert", session.new), ("update", session.dirty), ("delete", session.deleted)):
            for obj in objects:
                if isinstance(obj, Order):
                    pending.append(OrderChange(kind, obj.id))

    def _deliver(self, session):
        for change in session.info.pop(_PENDING_KEY, []):
            self.publish(change)

    def _discard(self, session):
        session.info.pop(_PENDING_KEY, None)


class OrderBoard:
    def __init__(self, loader: Callable[[], list], feed: OrderFeed = None, refresh_on_read: bool = False):
        self._loader = loader
        self._refresh_on_read = refresh_on_read
        self._lock = threading.Lock()
        self._orders: list = []
        self._stale = True
        self.reloads = 0
        self.changes_seen = 0
        self._unsubscribe = feed.subscribe(self.on_change) if feed is not None else None

    def on_change(self, change: OrderChange) -> None:
        with self._lock:
            self._stale = True
            self.changes_seen += 1

    def close(self) -> None:
        """Stop listening to the feed."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def invalidate(self) -> None:
        with self._lock:
            self._stale = True

    @property
    def stale(self) -> bool:
        return self._stale

    def reload(self) -> list:
        seen = self.changes_seen
        orders = self._loader()
        with self._lock:
            self._orders = orders
            # a change that landed mid-load keeps the board stale
            self._stale = self.changes_seen != seen
            self.reloads += 1
        return list(orders)

    def orders(self) -> list:
        if self._refresh_on_read or self._stale:
            return self.reload()
        with self._lock:
            return list(self._orders)


order_feed = OrderFeed()


def current_board() -> OrderBoard:
    return current_app.extensions["order_board"]
