"""Repository for the Order aggregate."""

from orders.domain import orders
from orders.order.order import Order

_PAGE_SIZE = 100


@orders.repository(part_of=Order)
class OrderRepository:
    """Scans over the order table.

    The underlying query set is capped per call, so full scans walk it page
    by page.
    """

    def _scan(self, **filters) -> list[Order]:
        results = []
        offset = 0
        while True:
            query = self._dao.query
            if filters:
                query = query.filter(**filters)
            page = query.order_by("created_at").offset(offset).limit(_PAGE_SIZE).all().items
            results.extend(page)
            if len(page) < _PAGE_SIZE:
                return results
            offset += _PAGE_SIZE

    def find_all(self) -> list[Order]:
        """Every order in the store, oldest first."""
        return self._scan()

    def find_by_status(self, status: str) -> list[Order]:
        """Every order currently in ``status``, oldest first."""
        return self._scan(status=status)
