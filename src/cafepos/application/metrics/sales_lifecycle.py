from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

from cafepos.domain.order.entities import Order

ORDERS_CHECKED_OUT_TOTAL = Counter(
    "cafepos_orders_checked_out_total",
    "Total number of orders paid at the till.",
)

ORDER_VALUE_CENTS = Histogram(
    "cafepos_order_value_cents",
    "Order totals in cents at checkout.",
    buckets=(250, 500, 1000, 2000, 5000, 10000, 25000),
)

CHECKOUT_REJECTED_TOTAL = Counter(
    "cafepos_checkout_rejected_total",
    "Total number of rejected checkouts.",
    ["reason"],
)

SALES_CLOSED_TOTAL = Counter(
    "cafepos_sales_closed_total",
    "Total number of close-sale operations.",
    ["mode"],
)

ORDERS_ARCHIVED_TOTAL = Counter(
    "cafepos_orders_archived_total",
    "Total number of ledger orders moved into the archive.",
)

ARCHIVE_IMPORTED_SESSIONS_TOTAL = Counter(
    "cafepos_archive_imported_sessions_total",
    "Total number of sale sessions imported from legacy exports.",
)

ARCHIVE_IMPORT_REJECTED_TOTAL = Counter(
    "cafepos_archive_import_rejected_total",
    "Total number of rejected legacy imports.",
)

STORED_COLLECTION_MALFORMED_TOTAL = Counter(
    "cafepos_stored_collection_malformed_total",
    "Total number of stored collections that failed to parse.",
    ["key"],
)

OPEN_LEDGER_SIZE = Gauge(
    "cafepos_open_ledger_size",
    "Number of orders in the open ledger after the last write.",
)


def record_checkout(order: Order) -> None:
    ORDERS_CHECKED_OUT_TOTAL.inc()
    ORDER_VALUE_CENTS.observe(order.total.amount_cents)


def record_checkout_rejected(reason: str) -> None:
    CHECKOUT_REJECTED_TOTAL.labels(reason=reason).inc()


def record_sale_closed(mode: str, order_count: int) -> None:
    SALES_CLOSED_TOTAL.labels(mode=mode).inc()
    ORDERS_ARCHIVED_TOTAL.inc(order_count)


def record_archive_imported(session_count: int) -> None:
    ARCHIVE_IMPORTED_SESSIONS_TOTAL.inc(session_count)


def record_archive_import_rejected() -> None:
    ARCHIVE_IMPORT_REJECTED_TOTAL.inc()


def record_stored_collection_malformed(key: str) -> None:
    STORED_COLLECTION_MALFORMED_TOTAL.labels(key=key).inc()


def record_open_ledger_size(size: int) -> None:
    OPEN_LEDGER_SIZE.set(size)
