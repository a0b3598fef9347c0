"""Cache key naming helpers.

Keys follow the ``{feature}:{identifier}:{datatype}`` convention,
e.g. ``product:123:details``, so related entries can be invalidated
together with a pattern such as ``product:123:*``. The cache itself
never validates key shape; these helpers only keep callers consistent.
"""

from datetime import date

SEPARATOR = ":"


def build_key(*parts: object) -> str:
    """Join key parts with the separator.

    Args:
        *parts: Key segments. Each is converted with ``str``.

    Returns:
        The cache key.

    Raises:
        ValueError: If no parts are given.
    """
    if not parts:
        raise ValueError("A cache key needs at least one part")
    return SEPARATOR.join(str(part) for part in parts)


# User-related keys
def user_profile(user_id: int) -> str:
    return build_key("user", user_id, "profile")


def user_session(session_id: str) -> str:
    return build_key("session", session_id, "data")


# Product-related keys
def product_details(product_id: int) -> str:
    return build_key("product", product_id, "details")


def product_inventory(product_id: int) -> str:
    return build_key("product", product_id, "inventory")


def products_by_category(category: str) -> str:
    return build_key("products", "category", category)


def product_by_sku(sku: str) -> str:
    return build_key("product", "sku", sku)


# Order-related keys
def order_summary(order_id: int) -> str:
    return build_key("order", order_id, "summary")


def order_by_number(order_number: str) -> str:
    return build_key("order", "number", order_number)


def orders_by_customer(customer_id: int) -> str:
    return build_key("orders", "customer", customer_id)


def cart_items(cart_id: str) -> str:
    return build_key("cart", cart_id, "items")


# Report keys
def daily_report(day: date) -> str:
    return build_key("report", "daily", day.strftime("%Y-%m-%d"))


def report_data(report_type: str, start: date, end: date) -> str:
    return build_key(
        "report",
        report_type,
        start.strftime("%Y%m%d"),
        end.strftime("%Y%m%d"),
    )
