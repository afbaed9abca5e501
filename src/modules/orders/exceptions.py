"""Order domain exceptions.

Raised by the Service Layer; the API layer (Views) catches them and
translates them into HTTP responses.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The requested order does not exist in the store."""


class LineItemMismatch(ValueError):
    """The resolved products do not line up with the order's line items."""
