"""Promotion domain exceptions.

Raised by the Service Layer and translated into HTTP responses by the
views.
"""

from __future__ import annotations


class CodeGenerationExhausted(Exception):
    """Every generated candidate collided with an existing code."""


class InvalidValidityWindow(Exception):
    """``dateStart`` is not strictly before ``dateEnd``."""


class PromotionNotFound(Exception):
    """The requested promotion does not exist."""
