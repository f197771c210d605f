"""
Portfolio aggregates computed from an application's products.
"""

from __future__ import annotations

from typing import Iterable, List

from app.models import Fund, Product


def flatten_funds(products: Iterable[Product]) -> List[Fund]:
    return [fund for product in products for fund in product.funds]


def portfolio_total(products: Iterable[Product], tax_rate: float) -> float:
    """
    Sum of (amount - fees) * tax_rate over every fund of every product.

    The rate is applied per fund. No rounding, and negative lines (fees above
    amount) are summed as-is.
    """
    return sum(((f.amount - f.fees) * tax_rate for f in flatten_funds(products)), 0.0)
