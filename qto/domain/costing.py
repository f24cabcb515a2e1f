"""Cost derivation for QTO items."""

from typing import Optional


def compute_total_cost(quantity: Optional[float], unit_rate: Optional[float]) -> Optional[float]:
    """quantity * unit_rate when both are present, otherwise None.

    The stored total is always derived from this; a client-supplied total is never trusted.
    """
    if quantity is None or unit_rate is None:
        return None
    return quantity * unit_rate
