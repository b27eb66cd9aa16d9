"""Symmetric value bounds for decimal precision/scale declarations."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class NumericBounds:
    """Inclusive bounds derived from ``numeric(p,s)``.

    This is a symmetric approximation (``-max..max``), not the exact range a
    SQL engine enforces after rounding.
    """

    precision: int
    scale: int
    minimum: Decimal
    maximum: Decimal

    def minimum_json(self) -> int | float:
        return _to_json_number(self.minimum, self.scale)

    def maximum_json(self) -> int | float:
        return _to_json_number(self.maximum, self.scale)


def compute_numeric_bounds(precision: int, scale: int) -> NumericBounds:
    """Return bounds for ``numeric(precision, scale)``.

    For ``numeric(14,10)`` the integer part has 14 - 10 = 4 digits, giving
    ``9999.9999999999``. When every digit is fractional (``numeric(5,5)``) the
    bound is ``1 - 10^-scale`` = ``0.99999``.

    Raises:
      ValueError: If precision is not positive or scale is outside ``0..precision``.
    """
    if precision <= 0 or scale < 0 or scale > precision:
        raise ValueError(f"Invalid numeric type: precision={precision}, scale={scale}")

    integer_digits = precision - scale
    if integer_digits <= 0:
        maximum = Decimal("0." + "9" * scale)
    else:
        text = "9" * integer_digits
        if scale > 0:
            text += "." + "9" * scale
        maximum = Decimal(text)
    # copy_negate is exact; unary minus would round to the context precision.
    return NumericBounds(
        precision=precision,
        scale=scale,
        minimum=maximum.copy_negate(),
        maximum=maximum,
    )


def _to_json_number(value: Decimal, scale: int) -> int | float:
    if scale == 0:
        return int(value)
    number = float(value)
    if math.isinf(number):
        LOGGER.warning(
            "Bound with %d integer digits exceeds the double range; "
            "emitting it as an integer without its %d fractional digits",
            len(value.as_tuple().digits) - scale,
            scale,
        )
        return int(value)
    return number
