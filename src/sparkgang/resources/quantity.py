"""Exact Kubernetes resource quantities.

Mirrors the arithmetic and canonical string form of the API machinery's
``resource.Quantity`` so that computed pod minimums print exactly the way the
scheduler and kubectl print them (``1408Mi``, ``2500m``, ``1``).

Values are held as :class:`decimal.Decimal`; parsing is delegated to the
Kubernetes client's ``parse_quantity``.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, Decimal
from enum import Enum
from functools import total_ordering

from kubernetes.utils import parse_quantity


class QuantityFormat(str, Enum):
    """Preferred output base of a quantity."""

    BINARY_SI = "BinarySI"
    DECIMAL_SI = "DecimalSI"


_BINARY_SUFFIXES = ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei")

_DECIMAL_SUFFIXES = {
    -9: "n",
    -6: "u",
    -3: "m",
    0: "",
    3: "k",
    6: "M",
    9: "G",
    12: "T",
    15: "P",
    18: "E",
}


@total_ordering
class Quantity:
    """Immutable fixed-point quantity with a preferred format.

    Addition keeps the left operand's format, except that a zero quantity
    adopts the format of whatever is added to it.
    """

    __slots__ = ("_amount", "_format")

    def __init__(self, amount: Decimal | int = 0, fmt: QuantityFormat | None = None):
        self._amount = Decimal(amount)
        self._format = fmt

    @classmethod
    def parse(cls, text: str | int | float) -> Quantity:
        """Parse a Kubernetes quantity string such as ``128Mi`` or ``500m``.

        Raises:
            ValueError: If the string is not a valid finite quantity.
        """
        text = str(text)
        amount = parse_quantity(text)
        if not amount.is_finite():
            raise ValueError(f"Invalid quantity: {text}")
        fmt = QuantityFormat.BINARY_SI if text.endswith("i") else QuantityFormat.DECIMAL_SI
        return cls(amount, fmt)

    @classmethod
    def from_int(cls, value: int, fmt: QuantityFormat) -> Quantity:
        return cls(Decimal(value), fmt)

    @classmethod
    def from_milli(cls, millis: int, fmt: QuantityFormat) -> Quantity:
        return cls(Decimal(millis).scaleb(-3), fmt)

    @property
    def format(self) -> QuantityFormat | None:
        return self._format

    @property
    def amount(self) -> Decimal:
        return self._amount

    def is_zero(self) -> bool:
        return self._amount == 0

    def value(self) -> int:
        """Integer value, rounded up."""
        return int(self._amount.to_integral_value(rounding=ROUND_CEILING))

    def milli_value(self) -> int:
        """Value in thousandths, rounded up."""
        return int(self._amount.scaleb(3).to_integral_value(rounding=ROUND_CEILING))

    def __add__(self, other: object) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        fmt = other._format if self.is_zero() else (self._format or other._format)
        return Quantity(self._amount + other._amount, fmt)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self._amount == other._amount

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self._amount < other._amount

    def __hash__(self) -> int:
        return hash(self._amount)

    def __repr__(self) -> str:
        return f"Quantity({str(self)!r})"

    def __str__(self) -> str:
        amount = self._amount
        if amount == 0:
            return "0"

        fmt = self._format or QuantityFormat.DECIMAL_SI
        # Small or fractional binary values print in decimal to avoid rounding.
        if fmt is QuantityFormat.BINARY_SI and (
            -1024 < amount < 1024 or amount != amount.to_integral_value()
        ):
            fmt = QuantityFormat.DECIMAL_SI

        if fmt is QuantityFormat.BINARY_SI:
            number = int(amount)
            exponent = 0
            while exponent < len(_BINARY_SUFFIXES) - 1 and number % 1024 == 0:
                number //= 1024
                exponent += 1
            return f"{number}{_BINARY_SUFFIXES[exponent]}"

        # Decimal quantities are exact to nano precision.
        number = int(amount.scaleb(9).to_integral_value(rounding=ROUND_CEILING))
        exponent = -9
        while exponent < 18 and number % 1000 == 0:
            number //= 1000
            exponent += 3
        return f"{number}{_DECIMAL_SUFFIXES[exponent]}"
