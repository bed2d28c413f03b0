"""Metric formatting for report cells.

All rounding is half-away-from-zero on the shortest decimal representation
of the input (``repr``), so ``1.2345`` rounds to ``1.235`` on every
platform. Currency output is pinned to US conventions regardless of the
process locale.

Inputs must be finite numbers; NaN and infinities are rejected by the
caller, not here. Any finite float formats, however large: the decimal
context is widened to hold every integer digit.
"""
from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP, localcontext

from datamine.config import FormattingConfig


def _exact(value: float) -> Decimal:
    # float() first so numpy scalars repr as plain digits
    return Decimal(repr(float(value))) if isinstance(value, float) else Decimal(value)


@contextmanager
def _wide_context(exact: Decimal, digits: int):
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + digits + 2)
        yield ctx


def _quantize(value, digits: int, shift: int = 0) -> Decimal:
    """Round ``value * 10**shift`` to ``digits`` fraction digits."""
    exact = value if isinstance(value, Decimal) else _exact(value)
    with _wide_context(exact, digits + shift):
        return exact.scaleb(shift).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)


def _plain(rounded: Decimal, grouped: bool = False) -> str:
    with _wide_context(rounded, 0):
        return f"{rounded:,f}" if grouped else f"{rounded:f}"


def format_percentage(ratio: float, precision: int = 2) -> str:
    """0.1234 -> '12.34%'"""
    return f"{_plain(_quantize(ratio, precision, shift=2))}%"


def format_money(amount: float, currency_symbol: str = '$') -> str:
    """150.5 -> '$150.50', -1234.5 -> '-$1,234.50'"""
    rounded = _quantize(amount, 2)
    sign = '-' if rounded < 0 else ''
    return f"{sign}{currency_symbol}{_plain(rounded.copy_abs(), grouped=True)}"


def format_ratio(value: float, precision: int = 3) -> str:
    """Fixed number of fraction digits, never a signed zero."""
    rounded = _quantize(value, precision)
    if rounded.is_zero():
        rounded = rounded.copy_abs()
    return _plain(rounded)


def round_value(value: float, precision: int = 3) -> str:
    """Integers print bare, everything else with ``precision`` fraction digits.

    A value that rounds to a whole number (zero included) prints bare as
    well, so '0' and '3' are never written as '-0.000' or '3.000' and the
    output reads back to the same string.
    """
    if isinstance(value, int) or float(value).is_integer():
        return str(int(value))
    rounded = _quantize(value, precision)
    if rounded == rounded.to_integral_value():
        return str(int(rounded))
    return _plain(rounded)


def truncate_threshold(value: float, precision: int = 2) -> float:
    """Round a feature threshold to ``precision`` decimal digits."""
    return float(_quantize(value, precision))


def format_threshold(value: float, precision: int = 2) -> str:
    """Shortest display form of a rounded threshold: 1.50 -> '1.5', 2.00 -> '2'."""
    rounded = _quantize(value, precision)
    if rounded.is_zero():
        return '0'
    text = _plain(rounded)
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


@dataclass(frozen=True)
class MetricFormatter:
    """Formatting functions bound to one FormattingConfig."""
    config: FormattingConfig = field(default_factory=FormattingConfig)

    def percentage(self, ratio: float, precision: int = None) -> str:
        if precision is None:
            precision = self.config.percentage_precision
        return format_percentage(ratio, precision)

    def money(self, amount: float) -> str:
        return format_money(amount, self.config.currency_symbol)

    def ratio(self, value: float) -> str:
        return format_ratio(value, self.config.ratio_precision)

    def round_value(self, value: float) -> str:
        return round_value(value, self.config.round_precision)

    def truncate_threshold(self, value: float) -> float:
        return truncate_threshold(value, self.config.threshold_precision)

    def threshold(self, value: float) -> str:
        return format_threshold(value, self.config.threshold_precision)

    def stop_loss(self, ratio: float) -> str:
        return format_percentage(ratio, self.config.stop_loss_precision)
