from decimal import Decimal
from typing import Optional, Union

from ..config import settings
from ..errors import ValidationError

Number = Union[int, float, Decimal]


def _dec(value: Number) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def calculate_fare(
    distance_m: Number,
    duration_s: Number,
    commission_rate: Optional[Number] = None,
) -> Decimal:
    """Rider price for a trip.

    ``subtotal = base + km * per_km + minutes * per_minute``; the commission
    is added on top of the subtotal, so the rider pays
    ``subtotal * (1 + commission_rate)``. The result is not rounded.
    """
    if commission_rate is None:
        commission_rate = settings.default_commission_rate

    distance_km = _dec(distance_m) / Decimal(1000)
    duration_min = _dec(duration_s) / Decimal(60)

    subtotal = (
        _dec(settings.base_fare)
        + distance_km * _dec(settings.per_km_rate)
        + duration_min * _dec(settings.per_minute_rate)
    )
    commission = subtotal * _dec(commission_rate)
    return subtotal + commission


def check_commission_rate(rate: Number) -> float:
    """Raise ValidationError unless ``rate`` lies in the allowed band"""
    # Written as a range test so NaN fails it too
    if not settings.min_commission_rate <= rate <= settings.max_commission_rate:
        low = round(settings.min_commission_rate * 100)
        high = round(settings.max_commission_rate * 100)
        raise ValidationError(f"Commission rate must be between {low}% and {high}%")
    return float(rate)
