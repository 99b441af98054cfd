from .pricing import parse_discount_percent, unit_discount_amount

__all__ = [
    "parse_discount_percent",
    "unit_discount_amount",
]
