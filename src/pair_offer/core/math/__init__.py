"""
Core math modules для pair-offer

Десятичная арифметика с фиксированной точкой без потери точности.
"""

from pair_offer.core.math.fixed_point import (
    # Constants
    INT64_MAX,
    INT64_MIN,
    INVERSE_PRICE_DIGITS,
    MAX_ADJUSTED_EXPONENT,
    PRECISION,
    SCALE,
    UINT64_MAX,
    # Types
    ConvertedOffer,
    # Functions
    convert_offer_amounts,
    invert_price,
    parse_decimal,
    parse_positive_decimal,
    scale_exact,
    scale_half_even,
    to_plain_string,
)

__all__ = [
    # Fixed Point - Constants
    "SCALE",
    "PRECISION",
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
    "INVERSE_PRICE_DIGITS",
    "MAX_ADJUSTED_EXPONENT",
    # Fixed Point - Types
    "ConvertedOffer",
    # Fixed Point - Functions
    "parse_decimal",
    "parse_positive_decimal",
    "scale_exact",
    "scale_half_even",
    "invert_price",
    "to_plain_string",
    "convert_offer_amounts",
]
