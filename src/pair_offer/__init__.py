"""
pair-offer: currency-pair trade intent -> manage-offer operation fields.

Переводит "обменять amount base на counter по price, long или short"
в точные поля DEX manage-offer операции: selling, buying,
amount (fixed point, 7 знаков), price (n/d), offer_id.
"""

from pair_offer.core.domain import (
    Asset,
    AssetType,
    OfferIntent,
    OfferIntentBuilder,
    Price,
    ResolvedPair,
    TradeDirection,
    build_offer_intent,
    resolve_direction,
)
from pair_offer.core.errors import (
    ArithmeticOverflow,
    DivisionByZero,
    InvalidAssetPair,
    InvalidDecimal,
    InvalidOfferId,
    NonIntegralAtScale,
    NullArgument,
    OfferConversionError,
    PriceNotRepresentable,
)
from pair_offer.core.math import SCALE, ConvertedOffer, convert_offer_amounts

__version__ = "0.1.0"

__all__ = [
    # Domain
    "Asset",
    "AssetType",
    "OfferIntent",
    "OfferIntentBuilder",
    "Price",
    "ResolvedPair",
    "TradeDirection",
    "build_offer_intent",
    "resolve_direction",
    # Conversion
    "SCALE",
    "ConvertedOffer",
    "convert_offer_amounts",
    # Errors
    "OfferConversionError",
    "NullArgument",
    "InvalidDecimal",
    "NonIntegralAtScale",
    "DivisionByZero",
    "ArithmeticOverflow",
    "InvalidAssetPair",
    "InvalidOfferId",
    "PriceNotRepresentable",
]
