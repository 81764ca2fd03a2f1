"""
Domain models and value objects.

Contains Asset, TradeDirection, Price and OfferIntent with its builder.
"""

from pair_offer.core.domain.asset import NATIVE_ASSET_CODE, Asset, AssetType
from pair_offer.core.domain.direction import ResolvedPair, TradeDirection, resolve_direction
from pair_offer.core.domain.price import PRICE_INT_MAX, Price
from pair_offer.core.domain.offer_intent import (
    MANAGE_OFFER_OP_TYPE,
    NEW_OFFER_ID,
    OfferIntent,
    OfferIntentBuilder,
    build_offer_intent,
)

__all__ = [
    # Asset model
    "NATIVE_ASSET_CODE",
    "Asset",
    "AssetType",
    # Direction resolver
    "TradeDirection",
    "ResolvedPair",
    "resolve_direction",
    # Price model
    "PRICE_INT_MAX",
    "Price",
    # Offer intent
    "MANAGE_OFFER_OP_TYPE",
    "NEW_OFFER_ID",
    "OfferIntent",
    "OfferIntentBuilder",
    "build_offer_intent",
]
