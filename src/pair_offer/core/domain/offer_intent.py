"""
OfferIntent - Неизменяемое торговое намерение для manage-offer операции

Построение идёт в два шага:
1. OfferIntentBuilder собирает параметры (base, counter, amount, price,
   направление, offer ID, source account) и ничего не вычисляет
2. build() валидирует вход, разрешает направление, масштабирует amount,
   конвертирует цену в n/d и возвращает frozen OfferIntent

Построение all-or-nothing: при любой ошибке OfferIntent не создаётся.
Результат передаётся во внешний wire-энкодер через to_operation_body().
"""

import logging
from decimal import Decimal
from typing import Any, Final

from pydantic import BaseModel, Field, model_validator

from pair_offer.core.contracts import validate_manage_offer_op
from pair_offer.core.domain.direction import TradeDirection, resolve_direction
from pair_offer.core.domain.price import Price
from pair_offer.core.errors import InvalidAssetPair, InvalidOfferId, NullArgument
from pair_offer.core.math.fixed_point import (
    INT64_MAX,
    UINT64_MAX,
    convert_offer_amounts,
)

logger = logging.getLogger(__name__)

# Тег операции в теле для wire-энкодера
MANAGE_OFFER_OP_TYPE: Final[str] = "manage_offer"

# offer_id = 0 создаёт новый оффер
NEW_OFFER_ID: Final[int] = 0


# =============================================================================
# OFFER INTENT MODEL
# =============================================================================


class OfferIntent(BaseModel):
    """
    Готовые поля manage-offer операции.

    Семантика протокола: продать ровно amount / 10^7 единиц selling
    по цене price (единиц buying за единицу selling).

    Immutable модель (frozen=True). Создаётся только через OfferIntentBuilder
    или build_offer_intent, после построения не изменяется.
    """

    selling: Any = Field(..., description="Продаваемый актив")
    buying: Any = Field(..., description="Покупаемый актив")
    amount: int = Field(..., ge=0, le=INT64_MAX, description="Amount selling * 10^7")
    price: Price = Field(..., description="Цена 1 selling в единицах buying")
    submitted_price: str = Field(
        ..., min_length=1, description="Десятичная цена, из которой получена price"
    )
    offer_id: int = Field(NEW_OFFER_ID, ge=0, le=UINT64_MAX, description="0 = новый оффер")
    source_account: Any = Field(None, description="Source account операции (не валидируется)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_assets(self) -> "OfferIntent":
        """Проверка, что selling и buying заданы и различны"""
        if self.selling is None or self.buying is None:
            raise ValueError("selling and buying assets are required")
        if self.selling == self.buying:
            raise ValueError(f"selling and buying must differ, got {self.selling!r} twice")
        return self

    @property
    def is_new_offer(self) -> bool:
        return self.offer_id == NEW_OFFER_ID

    def to_operation_body(self) -> dict[str, Any]:
        """
        Логические поля операции для внешнего wire-энкодера.

        Тело проверяется контрактом manage_offer_op.

        Returns:
            {"type", "selling", "buying", "amount", "price", "offer_id"}
            и "source_account", если задан

        Raises:
            TypeError: Если актив не умеет to_wire()
            jsonschema.ValidationError: Если тело нарушает контракт
        """
        body: dict[str, Any] = {
            "type": MANAGE_OFFER_OP_TYPE,
            "selling": _asset_to_wire(self.selling, "selling"),
            "buying": _asset_to_wire(self.buying, "buying"),
            "amount": self.amount,
            "price": self.price.to_wire(),
            "offer_id": self.offer_id,
        }
        if self.source_account is not None:
            body["source_account"] = str(self.source_account)

        validate_manage_offer_op(body)
        return body


def _asset_to_wire(asset: Any, name: str) -> dict[str, Any]:
    to_wire = getattr(asset, "to_wire", None)
    if not callable(to_wire):
        raise TypeError(
            f"{name} asset {asset!r} has no wire encoding (to_wire() is required)"
        )
    return to_wire()


# =============================================================================
# BUILDER
# =============================================================================


class OfferIntentBuilder:
    """
    Сборщик OfferIntent для пары base/counter.

    Amount и price всегда задаются в терминах base: "amount единиц base
    по price единиц counter за base". По умолчанию LONG (покупаем base).

    Пример:
        intent = (
            OfferIntentBuilder(usd, eur, "100", "0.92")
            .go_short()
            .with_offer_id(12345)
            .build()
        )
    """

    def __init__(
        self,
        base: Any,
        counter: Any,
        amount: str | Decimal,
        price: str | Decimal,
    ):
        self.base = base
        self.counter = counter
        self.amount = amount
        self.price = price
        self.direction = TradeDirection.LONG
        self.offer_id: int = NEW_OFFER_ID
        self.source_account: Any = None

    def go_long(self) -> "OfferIntentBuilder":
        """Покупка base, продажа counter"""
        self.direction = TradeDirection.LONG
        return self

    def go_short(self) -> "OfferIntentBuilder":
        """Продажа base, покупка counter"""
        self.direction = TradeDirection.SHORT
        return self

    def with_direction(self, direction: TradeDirection | str) -> "OfferIntentBuilder":
        self.direction = TradeDirection(direction)
        return self

    def with_offer_id(self, offer_id: int) -> "OfferIntentBuilder":
        """0 создаёт новый оффер; ID существующего оффера изменяет его"""
        self.offer_id = offer_id
        return self

    def with_source_account(self, source_account: Any) -> "OfferIntentBuilder":
        if source_account is None:
            raise NullArgument("source_account cannot be None")
        self.source_account = source_account
        return self

    @property
    def is_buying_base(self) -> bool:
        return self.direction.buys_base

    @property
    def buying_asset(self) -> Any:
        return resolve_direction(self.base, self.counter, self.direction).buying

    @property
    def selling_asset(self) -> Any:
        return resolve_direction(self.base, self.counter, self.direction).selling

    def build(self) -> OfferIntent:
        """
        Валидация и построение OfferIntent.

        Returns:
            Frozen OfferIntent

        Raises:
            NullArgument: base, counter, amount или price равен None
            InvalidAssetPair: base == counter
            InvalidOfferId: offer_id не int, < 0 или > UINT64_MAX
            InvalidDecimal, NonIntegralAtScale, DivisionByZero,
            ArithmeticOverflow: ошибки конверсии amount/price
            PriceNotRepresentable: цена не выражается дробью int32
        """
        for name in ("base", "counter", "amount", "price"):
            if getattr(self, name) is None:
                raise NullArgument(f"{name} cannot be None")

        if self.base == self.counter:
            raise InvalidAssetPair(f"base and counter must differ, got {self.base!r} twice")

        offer_id = self.offer_id
        if not isinstance(offer_id, int) or isinstance(offer_id, bool):
            raise InvalidOfferId(f"offer_id must be an integer, got {type(offer_id).__name__}")
        if offer_id < 0 or offer_id > UINT64_MAX:
            raise InvalidOfferId(f"offer_id {offer_id} outside [0, {UINT64_MAX}]")

        resolved = resolve_direction(self.base, self.counter, self.direction)
        converted = convert_offer_amounts(self.amount, self.price, self.direction)
        price = Price.from_string(converted.price)

        intent = OfferIntent(
            selling=resolved.selling,
            buying=resolved.buying,
            amount=converted.amount,
            price=price,
            submitted_price=converted.price,
            offer_id=offer_id,
            source_account=self.source_account,
        )

        logger.debug(
            "Built offer intent: selling=%s buying=%s amount=%d price=%s offer_id=%d",
            intent.selling,
            intent.buying,
            intent.amount,
            intent.price,
            intent.offer_id,
        )
        return intent


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def build_offer_intent(
    base: Any,
    counter: Any,
    amount: str | Decimal,
    price: str | Decimal,
    direction: TradeDirection | str = TradeDirection.LONG,
    offer_id: int = NEW_OFFER_ID,
    source_account: Any = None,
) -> OfferIntent:
    """
    Построение OfferIntent за один вызов.

    Args:
        base: Base актив пары
        counter: Counter актив пары
        amount: Количество base (десятичная строка)
        price: Цена base в единицах counter (десятичная строка)
        direction: LONG (default, покупаем base) или SHORT
        offer_id: 0 для нового оффера, иначе ID изменяемого оффера
        source_account: Опциональный source account операции

    Returns:
        Frozen OfferIntent

    Examples:
        >>> intent = build_offer_intent(base, counter, "100", "2", TradeDirection.SHORT)
        >>> intent.amount, intent.submitted_price
        (1000000000, '2')
    """
    builder = OfferIntentBuilder(base, counter, amount, price).with_direction(direction)
    builder.with_offer_id(offer_id)
    if source_account is not None:
        builder.with_source_account(source_account)
    return builder.build()
