"""
Price - Рациональная цена n/d для manage-offer

Цена на wire передаётся как пара 32-битных знаковых целых (n, d):
"n единиц buying за d единиц selling". Десятичная строка переводится
в дробь разложением в цепную дробь: берётся последняя подходящая дробь,
у которой n и d помещаются в int32.

- Если разложение конечно, дробь точно равна входу
- Иначе дробь является лучшим приближением в пределах int32
  (exact=True превращает это в ошибку PriceNotRepresentable)
"""

from decimal import MAX_EMAX, MIN_EMIN, ROUND_FLOOR, ROUND_HALF_UP, Context, Decimal
from fractions import Fraction
from typing import Final

from pydantic import BaseModel, Field

from pair_offer.core.errors import PriceNotRepresentable
from pair_offer.core.math.fixed_point import parse_positive_decimal

# =============================================================================
# ПАРАМЕТРЫ ЦЕНЫ
# =============================================================================

# Максимум для n и d (signed 32-bit)
PRICE_INT_MAX: Final[int] = 2**31 - 1

# Квант обратной величины на каждом шаге цепной дроби (20 знаков, HALF_UP)
CONTINUED_FRACTION_QUANTUM: Final[Decimal] = Decimal("1e-20")

# Precision рабочего контекста: int32 (10 цифр) + 20 дробных с запасом
_CF_PREC: Final[int] = 64


def _cf_context() -> Context:
    """Новый рабочий контекст цепной дроби на каждый вызов"""
    return Context(prec=_CF_PREC, rounding=ROUND_HALF_UP, Emax=MAX_EMAX, Emin=MIN_EMIN)


# =============================================================================
# PRICE MODEL
# =============================================================================


class Price(BaseModel):
    """
    Цена как точная дробь n/d.

    Immutable модель (frozen=True). Инвариант: d > 0.
    """

    n: int = Field(..., ge=1, le=PRICE_INT_MAX, description="Числитель")
    d: int = Field(..., ge=1, le=PRICE_INT_MAX, description="Знаменатель")

    model_config = {"frozen": True}

    @classmethod
    def from_string(cls, price: str | Decimal, exact: bool = False) -> "Price":
        """
        Конверсия десятичной цены в дробь n/d.

        Args:
            price: Положительная десятичная строка (например, "0.5", "2")
            exact: Требовать точного представления (без приближения)

        Returns:
            Price с n, d в пределах int32

        Raises:
            InvalidDecimal: Если price не парсится или <= 0
            PriceNotRepresentable: Если дробь не помещается в int32,
                либо exact=True и разложение не конечно

        Examples:
            >>> Price.from_string("0.5")
            Price(n=1, d=2)
            >>> Price.from_string("2")
            Price(n=2, d=1)
        """
        value = parse_positive_decimal(price, "price")
        n, d = _best_convergent(value)

        if n == 0 or d == 0:
            raise PriceNotRepresentable(
                f"price {price} cannot be expressed as n/d with 32-bit n and d"
            )

        if exact and Fraction(n, d) != Fraction(value):
            raise PriceNotRepresentable(
                f"price {price} is not exactly representable as n/d "
                f"(closest is {n}/{d})"
            )

        return cls(n=n, d=d)

    def to_fraction(self) -> Fraction:
        return Fraction(self.n, self.d)

    def to_decimal(self, digits: int = 28) -> Decimal:
        """Десятичное значение n/d с digits значащими цифрами"""
        return Context(prec=digits).divide(Decimal(self.n), Decimal(self.d))

    def to_wire(self) -> dict[str, int]:
        return {"n": self.n, "d": self.d}

    def __str__(self) -> str:
        return f"{self.n}/{self.d}"


# =============================================================================
# ЦЕПНАЯ ДРОБЬ
# =============================================================================


def _best_convergent(value: Decimal) -> tuple[int, int]:
    """
    Последняя подходящая дробь value с n, d <= PRICE_INT_MAX.

    Рекуррентность: h_i = a_i * h_{i-1} + h_{i-2}, k_i = a_i * k_{i-1} + k_{i-2},
    старт (0, 1), (1, 0). Возвращает (1, 0) или (0, 1), если ни одна
    подходящая дробь не помещается в int32.
    """
    ctx = _cf_context()
    convergents = [(0, 1), (1, 0)]
    number = value

    while number <= PRICE_INT_MAX:
        a = int(number.to_integral_value(rounding=ROUND_FLOOR, context=ctx))
        f = ctx.subtract(number, Decimal(a))

        h = a * convergents[-1][0] + convergents[-2][0]
        k = a * convergents[-1][1] + convergents[-2][1]
        if h > PRICE_INT_MAX or k > PRICE_INT_MAX:
            break

        convergents.append((h, k))
        if f == 0:
            break

        number = ctx.divide(Decimal(1), f)
        if number <= PRICE_INT_MAX:
            number = number.quantize(CONTINUED_FRACTION_QUANTUM, context=ctx)

    return convergents[-1]
