"""
Fixed Point - Конверсия десятичных amount/price в поля manage-offer

Wire-протокол хранит amount как signed 64-bit целое с фиксированной точкой
(SCALE = 7 знаков после запятой). Модуль переводит пользовательские
десятичные строки в эти поля с учётом направления сделки:

- SHORT (продаём base): amount уже в нативных единицах протокола,
  масштабирование точное, лишняя точность -> NonIntegralAtScale
- LONG (продаём counter): amount переводится в единицы counter
  (amount * price), округление ROUND_HALF_EVEN; цена инвертируется
  (1 / price) с 16 значащими цифрами

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Только decimal.Decimal, никакого float
2. Все умножения точные (контекст с достаточной precision)
3. Округление происходит ровно в одном месте: scale_half_even
4. Выход за пределы int64 -> ArithmeticOverflow, никакого усечения
5. Используются только явные Context, thread-local контекст не трогается
"""

import logging
import re
from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    Inexact,
    InvalidOperation,
    Overflow,
)
from typing import Final, NamedTuple

from pair_offer.core.domain.direction import TradeDirection
from pair_offer.core.errors import (
    ArithmeticOverflow,
    DivisionByZero,
    InvalidDecimal,
    NonIntegralAtScale,
    NullArgument,
)

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ ФИКСИРОВАННОЙ ТОЧКИ
# =============================================================================

# Количество знаков после запятой в amount-поле протокола
SCALE: Final[int] = 7

# Множитель масштабирования: 10^SCALE = 10_000_000
PRECISION: Final[Decimal] = Decimal(10) ** SCALE

# Диапазон signed 64-bit (amount на wire)
INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

# Диапазон unsigned 64-bit (offer ID на wire)
UINT64_MAX: Final[int] = 2**64 - 1

# Значащие цифры при инверсии цены (эквивалент IEEE 754 decimal64)
INVERSE_PRICE_DIGITS: Final[int] = 16

# Минимальная precision контекста для точных умножений
_MIN_EXACT_PREC: Final[int] = 28

# Допустимый порядок входных чисел: 1e-1000 .. 1e+1000
MAX_ADJUSTED_EXPONENT: Final[int] = 1000

_ONE: Final[Decimal] = Decimal(1)

# Только ASCII-цифры; без пробелов, разделителей, знака минус, NaN и Infinity
_DECIMAL_RE = re.compile(r"\+?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class ConvertedOffer(NamedTuple):
    """Результат конверсии: поля amount и price для manage-offer"""

    amount: int  # amount * 10^SCALE
    price: str  # десятичная строка цены, seed для Price.from_string


# =============================================================================
# ПАРСИНГ
# =============================================================================


def parse_decimal(value: str | Decimal, name: str) -> Decimal:
    """
    Парсинг неотрицательного десятичного числа без потери точности.

    Args:
        value: Десятичная строка (например, "100", "0.25", "1e-3") или Decimal
        name: Имя аргумента для сообщений об ошибках

    Returns:
        Decimal, точно равный входу

    Raises:
        NullArgument: Если value равен None
        InvalidDecimal: Если value не парсится, отрицательный или не конечный
    """
    if value is None:
        raise NullArgument(f"{name} cannot be None")

    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, str):
        if not _DECIMAL_RE.fullmatch(value):
            raise InvalidDecimal(f"{name} is not a valid decimal: {value!r}")
        try:
            parsed = Decimal(value)
        except InvalidOperation as e:
            raise InvalidDecimal(f"{name} is not a valid decimal: {value!r}") from e
    else:
        # float запрещён: двоичное представление уже потеряло точность
        raise InvalidDecimal(
            f"{name} must be a decimal string, got {type(value).__name__}"
        )

    if not parsed.is_finite():
        raise InvalidDecimal(f"{name} must be finite, got {value!r}")
    if parsed == 0:
        return Decimal(0)  # -0 -> 0
    if parsed.is_signed():
        raise InvalidDecimal(f"{name} must not be negative, got {value!r}")
    if abs(parsed.adjusted()) > MAX_ADJUSTED_EXPONENT:
        raise InvalidDecimal(f"{name} is out of decimal range: {value!r}")
    return parsed


def parse_positive_decimal(value: str | Decimal, name: str) -> Decimal:
    """
    Парсинг строго положительного десятичного числа.

    Raises:
        NullArgument: Если value равен None
        InvalidDecimal: Если value не парсится или <= 0
    """
    parsed = parse_decimal(value, name)
    if parsed == 0:
        raise InvalidDecimal(f"{name} must be positive, got {value!r}")
    return parsed


# =============================================================================
# МАСШТАБИРОВАНИЕ
# =============================================================================


def _exact_context(*operands: Decimal) -> Context:
    """
    Контекст, в котором произведение operands и PRECISION вычисляется точно.

    Precision >= суммы длин коэффициентов, экспонента не ограничена.
    Inexact трапится: если произведение всё же округлится, это ошибка.
    """
    digits = sum(len(op.as_tuple().digits) for op in operands)
    digits += len(PRECISION.as_tuple().digits)
    return Context(
        prec=max(digits, _MIN_EXACT_PREC),
        rounding=ROUND_HALF_EVEN,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        traps=[InvalidOperation, Inexact, Overflow],
    )


def _check_int64(scaled: Decimal, name: str) -> int:
    """Проверка диапазона signed 64-bit и конверсия в int"""
    if scaled > INT64_MAX or scaled < INT64_MIN:
        raise ArithmeticOverflow(
            f"{name} {scaled} exceeds signed 64-bit range at scale {SCALE}"
        )
    return int(scaled)


def scale_exact(value: Decimal, name: str = "amount") -> int:
    """
    Точное масштабирование: value * 10^SCALE без округления.

    Args:
        value: Десятичное значение
        name: Имя аргумента для сообщений об ошибках

    Returns:
        value * 10^SCALE как int

    Raises:
        NonIntegralAtScale: Если у value больше SCALE знаков после запятой
        ArithmeticOverflow: Если результат не помещается в int64

    Examples:
        >>> scale_exact(Decimal("100"))
        1000000000
        >>> scale_exact(Decimal("0.0000001"))
        1
    """
    ctx = _exact_context(value)
    scaled = ctx.multiply(value, PRECISION)

    if scaled != scaled.to_integral_value(context=ctx):
        raise NonIntegralAtScale(
            f"{name} {value} is not integral at scale {SCALE} "
            f"(more than {SCALE} fractional digits)"
        )

    return _check_int64(scaled, name)


def scale_half_even(value: Decimal, factor: Decimal, name: str = "amount") -> int:
    """
    Масштабирование произведения: round_half_even(value * factor * 10^SCALE).

    Умножение точное, округление одно, до целого (scale 0), ties to even.

    Args:
        value: Множимое (amount в base)
        factor: Множитель (цена counter за base)
        name: Имя аргумента для сообщений об ошибках

    Returns:
        Округлённое масштабированное значение как int

    Raises:
        ArithmeticOverflow: Если результат не помещается в int64

    Examples:
        >>> scale_half_even(Decimal("100"), Decimal("2"))
        2000000000
        >>> scale_half_even(Decimal("0.00000005"), Decimal("1"))  # 0.5 -> 0
        0
    """
    ctx = _exact_context(value, factor)
    product = ctx.multiply(ctx.multiply(value, factor), PRECISION)
    rounded = product.to_integral_value(rounding=ROUND_HALF_EVEN, context=ctx)
    return _check_int64(rounded, name)


def invert_price(price: Decimal) -> Decimal:
    """
    Инверсия цены: 1 / price с INVERSE_PRICE_DIGITS значащими цифрами.

    Десятичное деление (не float), ROUND_HALF_EVEN.

    Raises:
        DivisionByZero: Если price == 0

    Examples:
        >>> invert_price(Decimal("2"))
        Decimal('0.5')
        >>> invert_price(Decimal("3"))
        Decimal('0.3333333333333333')
    """
    if price == 0:
        raise DivisionByZero("price cannot be zero when inverting (long position)")

    ctx = Context(
        prec=INVERSE_PRICE_DIGITS,
        rounding=ROUND_HALF_EVEN,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        traps=[InvalidOperation, Overflow],
    )
    return ctx.divide(_ONE, price)


def to_plain_string(value: Decimal) -> str:
    """Десятичная строка без экспоненты: Decimal('1E+2') -> '100'"""
    return format(value, "f")


# =============================================================================
# КОНВЕРСИЯ ПО НАПРАВЛЕНИЮ
# =============================================================================


def convert_offer_amounts(
    amount: str | Decimal,
    price: str | Decimal,
    direction: TradeDirection | str = TradeDirection.LONG,
) -> ConvertedOffer:
    """
    Конверсия пользовательских amount/price (в терминах base) в поля протокола.

    Протокол: "продать ровно amount единиц selling по цене price единиц
    buying за единицу selling".

    SHORT (selling = base):
        amount_wire = amount * 10^7 (точно, иначе NonIntegralAtScale)
        price_wire = price без изменений

    LONG (selling = counter):
        amount_wire = round_half_even(amount * price * 10^7)
        (может быть 0: на wire это удаление оффера)
        price_wire = 1 / price (16 значащих цифр)

    Args:
        amount: Количество base (десятичная строка)
        price: Цена base в единицах counter (десятичная строка)
        direction: TradeDirection.LONG (default) или TradeDirection.SHORT

    Returns:
        ConvertedOffer(amount, price)

    Raises:
        NullArgument: amount или price равен None
        InvalidDecimal: amount/price не парсится или не положителен
        NonIntegralAtScale: SHORT amount с точностью больше SCALE
        DivisionByZero: LONG price == 0
        ArithmeticOverflow: amount_wire вне int64
    """
    direction = TradeDirection(direction)
    amount_d = parse_positive_decimal(amount, "amount")
    price_d = parse_decimal(price, "price")

    if direction.buys_base:
        # Цена инвертируется первой: price == 0 -> DivisionByZero
        inverse = invert_price(price_d)
        scaled = scale_half_even(amount_d, price_d, "amount")
        submitted = to_plain_string(inverse)
    else:
        if price_d == 0:
            raise InvalidDecimal(f"price must be positive, got {price!r}")
        scaled = scale_exact(amount_d, "amount")
        submitted = price if isinstance(price, str) else to_plain_string(price_d)

    logger.debug(
        "Converted offer amounts: direction=%s amount=%s price=%s -> amount=%d price=%s",
        direction.value,
        amount,
        price,
        scaled,
        submitted,
    )
    return ConvertedOffer(amount=scaled, price=submitted)
