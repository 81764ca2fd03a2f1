"""
Тесты для Precision Converter (fixed point)

Проверяет:
1. Парсинг десятичных строк (и отказ на float, NaN, пробелах, разделителях)
2. Точное масштабирование SHORT (NonIntegralAtScale на 8+ знаках)
3. ROUND_HALF_EVEN масштабирование LONG
4. Инверсию цены с 16 значащими цифрами
5. Переполнение int64
6. Независимость от thread-local decimal контекста
"""

from decimal import ROUND_HALF_EVEN, Context, Decimal, localcontext

import pytest

from pair_offer.core.domain import TradeDirection
from pair_offer.core.errors import (
    ArithmeticOverflow,
    DivisionByZero,
    InvalidDecimal,
    NonIntegralAtScale,
    NullArgument,
    OfferConversionError,
)
from pair_offer.core.math import (
    INT64_MAX,
    INVERSE_PRICE_DIGITS,
    PRECISION,
    SCALE,
    ConvertedOffer,
    convert_offer_amounts,
    invert_price,
    parse_decimal,
    parse_positive_decimal,
    scale_exact,
    scale_half_even,
    to_plain_string,
)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================


class TestConstants:
    """Тесты констант фиксированной точки"""

    def test_scale(self) -> None:
        """SCALE = 7, PRECISION = 10^7"""
        assert SCALE == 7
        assert PRECISION == Decimal(10_000_000)

    def test_int64_bound(self) -> None:
        assert INT64_MAX == 9223372036854775807

    def test_inverse_digits(self) -> None:
        assert INVERSE_PRICE_DIGITS == 16


# =============================================================================
# ПАРСИНГ
# =============================================================================


class TestParseDecimal:
    """Тесты для parse_decimal / parse_positive_decimal"""

    def test_valid_strings(self) -> None:
        """Допустимые форматы парсятся точно"""
        assert parse_decimal("100", "amount") == Decimal("100")
        assert parse_decimal("0.25", "amount") == Decimal("0.25")
        assert parse_decimal(".5", "amount") == Decimal("0.5")
        assert parse_decimal("5.", "amount") == Decimal("5")
        assert parse_decimal("+3", "amount") == Decimal("3")
        assert parse_decimal("1e-3", "amount") == Decimal("0.001")
        assert parse_decimal("1E+3", "amount") == Decimal("1000")

    def test_zero_allowed_by_parse_decimal(self) -> None:
        """parse_decimal допускает 0 (ветка решает сама)"""
        assert parse_decimal("0", "price") == 0
        assert parse_decimal(Decimal("-0"), "price") == 0

    def test_decimal_instance_passthrough(self) -> None:
        """Decimal принимается как есть"""
        value = Decimal("1.2345678")
        assert parse_decimal(value, "amount") is value

    def test_invalid_strings(self) -> None:
        """Мусор, пробелы, разделители, NaN, Infinity -> InvalidDecimal"""
        for bad in ["", "abc", " 1", "1 ", "1\n", "1,000", "1_000", "NaN", "Infinity", "1e", "-", "--1", "0x10"]:
            with pytest.raises(InvalidDecimal):
                parse_decimal(bad, "amount")

    def test_non_ascii_digits(self) -> None:
        """Арабско-индийские и полноширинные цифры -> InvalidDecimal"""
        for bad in ["\u0661\u0660\u0660", "\u0662", "\uff11\uff10\uff10", "1.\u0665", "1e\u0662"]:
            with pytest.raises(InvalidDecimal):
                parse_decimal(bad, "amount")

    def test_negative_rejected(self) -> None:
        """Отрицательные значения запрещены"""
        with pytest.raises(InvalidDecimal):
            parse_decimal("-1", "amount")
        with pytest.raises(InvalidDecimal):
            parse_decimal(Decimal("-0.5"), "amount")

    def test_non_finite_decimal_rejected(self) -> None:
        with pytest.raises(InvalidDecimal):
            parse_decimal(Decimal("NaN"), "amount")
        with pytest.raises(InvalidDecimal):
            parse_decimal(Decimal("Infinity"), "amount")

    def test_float_rejected(self) -> None:
        """float запрещён (двоичная потеря точности)"""
        with pytest.raises(InvalidDecimal, match="decimal string"):
            parse_decimal(1.5, "amount")  # type: ignore[arg-type]

    def test_int_rejected(self) -> None:
        with pytest.raises(InvalidDecimal):
            parse_decimal(100, "amount")  # type: ignore[arg-type]

    def test_none_is_null_argument(self) -> None:
        """None -> NullArgument (и TypeError)"""
        with pytest.raises(NullArgument, match="amount cannot be None"):
            parse_decimal(None, "amount")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            parse_decimal(None, "amount")  # type: ignore[arg-type]

    def test_exponent_out_of_range(self) -> None:
        """Порядок за пределами 1e±1000 -> InvalidDecimal"""
        with pytest.raises(InvalidDecimal):
            parse_decimal("1e5000", "amount")
        with pytest.raises(InvalidDecimal):
            parse_decimal("1e-5000", "amount")

    def test_positive_rejects_zero(self) -> None:
        """parse_positive_decimal: 0 -> InvalidDecimal"""
        with pytest.raises(InvalidDecimal, match="positive"):
            parse_positive_decimal("0", "amount")
        with pytest.raises(InvalidDecimal):
            parse_positive_decimal("0.0000", "amount")

    def test_errors_share_base_class(self) -> None:
        """Все ошибки наследуют OfferConversionError и ValueError"""
        with pytest.raises(OfferConversionError):
            parse_decimal("abc", "amount")
        with pytest.raises(ValueError):
            parse_decimal("abc", "amount")


# =============================================================================
# МАСШТАБИРОВАНИЕ
# =============================================================================


class TestScaleExact:
    """Тесты для scale_exact (SHORT-ветка)"""

    def test_integer_amount(self) -> None:
        assert scale_exact(Decimal("100")) == 1_000_000_000

    def test_smallest_unit(self) -> None:
        """1 stroop = 0.0000001"""
        assert scale_exact(Decimal("0.0000001")) == 1

    def test_seven_fractional_digits(self) -> None:
        assert scale_exact(Decimal("1.1234567")) == 11_234_567

    def test_trailing_zeros_beyond_scale_are_fine(self) -> None:
        """1.12345670: 8 цифр, но значение точно на scale 7"""
        assert scale_exact(Decimal("1.12345670")) == 11_234_567

    def test_eight_fractional_digits_rejected(self) -> None:
        """Лишняя точность -> NonIntegralAtScale, без усечения"""
        with pytest.raises(NonIntegralAtScale, match="not integral at scale 7"):
            scale_exact(Decimal("1.12345678"))

    def test_int64_max_boundary(self) -> None:
        """Ровно INT64_MAX проходит, на единицу больше -> overflow"""
        assert scale_exact(Decimal("922337203685.4775807")) == INT64_MAX
        with pytest.raises(ArithmeticOverflow):
            scale_exact(Decimal("922337203685.4775808"))

    def test_huge_exponent_overflows(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            scale_exact(Decimal("1E+500"))

    def test_overflow_is_overflow_error(self) -> None:
        with pytest.raises(OverflowError):
            scale_exact(Decimal("1E+20"))


class TestScaleHalfEven:
    """Тесты для scale_half_even (LONG-ветка)"""

    def test_exact_product(self) -> None:
        assert scale_half_even(Decimal("100"), Decimal("2")) == 2_000_000_000

    def test_ties_to_even(self) -> None:
        """Половина округляется к чётному"""
        # 2.5 -> 2, 3.5 -> 4
        assert scale_half_even(Decimal("0.00000025"), Decimal("1")) == 2
        assert scale_half_even(Decimal("0.00000035"), Decimal("1")) == 4
        # 1.5 * 0.3333333 * 10^7 = 4999999.5 -> 5000000
        assert scale_half_even(Decimal("1.5"), Decimal("0.3333333")) == 5_000_000

    def test_non_tie_rounds_to_nearest(self) -> None:
        # 0.123456789 * 1 * 10^7 = 1234567.89 -> 1234568
        assert scale_half_even(Decimal("0.123456789"), Decimal("1")) == 1_234_568
        # 1234567.49 -> 1234567
        assert scale_half_even(Decimal("0.123456749"), Decimal("1")) == 1_234_567

    def test_extra_precision_not_rejected(self) -> None:
        """LONG-ветка никогда не отвергает лишнюю точность"""
        assert scale_half_even(Decimal("1.123456789123"), Decimal("1")) == 11_234_568

    def test_many_digits_stay_exact(self) -> None:
        """Длинные операнды не теряют точность до округления"""
        amount = Decimal("1234.5678901234567890123456789")
        price = Decimal("9.8765432109876543210987654321")
        with localcontext(Context(prec=200)) as ctx:
            exact = ctx.multiply(ctx.multiply(amount, price), PRECISION)
            expected = int(exact.to_integral_value(rounding=ROUND_HALF_EVEN))
        assert scale_half_even(amount, price) == expected

    def test_overflow(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            scale_half_even(Decimal("1000000000000"), Decimal("1"))


class TestInvertPrice:
    """Тесты для invert_price"""

    def test_exact_inverses(self) -> None:
        assert invert_price(Decimal("2")) == Decimal("0.5")
        assert invert_price(Decimal("8")) == Decimal("0.125")
        assert invert_price(Decimal("0.5")) == Decimal("2")

    def test_sixteen_significant_digits(self) -> None:
        """1/3 и 1/7 обрезаются до 16 значащих цифр, HALF_EVEN"""
        assert invert_price(Decimal("3")) == Decimal("0.3333333333333333")
        assert invert_price(Decimal("7")) == Decimal("0.1428571428571429")
        assert len(invert_price(Decimal("3")).as_tuple().digits) == 16

    def test_zero_is_division_by_zero(self) -> None:
        with pytest.raises(DivisionByZero):
            invert_price(Decimal("0"))
        with pytest.raises(ZeroDivisionError):
            invert_price(Decimal("0"))

    def test_plain_string(self) -> None:
        """Строка без экспоненты"""
        assert to_plain_string(invert_price(Decimal("2"))) == "0.5"
        assert to_plain_string(invert_price(Decimal("1e-20"))) == "100000000000000000000"
        assert to_plain_string(Decimal("1E+2")) == "100"


# =============================================================================
# КОНВЕРСИЯ ПО НАПРАВЛЕНИЮ
# =============================================================================


class TestConvertOfferAmounts:
    """Тесты для convert_offer_amounts"""

    def test_short_scenario(self) -> None:
        """SHORT 100 @ 2 -> amount 100 * 10^7, price '2'"""
        result = convert_offer_amounts("100", "2", TradeDirection.SHORT)
        assert result == ConvertedOffer(amount=1_000_000_000, price="2")

    def test_long_scenario(self) -> None:
        """LONG 100 @ 2 -> amount 100 * 2 * 10^7, price '0.5'"""
        result = convert_offer_amounts("100", "2", TradeDirection.LONG)
        assert result == ConvertedOffer(amount=2_000_000_000, price="0.5")

    def test_default_direction_is_long(self) -> None:
        assert convert_offer_amounts("100", "2") == convert_offer_amounts(
            "100", "2", TradeDirection.LONG
        )

    def test_string_direction(self) -> None:
        assert convert_offer_amounts("100", "2", "short").amount == 1_000_000_000

    def test_short_price_unchanged(self) -> None:
        """SHORT: цена передаётся ровно как введена"""
        for price in ["2", "0.12345678901234567890", "1E+3", "3.50"]:
            assert convert_offer_amounts("1", price, TradeDirection.SHORT).price == price

    def test_short_amount_property(self) -> None:
        """SHORT amount == a * 10^7 точно для a с <= 7 знаками"""
        samples = ["1", "0.0000001", "123.4567", "99999.9999999", "0.5", "42"]
        for a in samples:
            expected = int(Decimal(a) * PRECISION)
            assert convert_offer_amounts(a, "1.5", TradeDirection.SHORT).amount == expected

    def test_long_amount_property(self) -> None:
        """LONG amount == round_half_even(a * p * 10^7)"""
        samples = [("1", "3"), ("0.1234567", "7.654321"), ("2.5", "0.00000006"), ("10", "0.3333333")]
        ctx = Context(prec=100)
        for a, p in samples:
            product = ctx.multiply(ctx.multiply(Decimal(a), Decimal(p)), PRECISION)
            expected = int(product.to_integral_value(rounding=ROUND_HALF_EVEN))
            assert convert_offer_amounts(a, p, TradeDirection.LONG).amount == expected

    def test_long_inverse_price_property(self) -> None:
        """(1/p) * p отличается от 1 не более чем на 1e-15"""
        ctx = Context(prec=100)
        for p in ["3", "7", "1.23456789", "0.0003", "98765.4321", "2"]:
            submitted = convert_offer_amounts("1", p, TradeDirection.LONG).price
            product = ctx.multiply(Decimal(submitted), Decimal(p))
            assert abs(ctx.subtract(product, Decimal(1))) <= Decimal("1e-15")

    def test_short_non_integral_amount(self) -> None:
        """8 знаков в SHORT -> NonIntegralAtScale"""
        with pytest.raises(NonIntegralAtScale):
            convert_offer_amounts("1.12345678", "2", TradeDirection.SHORT)

    def test_long_accepts_eight_digits(self) -> None:
        """Те же 8 знаков в LONG округляются, не отвергаются"""
        result = convert_offer_amounts("1.12345678", "1", TradeDirection.LONG)
        assert result.amount == 11_234_568

    def test_long_zero_price(self) -> None:
        """LONG price '0' -> DivisionByZero"""
        with pytest.raises(DivisionByZero):
            convert_offer_amounts("100", "0", TradeDirection.LONG)

    def test_short_zero_price(self) -> None:
        """SHORT price '0' -> InvalidDecimal"""
        with pytest.raises(InvalidDecimal):
            convert_offer_amounts("100", "0", TradeDirection.SHORT)

    def test_zero_amount(self) -> None:
        for direction in TradeDirection:
            with pytest.raises(InvalidDecimal):
                convert_offer_amounts("0", "2", direction)

    def test_negative_inputs(self) -> None:
        with pytest.raises(InvalidDecimal):
            convert_offer_amounts("-1", "2", TradeDirection.SHORT)
        with pytest.raises(InvalidDecimal):
            convert_offer_amounts("1", "-2", TradeDirection.LONG)

    def test_long_amount_rounds_to_zero(self) -> None:
        """LONG amount, округлённый до 0, возвращается как 0 без ошибки"""
        assert convert_offer_amounts("0.00000001", "1", TradeDirection.LONG).amount == 0
        # 0.5 -> 0 (ties to even)
        assert convert_offer_amounts("0.00000005", "1", TradeDirection.LONG).amount == 0
        assert convert_offer_amounts("0.00000001", "1", TradeDirection.LONG).price == "1"

    def test_overflow_both_branches(self) -> None:
        with pytest.raises(ArithmeticOverflow):
            convert_offer_amounts("922337203685.4775808", "1", TradeDirection.SHORT)
        with pytest.raises(ArithmeticOverflow):
            convert_offer_amounts("1000000000", "10000", TradeDirection.LONG)

    def test_none_inputs(self) -> None:
        with pytest.raises(NullArgument):
            convert_offer_amounts(None, "2", TradeDirection.SHORT)  # type: ignore[arg-type]
        with pytest.raises(NullArgument):
            convert_offer_amounts("100", None, TradeDirection.LONG)  # type: ignore[arg-type]

    def test_decimal_inputs(self) -> None:
        """Decimal на входе: цена рендерится plain строкой"""
        result = convert_offer_amounts(Decimal("100"), Decimal("2E+0"), TradeDirection.SHORT)
        assert result == ConvertedOffer(amount=1_000_000_000, price="2")

    def test_independent_of_thread_context(self) -> None:
        """Низкая precision thread-local контекста не влияет на результат"""
        with localcontext() as ctx:
            ctx.prec = 3
            short = convert_offer_amounts("123456.789", "1", TradeDirection.SHORT)
            long = convert_offer_amounts("123456.789", "3", TradeDirection.LONG)
        assert short.amount == 1_234_567_890_000
        assert long.amount == 3_703_703_670_000
        assert long.price == "0.3333333333333333"
