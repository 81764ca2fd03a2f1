"""
Errors - Ошибки конверсии торгового намерения в manage-offer операцию

Все ошибки являются ошибками входных данных вызывающей стороны:
они выбрасываются синхронно при построении и никогда не повторяются.
Частично построенный OfferIntent никогда не возвращается.

Каждый класс дополнительно наследует ближайшее встроенное исключение,
поэтому вызывающий код может ловить как OfferConversionError,
так и ValueError / TypeError / OverflowError.
"""


class OfferConversionError(Exception):
    """Базовый класс всех ошибок построения OfferIntent"""

    pass


class NullArgument(OfferConversionError, TypeError):
    """Обязательный аргумент (asset, amount, price, source account) равен None"""

    pass


class InvalidDecimal(OfferConversionError, ValueError):
    """Строка amount/price не является положительным десятичным числом"""

    pass


class NonIntegralAtScale(OfferConversionError, ValueError):
    """
    Amount содержит больше знаков после запятой, чем допускает SCALE.

    Выбрасывается только в SHORT-ветке: amount * 10^7 обязан быть целым.
    Молчаливое усечение запрещено.
    """

    pass


class DivisionByZero(OfferConversionError, ZeroDivisionError):
    """Нулевая цена в LONG-ветке (инверсия цены невозможна)"""

    pass


class ArithmeticOverflow(OfferConversionError, OverflowError):
    """Масштабированный amount не помещается в signed 64-bit"""

    pass


class InvalidAssetPair(OfferConversionError, ValueError):
    """Base и counter совпадают"""

    pass


class InvalidOfferId(OfferConversionError, ValueError):
    """Offer ID отрицательный, не целый или не помещается в unsigned 64-bit"""

    pass


class PriceNotRepresentable(OfferConversionError, ValueError):
    """Цену нельзя выразить дробью n/d с 32-битными n и d"""

    pass
