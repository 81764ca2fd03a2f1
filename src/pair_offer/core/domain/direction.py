"""
Direction - Направление сделки на валютной паре и выбор buying/selling

LONG  = покупаем base, продаём counter
SHORT = продаём base, покупаем counter

Чистое отображение без побочных эффектов. Направление по умолчанию: LONG.
"""

import logging
from enum import Enum
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class TradeDirection(str, Enum):
    """Направление позиции на паре base/counter"""

    LONG = "long"  # buy base / sell counter
    SHORT = "short"  # sell base / buy counter

    @property
    def buys_base(self) -> bool:
        """True если сделка покупает base (LONG)"""
        return self is TradeDirection.LONG


class ResolvedPair(NamedTuple):
    """Результат разрешения направления: что покупаем и что продаём"""

    buying: Any
    selling: Any


# =============================================================================
# RESOLVER
# =============================================================================


def resolve_direction(
    base: Any,
    counter: Any,
    direction: TradeDirection | str = TradeDirection.LONG,
) -> ResolvedPair:
    """
    Определение buying/selling активов по направлению.

    Активы непрозрачны: сравниваются только через ==, не конструируются.

    Args:
        base: Base актив пары
        counter: Counter актив пары
        direction: TradeDirection или "long"/"short" (default: LONG)

    Returns:
        ResolvedPair(buying, selling)

    Raises:
        ValueError: Если direction не является допустимым направлением

    Examples:
        >>> resolve_direction("BASE", "COUNTER", TradeDirection.LONG)
        ResolvedPair(buying='BASE', selling='COUNTER')
        >>> resolve_direction("BASE", "COUNTER", TradeDirection.SHORT)
        ResolvedPair(buying='COUNTER', selling='BASE')
    """
    direction = TradeDirection(direction)

    if direction.buys_base:
        resolved = ResolvedPair(buying=base, selling=counter)
    else:
        resolved = ResolvedPair(buying=counter, selling=base)

    logger.debug(
        "Resolved direction %s: buying=%r selling=%r",
        direction.value,
        resolved.buying,
        resolved.selling,
    )
    return resolved
