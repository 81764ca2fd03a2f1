"""
Contract Validation Module

Модуль для валидации JSON контрактов wire-границы (тело manage-offer операции).
"""

from .validators import (
    MANAGE_OFFER_OP_SCHEMA,
    is_valid_manage_offer_op,
    iter_manage_offer_op_errors,
    load_schema,
    validate_manage_offer_op,
)

__all__ = [
    # Schema
    "MANAGE_OFFER_OP_SCHEMA",
    "load_schema",
    # Functions
    "validate_manage_offer_op",
    "is_valid_manage_offer_op",
    "iter_manage_offer_op_errors",
]
