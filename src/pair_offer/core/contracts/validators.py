"""
JSON Schema Contract Validators

Валидация тела manage-offer операции по JSON Schema контракту перед
передачей во внешний wire-энкодер.

Схема (в пакете): contracts/schema/manage_offer_op.json. Загружается
один раз при импорте, проходит meta-validation и компилируется в один
Draft202012Validator.
"""

import json
from importlib.resources import files
from typing import Any, Dict, Final, Iterator

import jsonschema
from jsonschema import Draft202012Validator

# =============================================================================
# SCHEMA
# =============================================================================

MANAGE_OFFER_OP_SCHEMA_FILE: Final[str] = "schema/manage_offer_op.json"


def load_schema(text: str, source: str) -> Dict[str, Any]:
    """
    Разбор и meta-validation JSON Schema.

    Args:
        text: Содержимое файла схемы
        source: Имя источника для сообщений об ошибках

    Returns:
        Схема как dict

    Raises:
        ValueError: Если текст не JSON или не является валидной JSON Schema
    """
    try:
        schema = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Schema {source} is not valid JSON: {e}") from e

    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {source}: {e}") from e

    return schema


MANAGE_OFFER_OP_SCHEMA: Final[Dict[str, Any]] = load_schema(
    files("pair_offer.core.contracts")
    .joinpath(MANAGE_OFFER_OP_SCHEMA_FILE)
    .read_text(encoding="utf-8"),
    MANAGE_OFFER_OP_SCHEMA_FILE,
)

_MANAGE_OFFER_OP_VALIDATOR: Final[Draft202012Validator] = Draft202012Validator(
    MANAGE_OFFER_OP_SCHEMA
)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_manage_offer_op(data: Dict[str, Any]) -> None:
    """
    Валидация тела manage-offer операции.

    Args:
        data: Тело операции (результат OfferIntent.to_operation_body)

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    _MANAGE_OFFER_OP_VALIDATOR.validate(data)


def is_valid_manage_offer_op(data: Dict[str, Any]) -> bool:
    """Проверка валидности тела без exception"""
    return _MANAGE_OFFER_OP_VALIDATOR.is_valid(data)


def iter_manage_offer_op_errors(data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
    return _MANAGE_OFFER_OP_VALIDATOR.iter_errors(data)
