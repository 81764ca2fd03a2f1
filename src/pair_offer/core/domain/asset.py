"""
Asset - Референсная модель актива для wire-контракта

Ядро считает актив непрозрачным токеном (сравнение через ==).
Эта модель нужна вызывающей стороне и контракту manage_offer_op:
она знает своё wire-представление (to_wire).

Типы:
- native: нативный актив сети (code="XLM", без issuer)
- credit_alphanum4: код 1..4 символа + issuer
- credit_alphanum12: код 5..12 символов + issuer
"""

from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, Field, model_validator

# Код нативного актива
NATIVE_ASSET_CODE: Final[str] = "XLM"

# Максимальная длина кода для credit_alphanum4
ALPHANUM4_MAX_LEN: Final[int] = 4


# =============================================================================
# ENUMS
# =============================================================================


class AssetType(str, Enum):
    """Тип актива на wire"""

    NATIVE = "native"
    CREDIT_ALPHANUM4 = "credit_alphanum4"
    CREDIT_ALPHANUM12 = "credit_alphanum12"


# =============================================================================
# ASSET MODEL
# =============================================================================


class Asset(BaseModel):
    """
    Актив (валюта или токен).

    Immutable модель (frozen=True); равенство по значению (code, issuer).
    """

    code: str = Field(
        ..., min_length=1, max_length=12, pattern=r"^[A-Za-z0-9]+$", description="Код актива"
    )
    issuer: str | None = Field(
        None, pattern=r"^G[A-Z2-7]{55}$", description="Account ID эмитента (None для native)"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_native_vs_credit(self) -> "Asset":
        """Native актив не имеет issuer, кредитный обязан его иметь"""
        if self.issuer is None and self.code != NATIVE_ASSET_CODE:
            raise ValueError(f"credit asset {self.code} requires an issuer")
        if self.issuer is not None and self.code == NATIVE_ASSET_CODE:
            raise ValueError(f"native asset {NATIVE_ASSET_CODE} cannot have an issuer")
        return self

    @classmethod
    def native(cls) -> "Asset":
        """Нативный актив сети"""
        return cls(code=NATIVE_ASSET_CODE)

    @property
    def asset_type(self) -> AssetType:
        if self.issuer is None:
            return AssetType.NATIVE
        if len(self.code) <= ALPHANUM4_MAX_LEN:
            return AssetType.CREDIT_ALPHANUM4
        return AssetType.CREDIT_ALPHANUM12

    def is_native(self) -> bool:
        return self.asset_type is AssetType.NATIVE

    def to_wire(self) -> dict[str, Any]:
        """
        Wire-представление актива для manage_offer_op.

        Returns:
            {"type": "native"} или {"type": ..., "code": ..., "issuer": ...}
        """
        if self.is_native():
            return {"type": AssetType.NATIVE.value}
        return {"type": self.asset_type.value, "code": self.code, "issuer": self.issuer}

    def __str__(self) -> str:
        if self.is_native():
            return NATIVE_ASSET_CODE
        return f"{self.code}:{self.issuer}"
