"""
Engine Configuration — параметры протокола и payload конструктора

EngineConfig — immutable Pydantic модель параметров протокола. Значения по
умолчанию совпадают с константами протокола:
- precision = 1e18 (фиксирован)
- additional_feed_precision = 1e10 (фиксирован)
- liquidation_threshold = 50 (%)
- liquidation_bonus = 10 (%)
- liquidation_precision = 100
- min_health_factor = 1e18

EngineDeployment — payload создания движка (JSON-контракт engine_config.json):
адреса активов обеспечения, идентификаторы их price feeds и параметры.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from src.core.contracts import validate_engine_config
from src.core.math.fixed_point import ADDITIONAL_FEED_PRECISION, PRECISION
from src.core.math.health_factor import (
    LIQUIDATION_BONUS,
    LIQUIDATION_PRECISION,
    LIQUIDATION_THRESHOLD,
    MIN_HEALTH_FACTOR,
)

DEFAULT_ENGINE_ADDRESS = "collateral-engine"


class EngineConfig(BaseModel):
    """Параметры протокола."""

    precision: int = Field(PRECISION, gt=0, description="Масштаб fixed-point")
    additional_feed_precision: int = Field(
        ADDITIONAL_FEED_PRECISION, gt=0, description="Множитель 8-значного фида до 18 знаков"
    )
    liquidation_threshold: int = Field(
        LIQUIDATION_THRESHOLD, ge=1, le=100, description="Учитываемая доля обеспечения (%)"
    )
    liquidation_bonus: int = Field(
        LIQUIDATION_BONUS, ge=0, le=100, description="Бонус ликвидатора (%)"
    )
    liquidation_precision: int = Field(
        LIQUIDATION_PRECISION, gt=0, description="Делитель процентных параметров"
    )
    min_health_factor: int = Field(
        MIN_HEALTH_FACTOR, gt=0, description="Порог ликвидации (fixed-point)"
    )

    model_config = {"frozen": True}

    @field_validator("precision", "additional_feed_precision")
    @classmethod
    def validate_fixed_scale(cls, v: int, info: ValidationInfo) -> int:
        """
        Масштабы фиксированы: цены фидов всегда нормализуются к 18 знакам.

        Параметры доступны только для чтения (read-аксессоры движка).
        """
        expected = {
            "precision": PRECISION,
            "additional_feed_precision": ADDITIONAL_FEED_PRECISION,
        }[info.field_name]
        if v != expected:
            raise ValueError(f"{info.field_name} must be {expected}, got {v}")
        return v

    @model_validator(mode="after")
    def validate_percentages(self) -> "EngineConfig":
        """Процентные параметры не превышают свой делитель."""
        if self.liquidation_threshold > self.liquidation_precision:
            raise ValueError(
                f"liquidation_threshold {self.liquidation_threshold} exceeds "
                f"liquidation_precision {self.liquidation_precision}"
            )
        if self.liquidation_bonus > self.liquidation_precision:
            raise ValueError(
                f"liquidation_bonus {self.liquidation_bonus} exceeds "
                f"liquidation_precision {self.liquidation_precision}"
            )
        return self


class EngineDeployment(BaseModel):
    """Payload создания движка."""

    schema_version: str = Field("1", pattern="^1$")
    engine_address: str = Field(DEFAULT_ENGINE_ADDRESS, min_length=1)
    collateral_assets: list[str] = Field(default_factory=list)
    price_feeds: list[str] = Field(default_factory=list)
    parameters: EngineConfig = Field(default_factory=EngineConfig)

    model_config = {"frozen": True}


def parse_engine_deployment(data: Dict[str, Any]) -> EngineDeployment:
    """
    Разбор payload создания движка.

    Сначала JSON Schema (формальный контракт), затем Pydantic (типы и
    кросс-полевые проверки). Несовпадение длин списков здесь не проверяется:
    это ошибка LengthMismatch при создании движка.

    Raises:
        jsonschema.ValidationError: Нарушение контракта engine_config.json
        pydantic.ValidationError: Нарушение ограничений EngineConfig
    """
    validate_engine_config(data)
    return EngineDeployment.model_validate(data)
