"""
PoolState — Состояние начисления share pool с линейным vesting

Immutable Pydantic модели для персистентного состояния начисления пула и
для snapshot всех публичных запросов в один момент времени.
Полная совместимость с JSON Schema (contracts/schema/pool_snapshot.json).

Каждая мутация пула строит новый PoolState через ``evolve``; engine
подменяет его только при commit всей операции.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.core.math.fixed_point import UINT256_MAX


# =============================================================================
# ENUMS
# =============================================================================


class VestingCurve(str, Enum):
    """
    Состояние кривой vesting в заданный момент.

    IDLE → VESTING (обновление расписания) → IDLE (окно истекло, определяется лениво)
    """

    IDLE = "IDLE"
    VESTING = "VESTING"


# =============================================================================
# POOL STATE MODEL
# =============================================================================


class PoolState(BaseModel):
    """
    Состояние начисления, принадлежащее одному экземпляру пула.

    Immutable модель (frozen=True). ``precision`` фиксируется при создании и
    переносится во все evolved копии.
    """

    precision: int = Field(..., gt=0, le=UINT256_MAX, description="Fixed-point scale")
    free_assets: int = Field(
        0, ge=0, le=UINT256_MAX, description="Vested активы (y-intercept кривой)"
    )
    issuance_rate: int = Field(
        0, ge=0, le=UINT256_MAX, description="Единиц актива в секунду, масштабировано precision"
    )
    last_updated: int = Field(0, ge=0, description="Timestamp якоря (UNIX секунды)")
    vesting_period_finish: int = Field(
        0, ge=0, description="Конец текущего окна vesting (UNIX секунды)"
    )

    model_config = {"frozen": True}

    @field_validator("vesting_period_finish")
    @classmethod
    def validate_window(cls, v: int, info) -> int:
        """Работающая кривая не может быть заякорена после своего finish"""
        rate = info.data.get("issuance_rate", 0)
        last_updated = info.data.get("last_updated", 0)
        if rate > 0 and v < last_updated:
            raise ValueError(
                f"vesting_period_finish {v} before last_updated {last_updated} "
                f"with issuance_rate {rate}"
            )
        return v

    def evolve(self, **changes: Any) -> "PoolState":
        """
        Валидированная копия с замененными полями.

        ``precision`` неизменяем на все время жизни пула.
        """
        if "precision" in changes and changes["precision"] != self.precision:
            raise ValueError("precision is immutable")
        data = self.model_dump()
        data.update(changes)
        return PoolState(**data)

    def curve_at(self, now: int) -> VestingCurve:
        """Состояние кривой vesting в ``now`` (истечение наблюдается, не хранится)"""
        if self.issuance_rate > 0 and now <= self.vesting_period_finish:
            return VestingCurve.VESTING
        return VestingCurve.IDLE


# =============================================================================
# SNAPSHOT MODEL
# =============================================================================


class PoolSnapshot(BaseModel):
    """
    Все публичные запросы пула, вычисленные по одному показанию часов.

    ``model_dump(mode="json")`` дает данные по схеме
    contracts/schema/pool_snapshot.json.
    """

    ts: int = Field(..., ge=0, description="Показание часов snapshot")
    state: PoolState = Field(..., description="Хранимое состояние начисления")
    curve: VestingCurve = Field(..., description="Состояние кривой vesting в ts")

    total_supply: int = Field(..., ge=0, description="Выпущено shares")
    custody_balance: int = Field(..., ge=0, description="Активы в custody")
    total_holdings: int = Field(..., ge=0, description="Vested holdings в ts")
    exchange_rate: int = Field(..., ge=0, description="Holdings на share, масштабировано")
    unvested_assets: int = Field(
        ..., ge=0, description="Излишек custody, еще не учтенный в total_holdings"
    )

    model_config = {"frozen": True}
