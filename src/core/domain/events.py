"""
Pool events — append-only журнал закоммиченных операций пула

Immutable Pydantic модели. Событие публикуется только после полного commit
породившей его операции; откаченные операции следов не оставляют.
Соответствует схеме contracts/schema/pool_event.json.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field


class PoolEvent(BaseModel):
    """Общие поля всех событий пула"""

    ts: int = Field(..., ge=0, description="Показание часов операции")

    model_config = {"frozen": True}


class Deposit(PoolEvent):
    """Активы переведены в custody, shares выпущены receiver"""

    event: Literal["Deposit"] = "Deposit"
    caller: str = Field(..., min_length=1)
    receiver: str = Field(..., min_length=1)
    assets: int = Field(..., gt=0)
    shares: int = Field(..., ge=0)


class Withdraw(PoolEvent):
    """Shares сожжены у caller, активы отправлены receiver (redeem или withdraw)"""

    event: Literal["Withdraw"] = "Withdraw"
    caller: str = Field(..., min_length=1)
    receiver: str = Field(..., min_length=1)
    assets: int = Field(..., ge=0)
    shares: int = Field(..., ge=0)


class IssuanceParamsUpdated(PoolEvent):
    """Состояние начисления переякорено после операции участника"""

    event: Literal["IssuanceParamsUpdated"] = "IssuanceParamsUpdated"
    last_updated: int = Field(..., ge=0)
    free_assets: int = Field(..., ge=0)
    issuance_rate: int = Field(..., ge=0)


class VestingScheduleUpdated(PoolEvent):
    """Owner запустил новое окно vesting"""

    event: Literal["VestingScheduleUpdated"] = "VestingScheduleUpdated"
    owner: str = Field(..., min_length=1)
    vesting_period_finish: int = Field(..., ge=0)
    issuance_rate: int = Field(..., ge=0)
    free_assets: int = Field(..., ge=0)


class PendingOwnerSet(PoolEvent):
    event: Literal["PendingOwnerSet"] = "PendingOwnerSet"
    owner: str = Field(..., min_length=1)
    pending_owner: Optional[str] = None


class OwnershipAccepted(PoolEvent):
    event: Literal["OwnershipAccepted"] = "OwnershipAccepted"
    previous_owner: str = Field(..., min_length=1)
    new_owner: str = Field(..., min_length=1)


AnyPoolEvent = Union[
    Deposit,
    Withdraw,
    IssuanceParamsUpdated,
    VestingScheduleUpdated,
    PendingOwnerSet,
    OwnershipAccepted,
]
