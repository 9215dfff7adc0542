"""Параметры конструирования пула."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Final, Mapping

from src.core.contracts import validate_pool_config
from src.core.math.fixed_point import UINT256_MAX

# Fixed-point scale по умолчанию (актив с шестью знаками)
DEFAULT_PRECISION: Final[int] = 10**6

# Scale годовой доходности (1e6 == 100%)
DEFAULT_ASSET_SCALE: Final[int] = 10**6

SECONDS_PER_YEAR: Final[int] = 365 * 24 * 60 * 60

DEFAULT_POOL_ACCOUNT: Final[str] = "pool"


@dataclass(frozen=True)
class PoolConfig:
    """Неизменяемые параметры пула.

    - precision: fixed-point scale для всех rate/ratio; выбирать так, чтобы
      deposit * precision оставался ниже UINT256_MAX
    - asset_scale: scale значения ``apr()``
    - seconds_per_year: длина года для ``apr()``
    - pool_account: id счета пула в custody
    """

    precision: int = DEFAULT_PRECISION
    asset_scale: int = DEFAULT_ASSET_SCALE
    seconds_per_year: int = SECONDS_PER_YEAR
    pool_account: str = DEFAULT_POOL_ACCOUNT

    def __post_init__(self) -> None:
        for name in ("precision", "asset_scale", "seconds_per_year"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be int, got {value!r}")
            if value <= 0 or value > UINT256_MAX:
                raise ValueError(f"{name} must be in [1, UINT256_MAX], got {value}")
        if not self.pool_account:
            raise ValueError("pool_account must be non-empty")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PoolConfig":
        """Сборка config из сырых данных, проверенных по pool_config.json.

        Отсутствующие ключи берутся по умолчанию.

        Raises:
            jsonschema.ValidationError: неизвестные ключи или неверные типы/диапазоны
        """
        raw = dict(data)
        validate_pool_config(raw)
        return cls(**raw)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
