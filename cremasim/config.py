from functools import lru_cache
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict, BaseSettings


class MachineSettings(BaseSettings):
    min_water_volume: float = Field(0.0, validation_alias="MIN_WATER_VOLUME")
    max_water_volume: float = Field(10.0, validation_alias="MAX_WATER_VOLUME")
    min_bean_volume: float = Field(0.0, validation_alias="MIN_BEAN_VOLUME")
    max_bean_volume: float = Field(10.0, validation_alias="MAX_BEAN_VOLUME")

    pump_capacity: float = Field(700, validation_alias="PUMP_CAPACITY")

    water_per_serving: float = Field(0.15, gt=0, validation_alias="WATER_PER_SERVING")
    beans_per_serving: float = Field(0.01, gt=0, validation_alias="BEANS_PER_SERVING")
    failure_threshold: float = Field(0.7, gt=0, validation_alias="FAILURE_THRESHOLD")

    log_ring_size: int = Field(200, gt=0, validation_alias="LOG_RING_SIZE")

    # Testing / determinism hooks
    random_seed: Optional[int] = Field(None, validation_alias="RANDOM_SEED")
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")

    @model_validator(mode="after")
    def _check_bounds(self) -> "MachineSettings":
        if self.min_water_volume > self.max_water_volume:
            raise ValueError("min_water_volume must not exceed max_water_volume")
        if self.min_bean_volume > self.max_bean_volume:
            raise ValueError("min_bean_volume must not exceed max_bean_volume")
        return self


@lru_cache
def get_settings() -> MachineSettings:
    return MachineSettings()
