from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class MachineStatus(BaseModel):
    plugged: bool
    out_of_order: bool
    nb_coffee_made: int = Field(..., ge=0)
    water_volume: float
    bean_volume: float
    bean_type: Optional[str] = None
    pump_capacity: float
    supports_crema: bool = False
