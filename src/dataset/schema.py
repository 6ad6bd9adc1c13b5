from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------- Observation ----------


class Observation(BaseModel):
    """A single beak-depth measurement (mm) of a finch caught in a given year."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    year: Literal[1976, 1978]
    depth: float = Field(gt=0)
