from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class RegionProbeResult(BaseModel):
    """A region that reported at least one table during discovery."""

    region_id: str = Field(..., description="AWS region (or 'local')")
    table_count: int = Field(..., description="Number of table names returned by the probe")
    table_names: List[str] = Field(default_factory=list, description="Table names returned by the probe")

    model_config = ConfigDict(frozen=True)


class TableMatch(BaseModel):
    """A table name accepted by the table finder, with its rank."""

    name: str = Field(..., description="Table name")
    score: int = Field(0, description="Match score, higher ranks first")
    matched_indices: Tuple[int, ...] = Field(
        default=(), description="Positions of the name's characters that matched the pattern"
    )

    model_config = ConfigDict(frozen=True)
