from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from chgateway.core import coercion
from chgateway.core.coercion import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN


# =========================
# RECORD
# =========================
class Record(BaseModel):
    """One row of the records table, as shown on the index page."""

    identifier: int = Field(0, ge=INT64_MIN, le=INT64_MAX)
    username: str = ""
    score: int = Field(0, ge=INT32_MIN, le=INT32_MAX)
    telephone: str = ""
    affiliation_code: str = ""
    extra_code: str = ""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Record":
        # coerce_row only ever returns in-range ints and strings
        return cls(**coercion.coerce_row(row))


# =========================
# STORE RESPONSE
# =========================
class StoreEnvelope(BaseModel):
    """
    ClickHouse FORMAT JSON body.

    Only `data` is read; meta/rows/statistics are ignored. A null `data`
    means no rows, a null row decodes to a record of zero values.
    """

    data: Optional[List[Optional[Dict[str, Any]]]] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    def records(self) -> List[Record]:
        return [Record.from_row(row or {}) for row in self.data or []]
