from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class SmartScore(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    final_score: int = Field(alias="finalScore")
    grade: str
    label: str
    penalties: int
    suggestions: List[str] = []


class Radar(BaseModel):
    model_config = ConfigDict(frozen=True)

    performance: int
    seo: int
    security: int
    accessibility: int


class AuditResult(BaseModel):
    """One completed audit of a target, as returned by ``GET /audit``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str
    timestamp: str
    performance: int
    accessibility: int
    seo: int
    security: int
    header_checks: List[str] = Field(default_factory=list, alias="headerChecks")
    axe_summary: str = Field(alias="axeSummary")
    axe_details: List[Any] = Field(default_factory=list, alias="axeDetails")
    smart_score: int = Field(alias="smartScore")
    smart_grade: str = Field(alias="smartGrade")
    smart_label: str = Field(alias="smartLabel")
    penalties: int
    suggestions: List[str] = Field(default_factory=list)
    radar: Radar

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class HealthResponse(BaseModel):
    ok: bool = True
    message: str
    queue: dict = {}
    cache_size: int = Field(0, serialization_alias="cacheSize")
