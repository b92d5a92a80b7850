"""Report input and generation result models for the advisor service."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from techreport.recommendations.models import Recommendation


class MachineDetails(BaseModel):
    """Hardware being reported on."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    make: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    serial_number: Optional[str] = Field(default=None, alias="serialNumber")
    ram: Optional[str] = None
    storage: Optional[str] = None
    processor: Optional[str] = None


class ReportData(BaseModel):
    """The parts of a support report used to ask for recommendations."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    machine_details: MachineDetails = Field(..., alias="machineDetails")
    user_complaint: str = Field(..., min_length=1, alias="userComplaint")
    findings: list[str] = Field(default_factory=list)


class ChatMessage(BaseModel):
    """One turn of assistant conversation history."""

    role: Literal["user", "assistant"]
    content: str


class GenerationMetadata(BaseModel):
    """Summary data stored alongside generated recommendations."""

    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    total_recommendations: int = 0
    priority_breakdown: dict[str, int] = Field(default_factory=dict)


class RecommendationResult(BaseModel):
    """Raw model output together with the parsed recommendations."""

    raw: str
    structured: list[Recommendation]
    metadata: GenerationMetadata
