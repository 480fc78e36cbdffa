"""
Risk profile schemas.
"""

from enum import Enum
from typing import Dict, List

from pydantic import Field, computed_field

from app.schemas.base import ApiModel
from app.services.change_review.patterns.priority import highest_risk_level


class RiskLevel(str, Enum):
    """Risk level enum, lowest to highest."""

    UNSET = "Unset"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


DEFAULT_RISK_PRIORITY: Dict[str, int] = {
    level.value: i for i, level in enumerate(RiskLevel)
}


class RiskProfile(ApiModel):
    """Per-dimension risk levels with the derived overall level."""

    safety: RiskLevel = RiskLevel.UNSET
    environmental: RiskLevel = RiskLevel.UNSET
    operational: RiskLevel = RiskLevel.UNSET
    risk_factors: List[str] = Field(default_factory=list)
    mitigations: List[str] = Field(default_factory=list)
    risk_priority: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_RISK_PRIORITY),
        exclude=True,
        repr=False,
        description="Level ranking from the pattern library; not serialized.",
    )

    @computed_field(alias="overall")
    @property
    def overall(self) -> RiskLevel:
        return RiskLevel(
            highest_risk_level(
                [self.safety.value, self.environmental.value, self.operational.value],
                self.risk_priority,
            )
        )
