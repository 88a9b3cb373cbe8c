from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

RISK_LEVELS = ("low", "medium", "high")


class RiskLabeledCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    command: str = Field(min_length=1)
    description: str = Field(min_length=1)
    risk: str = Field(pattern="^(low|medium|high)$")


class ExecutionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    output: Optional[str] = None
    error: Optional[str] = None
