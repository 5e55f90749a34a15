"""
Schedule Optimization Schemas

Suggestions produced by the schedule cost optimizer and the aggregate
result with its risk assessment.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class SuggestionType(str, Enum):
    REDUCE_HOURS = "REDUCE_HOURS"
    SPLIT_SHIFT = "SPLIT_SHIFT"
    AVOID_NIGHT = "AVOID_NIGHT"
    REDISTRIBUTE_WORKLOAD = "REDISTRIBUTE_WORKLOAD"


class RiskLevel(str, Enum):
    """Operational risk of acting on a suggestion."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class OptimizationSuggestion(BaseModel):
    """A proposed schedule change with its cost impact."""

    id: str = Field(..., description="Deterministic suggestion key")
    type: SuggestionType
    title: str
    description: str
    current_cost: Decimal
    optimized_cost: Decimal
    savings: Decimal
    savings_percentage: Decimal = Field(..., description="Savings as % of current cost")
    risk_level: RiskLevel
    legal_compliance: bool = Field(
        ...,
        description="The change itself is lawful; says nothing about whether it is advisable",
    )
    affected_employees: list[int] = Field(default_factory=list)
    implementation: str = ""
    caveats: list[str] = Field(default_factory=list)


class RiskAssessment(BaseModel):
    overall_risk: RiskLevel
    compliance_score: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Fraction of suggestions flagged legally compliant",
    )
    operational_impact: str


class WorkerCost(BaseModel):
    """Weekly payroll cost of one worker across the analysed schedules."""

    employee_id: int
    employee_name: str
    total_hours: Decimal
    total_cost: Decimal


class OptimizationResult(BaseModel):
    current_total_cost: Decimal
    optimized_total_cost: Decimal
    total_savings: Decimal
    total_savings_percentage: Decimal
    suggestions: list[OptimizationSuggestion] = Field(default_factory=list)
    worker_costs: list[WorkerCost] = Field(default_factory=list)
    risk_assessment: RiskAssessment
