from __future__ import annotations
from typing import Literal, List, Dict, Any
from pydantic import BaseModel, Field

from .models import DTIResult
from .presets import AFFORDABILITY_LIMITS


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


def affordability_findings(result: DTIResult) -> List[RuleResult]:
    """Explain a DTI result as coded findings, most severe first."""
    res: List[RuleResult] = []

    FE = result.front_end_dti
    BE = result.back_end_dti
    conv_BE = AFFORDABILITY_LIMITS["Conventional"]["BE"]
    fha_FE = AFFORDABILITY_LIMITS["FHA"]["FE"]
    fha_BE = AFFORDABILITY_LIMITS["FHA"]["BE"]
    ideal_BE = AFFORDABILITY_LIMITS["Ideal"]["BE"]

    if not result.can_afford_conventional:
        res.append(
            RuleResult(
                code="ABOVE_CONVENTIONAL_LIMIT",
                severity="critical",
                message="Total DTI exceeds the conventional lending limit.",
                context={"actual": BE, "limit": conv_BE},
            )
        )

    if not result.can_afford_fha:
        failed = []
        if FE > fha_FE:
            failed.append("front_end")
        if BE > fha_BE:
            failed.append("back_end")
        res.append(
            RuleResult(
                code="ABOVE_FHA_LIMIT",
                severity="warn",
                message="Housing or total DTI exceeds FHA limits.",
                context={
                    "failed": failed,
                    "front_end": FE,
                    "back_end": BE,
                    "front_end_limit": fha_FE,
                    "back_end_limit": fha_BE,
                },
            )
        )

    if not result.can_afford_ideal:
        res.append(
            RuleResult(
                code="ABOVE_IDEAL_LIMIT",
                severity="info",
                message="Total DTI is above the recommended ceiling.",
                context={"actual": BE, "limit": ideal_BE},
            )
        )

    if not res:
        res.append(
            RuleResult(
                code="WITHIN_IDEAL_RANGE",
                severity="info",
                message="Debt load is within the recommended range.",
                context={"front_end": FE, "back_end": BE},
            )
        )

    return res


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
