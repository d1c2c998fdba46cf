"""Subscription plan table.

Plans are loaded once at import time into a read-only mapping. Billing
strings coming from the payment provider are resolved through
`normalize_plan`, never compared ad hoc.
"""

from enum import Enum
from types import MappingProxyType

from aeobro.domain.value.common import ValueObject


class Plan(str, Enum):
    """Subscription tier."""

    LITE = "LITE"
    PLUS = "PLUS"
    PRO = "PRO"
    BUSINESS = "BUSINESS"
    ENTERPRISE = "ENTERPRISE"


class PlanDefinition(ValueObject):
    """Attributes of a plan tier."""

    plan: Plan
    label: str
    rank: int
    paid: bool


PLANS: MappingProxyType[Plan, PlanDefinition] = MappingProxyType(
    {
        Plan.LITE: PlanDefinition(plan=Plan.LITE, label="Lite", rank=0, paid=False),
        Plan.PLUS: PlanDefinition(plan=Plan.PLUS, label="Plus", rank=1, paid=True),
        Plan.PRO: PlanDefinition(plan=Plan.PRO, label="Pro", rank=2, paid=True),
        Plan.BUSINESS: PlanDefinition(
            plan=Plan.BUSINESS, label="Business", rank=3, paid=True
        ),
        Plan.ENTERPRISE: PlanDefinition(
            plan=Plan.ENTERPRISE, label="Enterprise", rank=4, paid=True
        ),
    }
)

# Legacy billing names
_ALIASES: MappingProxyType[str, Plan] = MappingProxyType({"FREE": Plan.LITE})

PAID_PLANS: frozenset[Plan] = frozenset(p for p, d in PLANS.items() if d.paid)


def normalize_plan(value: str | Plan | None) -> Plan:
    """Resolve a plan name from billing data.

    Unknown or empty values fall back to LITE.

    Args:
        value: Plan name in any case, or a Plan

    Returns:
        The matching Plan
    """
    if isinstance(value, Plan):
        return value
    key = (value or "").strip().upper()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return Plan(key)
    except ValueError:
        return Plan.LITE


def get_plan(value: str | Plan | None) -> PlanDefinition:
    """Look up the definition for a plan name."""
    return PLANS[normalize_plan(value)]
