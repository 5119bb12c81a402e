"""Static catalog of cognitive biases the insight engine can attach to insights"""

from typing import Dict, List

from revelation_gateway.domain.exceptions import UnknownBiasError
from revelation_gateway.domain.models import CognitiveBias

STATUS_QUO = "status_quo"
AVAILABILITY_HEURISTIC = "availability_heuristic"
OPTIMISM_BIAS = "optimism_bias"
MENTAL_ACCOUNTING = "mental_accounting"
LOSS_AVERSION = "loss_aversion"
PRESENT_BIAS = "present_bias"

_CATALOG: Dict[str, CognitiveBias] = {
    STATUS_QUO: CognitiveBias(
        key=STATUS_QUO,
        name="Status quo bias",
        type="planning",
        description="Tendency to keep costly habits out of inertia",
        psychological_fact="Our brain prefers to avoid hard decisions, even when they cost us money",
        severity="medium",
        recommendation="Schedule a monthly review of your subscriptions and recurring expenses",
    ),
    AVAILABILITY_HEURISTIC: CognitiveBias(
        key=AVAILABILITY_HEURISTIC,
        name="Availability heuristic",
        type="spending",
        description="Overweighting recent and memorable expenses",
        psychological_fact="We judge how likely an event is by how easily we can recall it",
        severity="low",
        recommendation="Budget from 3-month averages rather than your latest expenses",
    ),
    OPTIMISM_BIAS: CognitiveBias(
        key=OPTIMISM_BIAS,
        name="Optimism bias",
        type="planning",
        description="Systematically overestimating your future income",
        psychological_fact="80% of people believe they are above average with money",
        severity="high",
        recommendation="Base your goals on past performance, not on your hopes",
    ),
    MENTAL_ACCOUNTING: CognitiveBias(
        key=MENTAL_ACCOUNTING,
        name="Mental accounting",
        type="spending",
        description="Treating money differently depending on where it came from",
        psychological_fact="We spend 'bonus' money more easily than our regular salary",
        severity="medium",
        recommendation="Treat every source of income the same way in your budget",
    ),
    LOSS_AVERSION: CognitiveBias(
        key=LOSS_AVERSION,
        name="Loss aversion",
        type="emotional",
        description="Excessive fear of losing money that blocks investing",
        psychological_fact="Losing 100 hurts twice as much as gaining 100 feels good",
        severity="medium",
        recommendation="Focus on long-term gains rather than short-term losses",
    ),
    PRESENT_BIAS: CognitiveBias(
        key=PRESENT_BIAS,
        name="Present bias",
        type="saving",
        description="Excessive preference for immediate rewards",
        psychological_fact="Our brain values future rewards 50% less than immediate ones",
        severity="high",
        recommendation="Automate your savings to get around the temptation to spend",
    ),
}


def get_bias(key: str) -> CognitiveBias:
    """Look up a bias by key, raising UnknownBiasError for missing entries"""
    try:
        return _CATALOG[key]
    except KeyError:
        raise UnknownBiasError(f"Unknown cognitive bias: {key}") from None


def list_biases() -> List[CognitiveBias]:
    return list(_CATALOG.values())
