"""
AI bill authoring.

A council member scores every city policy by how well it fits their
ideology and the city's main issues, penalised by cost when the budget is
in trouble. If the best policy clears the threshold, a bill is drafted
around it, sometimes bundling related policies from the same area. Pending
bills go to a council vote decided by the same ideology fit.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

import numpy as np
import structlog

from ..data.ideologies import IDEOLOGY_AXES
from ..data.policies import CITY_POLICIES, CITY_POLICIES_BY_ID
from .alea_prng import AleaPRNG
from .models import Bill, BillPolicy, Budget, Campaign, Politician

logger = structlog.get_logger()

DIRE_THRESHOLD = 0.1
NORMAL_THRESHOLD = 1.2
ISSUE_BONUS = 1.0
DIRE_COST_PENALTY = 0.4
MAX_BUNDLED_POLICIES = 2
VOTE_NOISE = 0.5

_AREA_THEMES = {
    "economy": "Economic Growth",
    "safety": "Public Safety",
    "education": "Education Quality",
    "infrastructure": "Infrastructure Development",
    "environment": "Environmental Protection",
    "health": "Healthcare Access",
    "housing": "Social Welfare",
}


def finances_are_dire(budget: Optional[Budget]) -> bool:
    if budget is None:
        return False
    return budget.balance < 0 or budget.accumulated_debt > budget.total_annual_income * 0.5


def _ideology_fit(policy: Dict, politician: Politician) -> float:
    ideology = np.array([politician.ideology_scores.get(a, 0.0) for a in IDEOLOGY_AXES])
    lean = np.array([policy["ideology_lean"][a] for a in IDEOLOGY_AXES])
    return float(ideology @ lean) / 3.0


def _policy_score(
    policy: Dict, politician: Politician, main_issues: List[str], dire: bool
) -> float:
    score = _ideology_fit(policy, politician)

    if set(policy["addresses_issues"]) & set(main_issues):
        score += ISSUE_BONUS
    if dire:
        score -= policy["cost_level"] * DIRE_COST_PENALTY
    return score


def _choose_parameters(policy: Dict, dire: bool, prng: AleaPRNG) -> Dict:
    param = policy.get("parameter")
    if not param:
        return {}
    if dire:
        return {param["key"]: param["min"]}
    return {param["key"]: prng.randint(param["min"], param["max"])}


def _taken_policy_ids(bills: List[Bill]) -> Set[str]:
    return {pid for bill in bills if bill.status == "proposed" for pid in bill.policy_ids}


def decide_and_author_ai_bill(
    politician: Politician,
    campaign: Campaign,
    prng: AleaPRNG,
    bills_this_tick: Optional[List[Bill]] = None,
) -> Optional[Bill]:
    """
    Draft a bill for ``politician`` or return None when nothing is worth it.

    Policies already on the table, either pending in the campaign or
    drafted earlier in the same tick, are not proposed again.
    """
    stats = campaign.city.stats
    if stats is None:
        return None

    dire = finances_are_dire(stats.budget)
    threshold = DIRE_THRESHOLD if dire else NORMAL_THRESHOLD
    taken = _taken_policy_ids(campaign.proposed_bills) | _taken_policy_ids(bills_this_tick or [])

    candidates = [p for p in CITY_POLICIES if p["id"] not in taken]
    if not candidates:
        return None

    scored = sorted(
        ((p, _policy_score(p, politician, stats.main_issues, dire)) for p in candidates),
        key=lambda pair: pair[1],
        reverse=True,
    )
    lead, lead_score = scored[0]
    if lead_score < threshold:
        logger.debug(
            "No policy worth proposing",
            politician=politician.id,
            best=lead["id"],
            score=round(lead_score, 2),
        )
        return None

    related = [p for p, _ in scored[1:] if p["area"] == lead["area"]]
    extras = prng.sample(related, prng.randint(0, MAX_BUNDLED_POLICIES))
    chosen = [lead] + extras

    theme = _AREA_THEMES.get(lead["area"], lead["area"].title())
    name = f"{lead['name']} Act" if len(chosen) == 1 else f"{theme} Package"

    bill = Bill(
        id=f"bill_{prng.token()}",
        name=name,
        proposer_id=politician.id,
        proposer_name=politician.name,
        policies=[
            BillPolicy(policy_id=p["id"], chosen_parameters=_choose_parameters(p, dire, prng))
            for p in chosen
        ],
        theme=theme,
        proposed_date=campaign.current_date,
    )
    logger.info("AI bill drafted", bill=bill.name, proposer=politician.name, policies=bill.policy_ids)
    return bill


def council_vote_on_bill(
    bill: Bill, members: List[Politician], prng: AleaPRNG
) -> Tuple[int, int]:
    """
    Put a bill to the council.

    Each member weighs the bill's policies against their own ideology, with
    some noise; the proposer always votes yes.

    Returns:
        Tuple of (yes votes, no votes)
    """
    policies = [CITY_POLICIES_BY_ID[pid] for pid in bill.policy_ids if pid in CITY_POLICIES_BY_ID]
    yes = 0
    for member in members:
        if member.id == bill.proposer_id:
            yes += 1
            continue
        fit = float(np.mean([_ideology_fit(p, member) for p in policies])) if policies else 0.0
        if fit + prng.uniform(-VOTE_NOISE, VOTE_NOISE) > 0:
            yes += 1
    return yes, len(members) - yes
