"""
Monthly simulation tick.

Each ``run_*`` step reads the campaign (or its city) and returns an
``UpdateResult``; none of them mutate their inputs. ``process_monthly_tick``
runs the steps in order, folding each applied result into a fresh copy of
the campaign before the next step reads it.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

from ..config.config import settings
from ..data.levels import (
    ECONOMIC_OUTLOOK_LEVELS,
    MOOD_APPROVAL_DELTAS,
    MOOD_LEVELS,
    RATING_LEVELS,
    adjust_stat_level,
    derive_rating_from_value,
    level_index,
)
from .alea_prng import AleaPRNG
from .bill_authoring import council_vote_on_bill, decide_and_author_ai_bill
from .city_generator import calculate_detailed_income_sources
from .elections import generate_elections_for_city, get_election_types, is_election_due
from .models import Bill, Budget, Campaign, City, GameDate, NewsItem, Party, UpdateResult
from .politicians import normalize_party_popularities
from .stat_calculator import calculate_all_city_stats

logger = structlog.get_logger()

EDUCATION_POVERTY_THRESHOLDS = [10, 15, 22, 30]
POPULARITY_FLOOR = 0.5
POPULARITY_CEILING = 95.0
OPPOSITION_BONUS_CAP = 0.5
BILL_VOTE_DELAY_MONTHS = 2

BillAuthor = Callable[..., Optional[Bill]]


# --- Budget --------------------------------------------------------------


def run_monthly_budget_update(city: City, prng: AleaPRNG) -> UpdateResult:
    """
    Recompute income and reconcile the budget.

    Expenses are the literal sum of the current allocations, so manual
    edits are respected. A deficit adds to debt; a surplus pays it down but
    never below zero.
    """
    stats = city.stats
    if stats is None or stats.budget is None:
        return UpdateResult.skipped("city has no budget")
    if city.economic_profile is None:
        return UpdateResult.skipped("city has no economic profile")

    budget = stats.budget
    income_sources = calculate_detailed_income_sources(
        city.population,
        city.economic_profile.gdp_per_capita,
        budget.tax_rates,
        stats.type,
        city.economic_profile.dominant_industries,
        city.city_laws,
        prng,
    )
    total_income = sum(income_sources.values())
    total_expenses = sum(budget.expense_allocations.values())
    balance = total_income - total_expenses

    debt = budget.accumulated_debt
    if balance < 0:
        debt += -balance
    elif balance > 0:
        debt = max(0, debt - balance)

    if (
        total_income == budget.total_annual_income
        and total_expenses == budget.total_annual_expenses
        and balance == budget.balance
        and debt == budget.accumulated_debt
    ):
        return UpdateResult.unchanged()

    news = []
    if balance < 0 <= budget.balance:
        news.append(
            NewsItem(
                headline=f"{city.name} Budget Slips Into Deficit",
                summary="City spending now exceeds projected revenue.",
                type="budget_deficit",
                impact="negative",
            )
        )
    elif balance >= 0 > budget.balance:
        news.append(
            NewsItem(
                headline=f"{city.name} Balances Its Budget",
                summary="Revenue once again covers city spending.",
                type="budget_surplus",
                impact="positive",
            )
        )

    new_budget = budget.model_copy(
        update={
            "income_sources": income_sources,
            "total_annual_income": total_income,
            "total_annual_expenses": total_expenses,
            "balance": balance,
            "accumulated_debt": debt,
        }
    )
    return UpdateResult.applied(new_budget, news)


# --- Stats ---------------------------------------------------------------


def _mood_signal(stats) -> int:
    change = 0
    outlook = level_index(stats.economic_outlook, ECONOMIC_OUTLOOK_LEVELS)
    if outlook >= 3:
        change += 1
    if outlook <= 1:
        change -= 1
    if stats.crime_rate_per_1000 < 25:
        change += 1
    if stats.crime_rate_per_1000 > 60:
        change -= 1
    if stats.poverty_rate < 10:
        change += 1
    if stats.poverty_rate > 25:
        change -= 1
    if stats.healthcare_coverage > 90:
        change += 1
    return change


def run_monthly_stat_update(city: City) -> UpdateResult:
    """
    Recompute numeric stats and step the qualitative ones.

    Outlook and mood move at most one level per tick.
    """
    if city.stats is None:
        return UpdateResult.skipped("city has no stats")

    calculated = calculate_all_city_stats(city)
    if not calculated:
        return UpdateResult.skipped("city is missing budget, economy or demographics")

    old = city.stats
    stats = old.model_copy(update=calculated)

    outlook_change = 0
    if stats.unemployment_rate < 4.0:
        outlook_change += 1
    if stats.unemployment_rate > 8.0:
        outlook_change -= 1
    if outlook_change:
        stats = stats.model_copy(
            update={
                "economic_outlook": adjust_stat_level(
                    old.economic_outlook, ECONOMIC_OUTLOOK_LEVELS, outlook_change
                )
            }
        )

    mood_change = max(-1, min(1, _mood_signal(stats)))
    if mood_change:
        stats = stats.model_copy(
            update={
                "overall_citizen_mood": adjust_stat_level(
                    old.overall_citizen_mood, MOOD_LEVELS, mood_change
                )
            }
        )

    stats = stats.model_copy(
        update={
            "education_quality": derive_rating_from_value(
                stats.poverty_rate, EDUCATION_POVERTY_THRESHOLDS, list(reversed(RATING_LEVELS))
            )
        }
    )

    news = []
    if abs(stats.unemployment_rate - old.unemployment_rate) > 0.5:
        improving = stats.unemployment_rate < old.unemployment_rate
        news.append(
            NewsItem(
                headline=(
                    f"Unemployment in {city.name} "
                    f"{'falls' if improving else 'rises'} to {stats.unemployment_rate:.1f}%"
                ),
                summary=f"The rate moved from {old.unemployment_rate:.1f}% last month.",
                type="economic_update",
                impact="positive" if improving else "negative",
            )
        )

    if stats == old:
        return UpdateResult.unchanged()
    return UpdateResult.applied(stats, news)


# --- Legislation ---------------------------------------------------------


def run_ai_bill_proposals(
    campaign: Campaign,
    prng: AleaPRNG,
    author: BillAuthor = decide_and_author_ai_bill,
) -> UpdateResult:
    """Give every non-player council member a chance to propose a bill."""
    members = [
        m for m in campaign.council_members() if not m.is_player and m.id != campaign.player.id
    ]
    if not members:
        return UpdateResult.skipped("no AI council members")

    bills: List[Bill] = []
    for member in members:
        if prng.random() >= settings.ai_bill_probability:
            continue
        bill = author(member, campaign, prng, bills)
        if bill is not None:
            bills.append(bill)

    if not bills:
        return UpdateResult.unchanged()

    news = [
        NewsItem(
            headline=f"Council Member {b.proposer_name} Introduces {b.name}",
            summary=f"The bill focuses on {b.theme.lower()}.",
            type="legislation",
        )
        for b in bills
    ]
    return UpdateResult.applied(bills, news)


def _vote_is_due(bill: Bill, today: GameDate) -> bool:
    if bill.status != "proposed":
        return False
    if bill.proposed_date is None:
        return True
    return bill.proposed_date.add_months(BILL_VOTE_DELAY_MONTHS).is_on_or_before(today)


def run_bill_votes(campaign: Campaign, prng: AleaPRNG) -> UpdateResult:
    """
    Vote on bills that have been pending for at least two months.

    A bill passes on a strict majority of the whole council. Decided bills
    free their policies for future proposals.
    """
    members = campaign.council_members()
    if not members:
        return UpdateResult.skipped("no council to vote")

    due = [b for b in campaign.proposed_bills if _vote_is_due(b, campaign.current_date)]
    if not due:
        return UpdateResult.unchanged()

    decided: List[Bill] = []
    news = []
    for bill in due:
        yes, no = council_vote_on_bill(bill, members, prng)
        passed = yes * 2 > len(members)
        decided.append(bill.model_copy(update={"status": "passed" if passed else "failed"}))
        news.append(
            NewsItem(
                headline=f"City Council {'Passes' if passed else 'Rejects'} {bill.name}",
                summary=f"The vote was {yes} to {no}.",
                type="legislation",
            )
        )
        logger.info("Bill decided", bill=bill.id, yes=yes, no=no, passed=passed)

    return UpdateResult.applied(decided, news)


# --- Party popularity ----------------------------------------------------


def _incumbent_performance(city: City) -> float:
    stats = city.stats
    shift = 0.0
    if stats.poverty_rate > 20:
        shift -= 0.5
    elif stats.poverty_rate < 12:
        shift += 0.4
    if stats.crime_rate_per_1000 > 55:
        shift -= 0.7
    elif stats.crime_rate_per_1000 < 25:
        shift += 0.5
    if stats.unemployment_rate > 7.5:
        shift -= 0.5
    elif stats.unemployment_rate < 4:
        shift += 0.4
    return shift


def _opposition_bonus(city: City) -> float:
    stats = city.stats
    bonus = 0.0
    if stats.poverty_rate > 20:
        bonus += 0.3
    if stats.crime_rate_per_1000 > 55:
        bonus += 0.4
    if stats.unemployment_rate > 7.5:
        bonus += 0.25
    return min(OPPOSITION_BONUS_CAP, bonus)


def run_monthly_party_popularity_update(
    city: City, incumbent_party_id: Optional[str], prng: AleaPRNG
) -> UpdateResult:
    """Drift party popularity and reward or punish the governing party."""
    if not city.political_landscape:
        return UpdateResult.skipped("city has no political landscape")
    if city.stats is None:
        return UpdateResult.skipped("city has no stats")

    performance = _incumbent_performance(city)
    opposition = _opposition_bonus(city)

    shifted: List[Party] = []
    for party in city.political_landscape:
        value = party.popularity + prng.uniform(-0.25, 0.25)
        if incumbent_party_id:
            value += performance if party.id == incumbent_party_id else opposition
        value = max(POPULARITY_FLOOR, min(POPULARITY_CEILING, value))
        shifted.append(party.model_copy(update={"popularity": value}))

    landscape = normalize_party_popularities(shifted, settings.default_min_party_popularity)
    return UpdateResult.applied(landscape)


# --- Player approval -----------------------------------------------------


def run_monthly_player_approval_update(campaign: Campaign, prng: AleaPRNG) -> UpdateResult:
    """
    Nudge the player's approval by citizen mood.

    The mood effect is halved when the player is not the mayor.
    """
    stats = campaign.city.stats
    if stats is None:
        return UpdateResult.skipped("city has no stats")

    delta = 0
    if stats.overall_citizen_mood in MOOD_LEVELS:
        delta = MOOD_APPROVAL_DELTAS[MOOD_LEVELS.index(stats.overall_citizen_mood)]
    jitter = prng.randint(-1, 1)
    current = campaign.player.approval_rating

    if campaign.player_is_mayor:
        value = current + delta + jitter
    else:
        value = current + jitter + math.floor(delta / 2)
    value = max(0, min(100, int(round(value))))

    if value == current:
        return UpdateResult.unchanged()
    return UpdateResult.applied(value)


# --- State transitions ---------------------------------------------------


def apply_budget(campaign: Campaign, budget: Budget) -> Campaign:
    stats = campaign.city.stats.model_copy(update={"budget": budget})
    return campaign.model_copy(update={"city": campaign.city.model_copy(update={"stats": stats})})


def apply_stats(campaign: Campaign, stats) -> Campaign:
    return campaign.model_copy(update={"city": campaign.city.model_copy(update={"stats": stats})})


def apply_landscape(campaign: Campaign, landscape: List[Party]) -> Campaign:
    city = campaign.city.model_copy(update={"political_landscape": landscape})
    return campaign.model_copy(update={"city": city})


def apply_bills(campaign: Campaign, bills: List[Bill]) -> Campaign:
    return campaign.model_copy(update={"proposed_bills": campaign.proposed_bills + bills})


def apply_bill_votes(campaign: Campaign, decided: List[Bill]) -> Campaign:
    by_id = {b.id: b for b in decided}
    bills = [by_id.get(b.id, b) for b in campaign.proposed_bills]
    return campaign.model_copy(update={"proposed_bills": bills})


def apply_approval(campaign: Campaign, approval: int) -> Campaign:
    player = campaign.player.model_copy(update={"approval_rating": approval})
    return campaign.model_copy(update={"player": player})


def conclude_due_elections(campaign: Campaign) -> Campaign:
    """Mark elections whose date has passed as concluded."""
    elections = []
    last_years = dict(campaign.last_election_years)
    for election in campaign.elections:
        if election.outcome.status == "upcoming" and election.election_date.is_on_or_before(
            campaign.current_date
        ):
            outcome = election.outcome.model_copy(update={"status": "concluded"})
            election = election.model_copy(update={"outcome": outcome})
            last_years[election.election_type_id] = election.election_date.year
            logger.info("Election concluded", election_id=election.id)
        elections.append(election)
    return campaign.model_copy(update={"elections": elections, "last_election_years": last_years})


def schedule_next_elections(campaign: Campaign, prng: AleaPRNG) -> Campaign:
    """
    Open the next cycle for offices whose last election has been held.

    A type is scheduled once its frequency has elapsed since the recorded
    year and no instance of it is still upcoming.
    """
    upcoming = {e.election_type_id for e in campaign.elections if e.outcome.status == "upcoming"}
    last_years = campaign.last_election_years
    due = [
        t.id
        for t in get_election_types(campaign.city.country_id, level="local_city")
        if t.id in last_years
        and t.id not in upcoming
        and is_election_due(t, campaign.current_date.year, last_years[t.id])
    ]
    if not due:
        return campaign

    elections = generate_elections_for_city(
        campaign.city,
        campaign.current_date,
        campaign.government_offices,
        last_years,
        prng,
        election_type_ids=due,
    )
    news = [
        NewsItem(
            headline=f"{e.office_name} Race Set for {e.election_date.year}",
            summary=f"Candidates must file by {e.filing_deadline.month}/{e.filing_deadline.year}.",
            type="election_scheduled",
            date=campaign.current_date,
        )
        for e in elections
    ]
    return campaign.model_copy(
        update={"elections": campaign.elections + elections, "news": campaign.news + news}
    )


def _incumbent_party_id(campaign: Campaign) -> Optional[str]:
    executive = campaign.city_executive()
    if executive and executive.holder:
        return executive.holder.party_id
    return None


class TickReport(BaseModel):
    """The campaign after a tick plus each step's result."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    campaign: Campaign
    results: Dict[str, UpdateResult] = Field(default_factory=dict)


def run_monthly_tick(campaign: Campaign, prng: AleaPRNG) -> TickReport:
    """Run one month: budget, stats, legislation, parties, approval, calendar."""
    results: Dict[str, UpdateResult] = {}
    state = campaign

    logger.info("Step 1: Budget update", month=state.current_date.key())
    results["budget"] = run_monthly_budget_update(state.city, prng)
    if results["budget"].changed:
        state = apply_budget(state, results["budget"].updates)

    logger.info("Step 2: Stat update")
    results["stats"] = run_monthly_stat_update(state.city)
    if results["stats"].changed:
        state = apply_stats(state, results["stats"].updates)

    logger.info("Step 3: AI bill proposals")
    results["bills"] = run_ai_bill_proposals(state, prng)
    if results["bills"].changed:
        state = apply_bills(state, results["bills"].updates)

    logger.info("Step 4: Bill votes")
    results["votes"] = run_bill_votes(state, prng)
    if results["votes"].changed:
        state = apply_bill_votes(state, results["votes"].updates)

    logger.info("Step 5: Party popularity")
    results["parties"] = run_monthly_party_popularity_update(
        state.city, _incumbent_party_id(state), prng
    )
    if results["parties"].changed:
        state = apply_landscape(state, results["parties"].updates)

    logger.info("Step 6: Player approval")
    results["approval"] = run_monthly_player_approval_update(state, prng)
    if results["approval"].changed:
        state = apply_approval(state, results["approval"].updates)

    for name, result in results.items():
        if result.status == "skipped":
            logger.warning("Monthly step skipped", step=name, reason=result.reason)

    news = [item for result in results.values() for item in result.news_items]
    next_date = state.current_date.add_months(1)
    news = [n.model_copy(update={"date": next_date}) for n in news]

    state = state.model_copy(
        update={
            "current_date": next_date,
            "months_elapsed": state.months_elapsed + 1,
            "news": state.news + news,
        }
    )
    state = conclude_due_elections(state)
    state = schedule_next_elections(state, prng)
    return TickReport(campaign=state, results=results)


def process_monthly_tick(campaign: Campaign, prng: AleaPRNG) -> Campaign:
    return run_monthly_tick(campaign, prng).campaign
