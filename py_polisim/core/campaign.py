"""
Campaign state transitions.

A ``Campaign`` is only ever replaced, never edited. Each function here takes
the current state plus an action and returns the next state.
``CampaignController`` binds those functions to one PRNG stream.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

import structlog

from ..config.config import settings
from ..utils.random import resolve_prng
from .alea_prng import AleaPRNG
from .city_generator import CityGenerationOptions, generate_full_city_data
from .election_systems import eligible_voters
from .elections import generate_elections_for_city, generate_initial_government_offices
from .models import Bill, Campaign, ElectionInstance, GameDate, NewsItem, UpdateResult
from .monthly_tick import (
    apply_approval,
    apply_bill_votes,
    apply_bills,
    apply_budget,
    apply_landscape,
    apply_stats,
    process_monthly_tick,
)
from .names import NameGenerator
from .politicians import generate_full_ai_politician, generate_national_parties
from .scoring import normalize_polling, score_candidates

logger = structlog.get_logger()

_APPLIERS: Dict[str, Callable] = {
    "budget": apply_budget,
    "stats": apply_stats,
    "bills": apply_bills,
    "votes": apply_bill_votes,
    "parties": apply_landscape,
    "approval": apply_approval,
}


def start_campaign(
    seed: Optional[str] = None,
    country_id: Optional[str] = None,
    population: Optional[int] = None,
    player_name: Optional[str] = None,
    player_party_id: Optional[str] = None,
    player_is_mayor: bool = False,
    prng: Optional[AleaPRNG] = None,
) -> Campaign:
    """
    Generate a new campaign: parties, city, offices, elections and player.

    The same seed and arguments always produce the same campaign. With
    ``player_is_mayor`` the player replaces the generated city executive.
    """
    seed = seed or settings.default_seed
    country_id = country_id or settings.default_country_id
    population = settings.default_city_population if population is None else population
    prng = prng or AleaPRNG(seed)
    names = NameGenerator(prng)

    logger.info("Starting campaign", seed=seed, country=country_id, population=population)

    logger.info("Step 1: National parties")
    national = generate_national_parties(prng, country_id=country_id)

    logger.info("Step 2: City")
    city = generate_full_city_data(
        CityGenerationOptions(population=population, country_id=country_id, base_parties=national),
        prng,
        names,
    )

    start_date = GameDate(year=settings.default_start_year, month=1, day=1)

    logger.info("Step 3: Government offices")
    offices = generate_initial_government_offices(city, prng, start_date, names)

    logger.info("Step 4: Player")
    party = next((p for p in city.political_landscape if p.id == player_party_id), None)
    if player_party_id and party is None:
        logger.warning("Unknown player party, running as independent", party_id=player_party_id)
    player = generate_full_ai_politician(party, prng, name_generator=names, id_prefix="player")
    update = {"is_player": True, "approval_rating": 50}
    if player_name:
        first, _, last = player_name.partition(" ")
        update.update({"name": player_name, "first_name": first, "last_name": last})

    executive = next(
        (o for o in offices if o.level == "local_city" and o.number_of_seats == 1), None
    )
    if player_is_mayor and executive is not None:
        update.update({"current_office": executive.office_name, "is_incumbent": True})
    player = player.model_copy(update=update)
    if player_is_mayor and executive is not None:
        offices = [o.model_copy(update={"holder": player}) if o is executive else o for o in offices]

    logger.info("Step 5: Elections")
    elections = generate_elections_for_city(city, start_date, offices, {}, prng)

    campaign = Campaign(
        id=f"campaign_{prng.token()}",
        seed=seed,
        country_id=country_id,
        start_date=start_date,
        current_date=start_date,
        player=player,
        city=city,
        national_parties=national,
        elections=elections,
        government_offices=offices,
        news=[
            NewsItem(
                headline=f"{player.name} Enters {city.name} Politics",
                type="campaign_start",
                date=start_date,
            )
        ],
    )
    logger.info("Campaign started", campaign_id=campaign.id, city=city.name)
    return campaign


def advance_month(campaign: Campaign, prng: Optional[AleaPRNG] = None) -> Campaign:
    return process_monthly_tick(campaign, resolve_prng(prng))


def _repoll_election(election: ElectionInstance, campaign: Campaign, prng: AleaPRNG):
    city = campaign.city
    voters = eligible_voters(city.population, prng)

    if election.candidates is not None:
        scored = score_candidates(election.candidates, election, city, prng)
        return election.model_copy(update={"candidates": normalize_polling(scored, voters)})

    if election.party_lists is not None:
        lists = {
            party_id: score_candidates(members, election, city, prng)
            for party_id, members in election.party_lists.items()
        }
        return election.model_copy(update={"party_lists": lists})

    if election.mmp_data is not None:
        mmp = election.mmp_data
        by_party = mmp.constituency_candidates_by_party
        flat = [c for members in by_party.values() for c in members]
        flat += mmp.independent_constituency_candidates
        polled = normalize_polling(score_candidates(flat, election, city, prng), voters)

        rebuilt: Dict[str, List] = {}
        cursor = 0
        for party_id, members in by_party.items():
            rebuilt[party_id] = polled[cursor : cursor + len(members)]
            cursor += len(members)
        mmp = mmp.model_copy(
            update={
                "constituency_candidates_by_party": rebuilt,
                "independent_constituency_candidates": polled[cursor:],
            }
        )
        return election.model_copy(update={"mmp_data": mmp})

    return election


def refresh_polling(campaign: Campaign, prng: Optional[AleaPRNG] = None) -> Campaign:
    """Re-score every upcoming election against the city as it is now."""
    prng = resolve_prng(prng)
    elections = [
        _repoll_election(e, campaign, prng) if e.outcome.status == "upcoming" else e
        for e in campaign.elections
    ]
    return campaign.model_copy(update={"elections": elections})


def apply_update(campaign: Campaign, step: str, result: UpdateResult) -> Campaign:
    """
    Fold one monthly step's result into the campaign.

    Raises:
        ValueError: if ``step`` is not a known monthly step
    """
    if step not in _APPLIERS:
        raise ValueError(f"Unknown monthly step: {step}")
    if not result.changed:
        return campaign
    campaign = _APPLIERS[step](campaign, result.updates)
    if result.news_items:
        dated = [n.model_copy(update={"date": n.date or campaign.current_date}) for n in result.news_items]
        campaign = campaign.model_copy(update={"news": campaign.news + dated})
    return campaign


def propose_bill(campaign: Campaign, bill: Bill) -> Campaign:
    """
    Add a bill to the pending list.

    Raises:
        ValueError: if a bill with the same id is already on file
    """
    if any(b.id == bill.id for b in campaign.proposed_bills):
        raise ValueError(f"Bill {bill.id} already proposed")
    bill = bill.model_copy(
        update={"status": "proposed", "proposed_date": bill.proposed_date or campaign.current_date}
    )
    news = NewsItem(
        headline=f"{bill.proposer_name} Introduces {bill.name}",
        type="legislation",
        date=campaign.current_date,
    )
    return campaign.model_copy(
        update={"proposed_bills": campaign.proposed_bills + [bill], "news": campaign.news + [news]}
    )


class CampaignController:
    """Applies campaign transitions with a single PRNG stream."""

    def __init__(self, prng: Optional[AleaPRNG] = None, seed: Optional[str] = None):
        if prng is None:
            prng = AleaPRNG(seed) if seed else resolve_prng(None)
        self.prng = prng

    @classmethod
    def for_month(cls, campaign: Campaign) -> CampaignController:
        """Controller whose stream depends only on the seed and month."""
        return cls(AleaPRNG(f"{campaign.seed}:{campaign.months_elapsed}"))

    def start_campaign(self, **kwargs) -> Campaign:
        return start_campaign(prng=self.prng, **kwargs)

    def advance_month(self, campaign: Campaign, months: int = 1) -> Campaign:
        for _ in range(months):
            campaign = advance_month(campaign, self.prng)
        return campaign

    def refresh_polling(self, campaign: Campaign) -> Campaign:
        return refresh_polling(campaign, self.prng)

    def apply_update(self, campaign: Campaign, step: str, result: UpdateResult) -> Campaign:
        return apply_update(campaign, step, result)

    def propose_bill(self, campaign: Campaign, bill: Bill) -> Campaign:
        return propose_bill(campaign, bill)
