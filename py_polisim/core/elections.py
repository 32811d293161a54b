"""
Election scheduling and instance creation.

Works out how many seats an office has, which incumbents run again, when
the vote and filing deadline fall, and builds ``ElectionInstance`` objects
with their participants.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Optional, Tuple, Union

import structlog

from ..config.config import settings
from ..data.election_types import DEFAULT_COUNTRY_ID, ELECTION_TYPES_BY_COUNTRY
from .alea_prng import AleaPRNG
from .apportionment import largest_remainder
from .election_systems import (
    ParticipantParams,
    ParticipantsResult,
    generate_election_participants,
)
from .models import (
    City,
    ElectionInstance,
    ElectionOutcome,
    ElectionType,
    GameDate,
    GovernmentOffice,
    Party,
    Politician,
    State,
)
from .names import NameGenerator
from .politicians import generate_random_office_holder

logger = structlog.get_logger()

MIN_POPULATION_PER_SEAT = 25


def get_election_types(country_id: str, level: Optional[str] = None) -> List[ElectionType]:
    """Election types for a country, optionally filtered by level."""
    raw = ELECTION_TYPES_BY_COUNTRY.get(country_id) or ELECTION_TYPES_BY_COUNTRY[DEFAULT_COUNTRY_ID]
    types = [ElectionType(**entry) for entry in raw]
    if level is not None:
        types = [t for t in types if t.level == level]
    return types


def format_office_name(
    election_type: ElectionType, city_name: str = "", state_name: str = ""
) -> str:
    return election_type.office_name_template.replace("{city_name}", city_name).replace(
        "{state_name}", state_name
    )


def seat_distribution_method(election_type: ElectionType) -> str:
    if election_type.generates_one_winner:
        return "single_winner"
    system = election_type.electoral_system
    if system == "PartyListPR":
        return "at_large_pr"
    if system == "MMP":
        return "mmp_list_component"
    if system in ("BlockVote", "SNTV_MMD"):
        return "at_large_mmd"
    return "multiple_winners_other"


def calculate_seat_details_for_instance(
    election_type: ElectionType, entity_population: int, prng: AleaPRNG
) -> Tuple[int, str]:
    """
    Seat count and distribution method for one instance of an office.

    Returns:
        Tuple of (number of seats, distribution method)
    """
    if election_type.generates_one_winner:
        return 1, "single_winner"

    seats = election_type.min_council_seats or 1
    for tier in election_type.council_seat_population_tiers:
        if tier.pop_threshold is None or entity_population < tier.pop_threshold:
            low, high = tier.extra_seats_range
            seats += prng.randint(low, high)
            break

    return max(1, seats), seat_distribution_method(election_type)


def get_incumbents_for_office_instance(
    office: Optional[GovernmentOffice],
    election_type: ElectionType,
    prng: AleaPRNG,
) -> List[Politician]:
    """
    Current holders of an office, each flagged with whether they run again.

    The player always runs; AI holders retire at random.
    """
    if office is None:
        return []

    if election_type.generates_one_winner:
        holders = [office.holder] if office.holder else []
        chance = settings.incumbent_running_chance_single
    else:
        holders = list(office.members)
        chance = settings.incumbent_running_chance_multi

    incumbents = []
    for holder in holders:
        running = prng.random() < chance or holder.is_player
        incumbents.append(
            holder.model_copy(update={"is_incumbent": True, "is_actually_running": running})
        )
    return incumbents


def is_election_due(
    election_type: ElectionType, current_year: int, last_held_year: Optional[int]
) -> bool:
    if last_held_year is None:
        return True
    return current_year >= last_held_year + election_type.frequency_years


def _turnout_range(level: str) -> Tuple[int, int]:
    if level.startswith("national"):
        return 50, 75
    if level.startswith("local_state"):
        return 40, 65
    return 35, 60


def initialize_election_object(
    election_type: ElectionType,
    entity: Union[City, State],
    current_date: GameDate,
    participants: ParticipantsResult,
    number_of_seats: int,
    distribution_method: str,
    incumbents: List[Politician],
    prng: AleaPRNG,
    office_name: Optional[str] = None,
) -> ElectionInstance:
    """
    Build an upcoming election from its participants.

    The vote happens in the type's fixed month (or a random month from
    April to November) on or after ``current_date``. The filing deadline
    falls 2-4 months earlier.
    """
    month = election_type.election_month or prng.randint(4, 11)
    day = prng.randint(1, 28)
    year = current_date.year
    if (month, day) < (current_date.month, current_date.day):
        year += 1
    election_date = GameDate(year=year, month=month, day=day)

    deadline = election_date.add_months(-prng.randint(2, 4))
    filing_deadline = GameDate(year=deadline.year, month=deadline.month, day=prng.randint(1, 15))

    low, high = _turnout_range(election_type.level)
    population = entity.population
    instance_base = f"{election_type.id}_{entity.id}"

    if office_name is None:
        if isinstance(entity, City):
            office_name = format_office_name(election_type, city_name=entity.name)
        else:
            office_name = format_office_name(election_type, state_name=entity.name)

    election = ElectionInstance(
        id=f"{instance_base}_{election_date.year}",
        instance_id_base=instance_base,
        election_type_id=election_type.id,
        office_name=office_name,
        level=election_type.level,
        electoral_system=election_type.electoral_system,
        election_date=election_date,
        filing_deadline=filing_deadline,
        number_of_seats_to_fill=number_of_seats,
        seat_distribution_method=distribution_method,
        incumbents=incumbents,
        candidates=participants.candidates,
        party_lists=participants.party_lists,
        mmp_data=participants.mmp_data,
        expected_turnout=float(prng.randint(low, high)),
        total_eligible_voters=math.floor(population * (0.6 + prng.random() * 0.25)),
        outcome=ElectionOutcome(),
    )
    logger.info(
        "Election initialized",
        election_id=election.id,
        system=election.electoral_system,
        seats=number_of_seats,
        date=election_date.key(),
    )
    return election


def distribute_population_to_seats(
    total_population: int, seat_count: int, prng: AleaPRNG
) -> List[int]:
    """
    Split a population across districts of uneven size.

    Every district gets at least 25 residents when the total allows it and
    the parts always sum to ``total_population``.
    """
    if seat_count <= 0:
        return []
    weights = [prng.randint(10, 100) for _ in range(seat_count)]
    parts = largest_remainder(weights, max(0, total_population), minimum=MIN_POPULATION_PER_SEAT)
    return prng.shuffle(parts)


def generate_initial_government_offices(
    city: City,
    prng: AleaPRNG,
    current_date: GameDate,
    name_generator: Optional[NameGenerator] = None,
) -> List[GovernmentOffice]:
    """Seat a randomly generated holder in every local office."""
    names = name_generator or NameGenerator(prng)
    offices = []
    for election_type in get_election_types(city.country_id, level="local_city"):
        office_name = format_office_name(election_type, city_name=city.name)
        seats, _ = calculate_seat_details_for_instance(election_type, city.population, prng)
        members = [
            generate_random_office_holder(city.political_landscape, prng, office_name, names)
            for _ in range(seats)
        ]
        if election_type.electoral_system == "MMP":
            constituency = math.floor(seats * (election_type.mmp_constituency_seats_ratio or 0.5))
            members = [
                m.model_copy(update={"is_constituency_winner": i < constituency})
                for i, m in enumerate(members)
            ]

        term_years = prng.randint(0, election_type.frequency_years - 1) + 1
        offices.append(
            GovernmentOffice(
                office_id=f"{election_type.id}_{city.id}",
                office_name=office_name,
                level=election_type.level,
                election_type_id=election_type.id,
                holder=members[0] if seats == 1 else None,
                members=members if seats > 1 else [],
                number_of_seats=seats,
                term_ends=GameDate(
                    year=current_date.year + term_years,
                    month=election_type.election_month or 11,
                    day=1,
                ),
            )
        )
    logger.info("Government offices seated", city=city.name, offices=len(offices))
    return offices


def generate_elections_for_city(
    city: City,
    current_date: GameDate,
    offices: List[GovernmentOffice],
    last_election_years: Dict[str, int],
    prng: AleaPRNG,
    party_pool: Optional[List[Party]] = None,
    election_type_ids: Optional[Iterable[str]] = None,
) -> List[ElectionInstance]:
    """
    Create an instance for every local office whose election is due.

    ``election_type_ids`` limits the pass to those types.
    """
    pool = party_pool if party_pool is not None else city.political_landscape
    offices_by_type = {o.election_type_id: o for o in offices}
    wanted = set(election_type_ids) if election_type_ids is not None else None
    elections = []

    for election_type in get_election_types(city.country_id, level="local_city"):
        if wanted is not None and election_type.id not in wanted:
            continue
        if not is_election_due(
            election_type, current_date.year, last_election_years.get(election_type.id)
        ):
            continue

        office = offices_by_type.get(election_type.id)
        if office is not None and not election_type.generates_one_winner:
            seats = office.number_of_seats
            method = seat_distribution_method(election_type)
        else:
            seats, method = calculate_seat_details_for_instance(
                election_type, city.population, prng
            )

        incumbents = get_incumbents_for_office_instance(office, election_type, prng)
        participants = generate_election_participants(
            ParticipantParams(
                election_type=election_type,
                party_pool=pool,
                incumbents=incumbents,
                number_of_seats=seats,
                entity_population=city.population,
                city=city,
            ),
            prng,
        )
        elections.append(
            initialize_election_object(
                election_type,
                city,
                current_date,
                participants,
                seats,
                method,
                incumbents,
                prng,
                office_name=office.office_name if office else None,
            )
        )

    logger.info("Elections scheduled", city=city.name, count=len(elections))
    return elections
