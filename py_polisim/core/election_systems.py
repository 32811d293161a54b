"""
Participant generation per electoral system.

``generate_election_participants`` picks a handler from the election type's
``electoral_system``:

    FPTP, TwoRoundSystem, ElectoralCollege  -> single roster of candidates
    PartyListPR                             -> one ranked list per party
    MMP                                     -> party lists plus constituency pools
    SNTV_MMD, BlockVote, PluralityMMD       -> multi-member roster

Unknown systems fall back to the FPTP handler with a warning.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

from .alea_prng import AleaPRNG
from .models import City, ElectionType, MMPData, Party, PartyAffiliation, Politician
from .names import NameGenerator
from .politicians import INDEPENDENT_COLOR, generate_full_ai_politician
from .scoring import normalize_polling, score_candidates

logger = structlog.get_logger()

FPTP_SYSTEMS = ("FPTP", "TwoRoundSystem", "ElectoralCollege")
MMD_SYSTEMS = ("SNTV_MMD", "BlockVote", "PluralityMMD")

RANDOM_PARTY_FALLBACK_CHANCE = 0.2
MMP_LIST_SIZE_FACTOR = 0.6
MMP_LIST_VARIANCE_LOW = 5
MMP_LIST_VARIANCE_HIGH = 10
MMP_DEFAULT_RATIO = 0.5
MMP_DUPLICATE_RETRIES = 10
MMP_INDEPENDENT_SHARE = 0.05


class ParticipantParams(BaseModel):
    """Everything a handler needs to build one race."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    election_type: ElectionType
    party_pool: List[Party] = Field(default_factory=list)
    incumbents: List[Politician] = Field(default_factory=list)
    number_of_seats: int = Field(default=1, ge=1)
    entity_population: int = Field(default=0, ge=0, description="Total residents, not just voters")
    city: Optional[City] = Field(default=None, description="Context for scoring")


class ParticipantsResult(BaseModel):
    """Exactly one of the three containers is set."""

    candidates: Optional[List[Politician]] = None
    party_lists: Optional[Dict[str, List[Politician]]] = None
    mmp_data: Optional[MMPData] = None


def _running_incumbents(params: ParticipantParams) -> List[Politician]:
    return [
        inc.model_copy(update={"is_incumbent": True})
        for inc in params.incumbents
        if inc.is_actually_running
    ]


def eligible_voters(population: int, prng: AleaPRNG) -> int:
    """Voting-age share of a total population, 65-75%."""
    return math.floor(population * (0.65 + prng.random() * 0.1))


def _independent_challenger(prng: AleaPRNG, names: NameGenerator) -> Politician:
    challenger = generate_full_ai_politician(None, prng, name_generator=names)
    return challenger.model_copy(
        update={
            "party_id": f"independent_ai_challenger_{challenger.id}",
            "party_name": "Independent",
            "party_color": INDEPENDENT_COLOR,
        }
    )


def _score_and_poll(
    candidates: List[Politician], params: ParticipantParams, prng: AleaPRNG
) -> List[Politician]:
    scored = score_candidates(candidates, params, params.city, prng)
    return normalize_polling(scored, eligible_voters(params.entity_population, prng))


def handle_fptp_participants(params: ParticipantParams, prng: AleaPRNG) -> ParticipantsResult:
    names = NameGenerator(prng)
    running = _running_incumbents(params)
    pool = list(params.party_pool)

    if running:
        min_total = 2
    elif pool:
        min_total = min(2, len(pool))
    else:
        min_total = 2
    min_total = max(1, min_total)

    if running:
        max_total = max(min_total, min(5, len(pool) + len(running)))
    else:
        max_total = max(min_total, min(6, len(pool) + 2))

    target = prng.randint(min_total, max_total)
    needed = max(0, target - len(running))

    incumbent_parties = {inc.party_id for inc in running}
    available = [p for p in pool if p.id not in incumbent_parties] or list(pool)

    candidates = list(running)
    for _ in range(needed):
        party: Optional[Party] = None
        if available:
            party = prng.choice(available)
            if needed > 1:
                available.remove(party)
        elif pool and prng.random() < RANDOM_PARTY_FALLBACK_CHANCE:
            party = prng.choice(pool)

        if party is None:
            candidates.append(_independent_challenger(prng, names))
        else:
            candidates.append(generate_full_ai_politician(party, prng, name_generator=names))

    logger.debug(
        "FPTP roster built",
        office=params.election_type.id,
        incumbents=len(running),
        candidates=len(candidates),
    )
    return ParticipantsResult(candidates=_score_and_poll(candidates, params, prng))


def handle_mmd_participants(params: ParticipantParams, prng: AleaPRNG) -> ParticipantsResult:
    names = NameGenerator(prng)
    seats = params.number_of_seats
    running = _running_incumbents(params)
    pool = list(params.party_pool)

    min_factor, max_factor = 1.8, 3.0
    if len(pool) < 3:
        max_factor = 2.5
    if seats < 5:
        min_factor, max_factor = 2.0, 3.5

    min_total = max(seats + 1, math.floor(seats * min_factor), len(running) + 1)
    if pool:
        min_total = max(min_total, len(running) + len(pool))
    max_total = max(min_total + math.floor(seats * 0.5), math.floor(seats * max_factor))
    max_total = min(max_total, seats + 30, 70)
    min_total = min(min_total, max_total)

    target = prng.randint(min_total, max_total)
    target = max(target, seats + 1, len(running) + (1 if pool else 0), 1)

    candidates = list(running)
    for i in range(max(0, target - len(running))):
        if pool:
            party = pool[i % len(pool)]
            candidates.append(generate_full_ai_politician(party, prng, name_generator=names))
        else:
            candidates.append(_independent_challenger(prng, names))

    logger.debug(
        "MMD roster built",
        office=params.election_type.id,
        seats=seats,
        candidates=len(candidates),
    )
    return ParticipantsResult(candidates=_score_and_poll(candidates, params, prng))


def _list_member(
    party: Party, position: int, prng: AleaPRNG, names: NameGenerator
) -> Politician:
    member = generate_full_ai_politician(party, prng, name_generator=names)
    return member.model_copy(
        update={
            "list_position": position,
            "party_affiliation_read_only": PartyAffiliation(
                party_id=party.id, party_name=party.name, party_color=party.color
            ),
            "polling": 0,
        }
    )


def handle_party_list_pr_participants(
    params: ParticipantParams, prng: AleaPRNG
) -> ParticipantsResult:
    names = NameGenerator(prng)
    seats = params.number_of_seats or params.election_type.min_council_seats or 1

    party_lists: Dict[str, List[Politician]] = {}
    for party in params.party_pool:
        list_size = max(
            math.floor(seats * 0.5) + 1,
            min(seats + 10, prng.randint(max(3, seats - 5), seats + 15)),
        )
        members = [_list_member(party, i + 1, prng, names) for i in range(list_size)]
        party_lists[party.id] = score_candidates(members, params, params.city, prng)

    logger.debug(
        "Party lists built",
        office=params.election_type.id,
        parties=len(party_lists),
        seats=seats,
    )
    return ParticipantsResult(party_lists=party_lists)


def handle_mmp_participants(params: ParticipantParams, prng: AleaPRNG) -> ParticipantsResult:
    names = NameGenerator(prng)
    et = params.election_type
    seats = params.number_of_seats
    running = _running_incumbents(params)

    list_target = math.ceil(seats * (et.mmp_list_seats_ratio or MMP_DEFAULT_RATIO))
    constituency_seats = math.floor(seats * (et.mmp_constituency_seats_ratio or MMP_DEFAULT_RATIO))

    mmp = MMPData(num_constituency_seats=constituency_seats, num_list_seats=list_target)

    for party in params.party_pool:
        list_size = max(
            math.floor(list_target * MMP_LIST_SIZE_FACTOR) + 1,
            prng.randint(
                max(3, list_target - MMP_LIST_VARIANCE_LOW),
                list_target + MMP_LIST_VARIANCE_HIGH,
            ),
        )
        members = [_list_member(party, i + 1, prng, names) for i in range(list_size)]
        mmp.party_lists[party.id] = score_candidates(members, params, params.city, prng)
        list_ids = {m.id for m in members}

        pool = [
            inc for inc in running if inc.party_id == party.id and inc.is_constituency_winner
        ]
        wanted = max(
            1,
            min(
                constituency_seats,
                prng.randint(math.floor(constituency_seats * 0.7), constituency_seats + 5),
            ),
        )
        while len(pool) < wanted:
            for _ in range(MMP_DUPLICATE_RETRIES):
                candidate = generate_full_ai_politician(party, prng, name_generator=names)
                if candidate.id not in list_ids:
                    break
            pool.append(candidate)
        mmp.constituency_candidates_by_party[party.id] = pool

    independents = [
        _independent_challenger(prng, names)
        for _ in range(prng.randint(0, math.floor(constituency_seats * MMP_INDEPENDENT_SHARE)))
    ]

    # Constituency polling is normalised across every constituency candidate
    flat = [c for members in mmp.constituency_candidates_by_party.values() for c in members]
    polled = _score_and_poll(flat + independents, params, prng)
    cursor = 0
    for party_id, members in mmp.constituency_candidates_by_party.items():
        mmp.constituency_candidates_by_party[party_id] = polled[cursor : cursor + len(members)]
        cursor += len(members)
    mmp.independent_constituency_candidates = polled[cursor:]

    logger.debug(
        "MMP participants built",
        office=et.id,
        list_seats=list_target,
        constituency_seats=constituency_seats,
    )
    return ParticipantsResult(mmp_data=mmp)


_HANDLERS: Dict[str, Callable[[ParticipantParams, AleaPRNG], ParticipantsResult]] = {
    **{system: handle_fptp_participants for system in FPTP_SYSTEMS},
    "PartyListPR": handle_party_list_pr_participants,
    "MMP": handle_mmp_participants,
    **{system: handle_mmd_participants for system in MMD_SYSTEMS},
}


def generate_election_participants(
    params: ParticipantParams, prng: AleaPRNG
) -> ParticipantsResult:
    """Dispatch on the electoral system; unknown systems use FPTP."""
    system = params.election_type.electoral_system
    handler = _HANDLERS.get(system)
    if handler is None:
        logger.warning(
            "Unknown electoral system, falling back to FPTP",
            electoral_system=system,
            election_type=params.election_type.id,
        )
        handler = handle_fptp_participants
    return handler(params, prng)
