"""
Parties, politicians and their ideologies.

Parties are drawn from the base ideology catalogue. Politicians get random
attributes, a background, and policy stances that lean towards their
party's ideal point. Their calculated ideology is the nearest ideal point to
the average effect of those stances.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import numpy as np
import structlog

from ..data.ideologies import (
    BASE_IDEOLOGIES,
    CENTRIST_THRESHOLD,
    IDEOLOGY_AXES,
    IDEOLOGY_IDEAL_POINTS,
    PARTY_NAME_PATTERNS,
)
from ..data.names import CAREER_BACKGROUNDS, EDUCATION_BACKGROUNDS
from ..data.policy_questions import POLICY_QUESTIONS, find_option
from .alea_prng import AleaPRNG
from .models import Party, Politician, PoliticianAttributes, PoliticianBackground
from .names import NameGenerator

logger = structlog.get_logger()

INDEPENDENT_COLOR = "#888888"
PARTY_STANCE_ALIGNMENT = 0.6

_IDEOLOGY_NAMES = {i["id"]: i["name"] for i in BASE_IDEOLOGIES}


def _vector(scores: Dict[str, float]) -> np.ndarray:
    return np.array([scores.get(axis, 0.0) for axis in IDEOLOGY_AXES], dtype=np.float64)


def closest_ideology(scores: Dict[str, float]) -> str:
    """Name of the ideology whose ideal point is nearest to ``scores``."""
    vec = _vector(scores)
    if float(np.mean(np.abs(vec))) < CENTRIST_THRESHOLD:
        return _IDEOLOGY_NAMES["centrist"]

    best_id, best_dist = "centrist", float("inf")
    for ideology_id, point in IDEOLOGY_IDEAL_POINTS.items():
        dist = float(np.sum((vec - _vector(point)) ** 2))
        if dist < best_dist:
            best_id, best_dist = ideology_id, dist
    return _IDEOLOGY_NAMES[best_id]


def calculate_ideology_from_stances(stances: Dict[str, str]) -> Tuple[str, Dict[str, float]]:
    """
    Average the ideology effects of the chosen options.

    Returns:
        Tuple of (ideology name, per-axis scores)
    """
    total = np.zeros(len(IDEOLOGY_AXES))
    answered = 0
    for question_id, value in stances.items():
        option = find_option(question_id, value)
        if option is None:
            continue
        total += _vector(option["ideology_effect"])
        answered += 1

    averaged = total / answered if answered else total
    scores = {axis: round(float(v), 3) for axis, v in zip(IDEOLOGY_AXES, averaged)}
    return closest_ideology(scores), scores


def _pick_stances(party: Optional[Party], prng: AleaPRNG) -> Dict[str, str]:
    target = _vector(party.ideology_scores) if party and party.ideology_scores else None
    stances = {}
    for question in POLICY_QUESTIONS:
        options = question["options"]
        if target is not None and prng.chance(PARTY_STANCE_ALIGNMENT):
            option = min(
                options,
                key=lambda o: float(np.sum((_vector(o["ideology_effect"]) - target) ** 2)),
            )
        else:
            option = prng.choice(options)
        stances[question["id"]] = option["value"]
    return stances


def generate_full_ai_politician(
    party: Optional[Party],
    prng: AleaPRNG,
    is_incumbent: bool = False,
    name_generator: Optional[NameGenerator] = None,
    id_prefix: str = "ai",
) -> Politician:
    """Generate a complete non-player politician.

    ``party=None`` produces an Independent whose party id is unique to them.
    """
    names = name_generator or NameGenerator(prng)
    first, last = names.generate_person_name()
    politician_id = f"{id_prefix}_{prng.token()}"

    attributes = PoliticianAttributes(
        charisma=prng.randint(3, 8),
        integrity=prng.randint(2, 7),
        intelligence=prng.randint(4, 9),
        negotiation=prng.randint(3, 8),
        oratory=prng.randint(3, 8),
        fundraising=prng.randint(2, 7),
    )
    background = PoliticianBackground(
        education=prng.choice(EDUCATION_BACKGROUNDS),
        career=prng.choice(CAREER_BACKGROUNDS),
    )
    stances = _pick_stances(party, prng)
    ideology, scores = calculate_ideology_from_stances(stances)

    if party is not None:
        party_id, party_name, party_color = party.id, party.name, party.color
    else:
        party_id = f"independent_{politician_id}"
        party_name, party_color = "Independent", INDEPENDENT_COLOR

    return Politician(
        id=politician_id,
        name=f"{first} {last}",
        first_name=first,
        last_name=last,
        age=prng.randint(35, 70),
        party_id=party_id,
        party_name=party_name,
        party_color=party_color,
        attributes=attributes,
        background=background,
        policy_stances=stances,
        ideology_scores=scores,
        calculated_ideology=ideology,
        name_recognition=prng.randint(15000, 75000) if is_incumbent else prng.randint(500, 15000),
        treasury=prng.randint(5000, 50000),
        campaign_funds=prng.randint(10000, 75000) if is_incumbent else prng.randint(500, 10000),
        approval_rating=prng.randint(35, 60),
        media_buzz=prng.randint(0, 20),
        political_capital=prng.randint(5, 30),
        party_support=prng.randint(30, 75) if party is not None else 0,
        is_incumbent=is_incumbent,
    )


def _nuance_color(hex_color: str, prng: AleaPRNG, spread: int = 24) -> str:
    channels = [int(hex_color[i : i + 2], 16) for i in (1, 3, 5)]
    shifted = [max(0, min(255, c + prng.randint(-spread, spread))) for c in channels]
    return "#" + "".join(f"{c:02X}" for c in shifted)


def generate_national_parties(
    prng: AleaPRNG, count: Optional[int] = None, country_id: str = "USA"
) -> List[Party]:
    """Build 4-7 parties with distinct ideologies."""
    count = count or prng.randint(4, 7)
    ideologies = prng.sample(BASE_IDEOLOGIES, count)

    parties = []
    for ideology in ideologies:
        point = IDEOLOGY_IDEAL_POINTS[ideology["id"]]
        scores = {
            axis: round(value + prng.uniform(-0.5, 0.5), 2) for axis, value in point.items()
        }
        parties.append(
            Party(
                id=f"party_{country_id.lower()}_{ideology['id']}",
                name=prng.choice(PARTY_NAME_PATTERNS[ideology["id"]]),
                ideology=ideology["name"],
                ideology_id=ideology["id"],
                color=_nuance_color(ideology["color"], prng),
                popularity=float(prng.randint(5, 40)),
                ideology_scores=scores,
            )
        )

    logger.info("Generated national parties", count=len(parties), country=country_id)
    return normalize_party_popularities(parties)


def normalize_party_popularities(
    landscape: List[Party], minimum: float = 1.0
) -> List[Party]:
    """
    Rescale popularity so the landscape sums to 100.

    Every party ends at or above ``minimum`` (when ``minimum * n <= 100``).
    Values are rounded to 2 decimals and rounding drift goes to the most
    popular party. Returns new Party objects; the input is not modified.
    """
    n = len(landscape)
    if n == 0:
        return []

    if minimum * n > 100:
        minimum = 100.0 / n

    raw = np.array(
        [max(minimum, p.popularity or minimum) for p in landscape], dtype=np.float64
    )

    # Pin parties that would fall under the floor, then rescale the rest
    pinned = np.zeros(n, dtype=bool)
    values = raw.copy()
    for _ in range(n + 1):
        free_total = float(raw[~pinned].sum())
        budget = 100.0 - minimum * pinned.sum()
        values = np.where(pinned, minimum, raw / free_total * budget if free_total else 0.0)
        newly = (~pinned) & (values < minimum)
        if not newly.any():
            break
        pinned |= newly

    values = np.round(values, 2)
    diff = round(100.0 - float(values.sum()), 2)
    if diff != 0:
        top = int(np.argmax(values))
        values[top] = max(minimum, round(values[top] + diff, 2))

    return [
        p.model_copy(update={"popularity": float(v)}) for p, v in zip(landscape, values)
    ]


def generate_local_landscape(national_parties: List[Party], prng: AleaPRNG) -> List[Party]:
    """Jitter national popularity by up to 5 points for a local landscape."""
    jittered = [
        p.model_copy(
            update={"popularity": float(max(0, min(100, p.popularity + prng.randint(-5, 5))))}
        )
        for p in national_parties
    ]
    return normalize_party_popularities(jittered)


def generate_random_office_holder(
    party_pool: List[Party],
    prng: AleaPRNG,
    office_name: str,
    name_generator: Optional[NameGenerator] = None,
    independent_chance: float = 0.1,
) -> Politician:
    """Pick a party weighted by popularity and create its officeholder."""
    party = None
    if party_pool and not prng.chance(independent_chance):
        weights = np.array([max(0.1, p.popularity) for p in party_pool])
        cumulative = np.cumsum(weights / weights.sum())
        idx = int(np.searchsorted(cumulative, prng.random(), side="right"))
        party = party_pool[min(idx, len(party_pool) - 1)]

    holder = generate_full_ai_politician(
        party, prng, is_incumbent=True, name_generator=name_generator
    )
    return holder.model_copy(update={"current_office": office_name})
