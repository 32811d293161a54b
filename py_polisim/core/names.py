"""
Name generation for cities, states and politicians.

Place names come from a letter-level Markov chain trained on per-country
seed lists, so generated cities sound local without repeating real ones.
Person names are drawn from first/last name pools.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

import structlog

from ..data.names import FIRST_NAMES, LAST_NAMES, PLACE_NAME_SEEDS, STATE_NAME_SEEDS
from .alea_prng import AleaPRNG

logger = structlog.get_logger()

_START = "^"
_END = "$"


@dataclass
class MarkovChain:
    """Order-n letter chain built from a list of names."""

    order: int
    data: Dict[str, List[str]] = field(default_factory=dict)
    sources: Set[str] = field(default_factory=set)

    @classmethod
    def from_names(cls, names: List[str], order: int = 2) -> MarkovChain:
        chain = cls(order=order)
        for name in names:
            name = name.strip().lower()
            if not name:
                continue
            chain.sources.add(name)
            padded = _START * order + name + _END
            for i in range(len(padded) - order):
                state = padded[i : i + order]
                chain.data.setdefault(state, []).append(padded[i + order])
        return chain


class NameGenerator:
    """Generates place and person names from an explicit PRNG."""

    def __init__(self, prng: Optional[AleaPRNG] = None):
        self.prng = prng or AleaPRNG("names")
        self.chains: Dict[str, MarkovChain] = {}
        self.used_names: Set[str] = set()

    def _chain_for(self, key: str, seeds: List[str]) -> MarkovChain:
        if key not in self.chains:
            self.chains[key] = MarkovChain.from_names(seeds)
        return self.chains[key]

    def generate_from_chain(
        self,
        chain: MarkovChain,
        min_length: int = 4,
        max_length: int = 11,
        max_attempts: int = 25,
    ) -> str:
        """
        Walk the chain until it emits an end marker.

        Names that are too short, too long, copies of a seed or already
        handed out are rejected. After ``max_attempts`` a seed name is
        returned with a numeric suffix so callers always get a unique name.
        """
        for _ in range(max_attempts):
            state = _START * chain.order
            letters: List[str] = []
            while len(letters) <= max_length:
                options = chain.data.get(state)
                if not options:
                    break
                nxt = self.prng.choice(options)
                if nxt == _END:
                    break
                letters.append(nxt)
                state = state[1:] + nxt
            candidate = "".join(letters)
            if not (min_length <= len(candidate) <= max_length):
                continue
            if candidate in chain.sources or candidate in self.used_names:
                continue
            self.used_names.add(candidate)
            return candidate.capitalize()

        fallback = self.prng.choice(sorted(chain.sources)).capitalize()
        suffix = 2
        while f"{fallback} {suffix}".lower() in self.used_names:
            suffix += 1
        name = f"{fallback} {suffix}"
        self.used_names.add(name.lower())
        logger.debug("Markov name fallback used", name=name)
        return name

    def generate_city_name(self, country_id: str) -> str:
        seeds = PLACE_NAME_SEEDS.get(country_id) or PLACE_NAME_SEEDS["USA"]
        return self.generate_from_chain(self._chain_for(f"city:{country_id}", seeds))

    def generate_state_name(self) -> str:
        return self.generate_from_chain(self._chain_for("state", STATE_NAME_SEEDS), 5, 12)

    def generate_person_name(self) -> Tuple[str, str]:
        """Return ``(first_name, last_name)``."""
        return self.prng.choice(FIRST_NAMES), self.prng.choice(LAST_NAMES)
