"""Tests for place and person name generation."""

from py_polisim.core.alea_prng import AleaPRNG
from py_polisim.core.names import MarkovChain, NameGenerator
from py_polisim.data.names import PLACE_NAME_SEEDS


class TestNameGenerator:

    def test_deterministic_generation(self):
        gen1 = NameGenerator(AleaPRNG("names"))
        gen2 = NameGenerator(AleaPRNG("names"))
        assert [gen1.generate_city_name("USA") for _ in range(5)] == [
            gen2.generate_city_name("USA") for _ in range(5)
        ]

    def test_city_names_are_unique_and_new(self):
        gen = NameGenerator(AleaPRNG("unique"))
        seeds = {s.lower() for s in PLACE_NAME_SEEDS["USA"]}
        names = [gen.generate_city_name("USA") for _ in range(30)]
        assert len({n.lower() for n in names}) == len(names)
        assert not any(n.lower() in seeds for n in names)

    def test_unknown_country_uses_default_seeds(self):
        assert NameGenerator(AleaPRNG("fallback")).generate_city_name("XYZ")

    def test_person_name(self):
        first, last = NameGenerator(AleaPRNG("person")).generate_person_name()
        assert first and last

    def test_chain_records_sources(self):
        chain = MarkovChain.from_names(["Springfield", "Riverton"])
        assert "springfield" in chain.sources
        assert "^^" in chain.data
