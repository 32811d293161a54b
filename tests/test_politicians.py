"""Tests for parties, politicians and popularity normalization."""

from py_polisim.core.alea_prng import AleaPRNG
from py_polisim.core.politicians import (
    calculate_ideology_from_stances,
    generate_full_ai_politician,
    generate_local_landscape,
    generate_national_parties,
    generate_random_office_holder,
    normalize_party_popularities,
)
from py_polisim.data.ideologies import BASE_IDEOLOGIES


class TestNormalizePartyPopularities:
    """Landscape shares always sum to 100 and respect the floor."""

    def test_sums_to_100_and_respects_minimum(self, party_factory):
        prng = AleaPRNG("popularity")
        for _ in range(100):
            n = prng.randint(2, 8)
            landscape = party_factory([prng.uniform(0, 100) for _ in range(n)])
            result = normalize_party_popularities(landscape, minimum=1.0)
            assert abs(sum(p.popularity for p in result) - 100) < 0.011
            assert all(p.popularity >= 1.0 for p in result)

    def test_dominant_party_pins_others_to_floor(self, party_factory):
        result = normalize_party_popularities(party_factory([100, 0.1, 0.1, 0.1]), minimum=1.0)
        assert [p.popularity for p in result] == [97.0, 1.0, 1.0, 1.0]

    def test_input_is_not_mutated(self, party_factory):
        landscape = party_factory([10, 30])
        normalize_party_popularities(landscape)
        assert [p.popularity for p in landscape] == [10.0, 30.0]

    def test_empty_landscape(self):
        assert normalize_party_popularities([]) == []

    def test_minimum_too_large_is_lowered(self, party_factory):
        result = normalize_party_popularities(party_factory([1, 1, 1, 1]), minimum=40)
        assert abs(sum(p.popularity for p in result) - 100) < 0.011


class TestParties:

    def test_national_parties(self):
        parties = generate_national_parties(AleaPRNG("parties"))
        assert 4 <= len(parties) <= 7
        assert len({p.id for p in parties}) == len(parties)
        assert abs(sum(p.popularity for p in parties) - 100) < 0.011
        known = {i["name"] for i in BASE_IDEOLOGIES}
        assert all(p.ideology in known for p in parties)

    def test_explicit_count(self):
        assert len(generate_national_parties(AleaPRNG("five"), count=5)) == 5

    def test_local_landscape_stays_normalized(self):
        prng = AleaPRNG("local")
        national = generate_national_parties(prng)
        local = generate_local_landscape(national, prng)
        assert [p.id for p in local] == [p.id for p in national]
        assert abs(sum(p.popularity for p in local) - 100) < 0.011


class TestPoliticians:

    def setup_method(self):
        self.prng = AleaPRNG("politicians")
        self.parties = generate_national_parties(self.prng)

    def test_party_politician(self):
        party = self.parties[0]
        politician = generate_full_ai_politician(party, self.prng)
        assert politician.party_id == party.id
        assert politician.party_color == party.color
        assert not politician.is_independent
        assert politician.policy_stances
        assert 35 <= politician.age <= 70

    def test_independent_politician(self):
        politician = generate_full_ai_politician(None, self.prng)
        assert politician.party_id == f"independent_{politician.id}"
        assert politician.is_independent
        assert politician.party_support == 0
        assert politician.party_name == "Independent"

    def test_incumbents_are_better_known(self):
        incumbent = generate_full_ai_politician(self.parties[0], self.prng, is_incumbent=True)
        assert incumbent.is_incumbent
        assert incumbent.name_recognition >= 15000

    def test_ideology_from_stances(self):
        name, scores = calculate_ideology_from_stances(
            {"crime_and_policing": "more_police_tougher_penalties"}
        )
        assert name in {i["name"] for i in BASE_IDEOLOGIES}
        assert scores["authority_structure"] == 2.5

    def test_no_stances_is_centrist(self):
        name, _ = calculate_ideology_from_stances({})
        assert name == "Centrist"

    def test_office_holder(self):
        holder = generate_random_office_holder(self.parties, self.prng, "Mayor of Testville")
        assert holder.current_office == "Mayor of Testville"
        assert holder.is_incumbent

    def test_office_holder_without_parties_is_independent(self):
        holder = generate_random_office_holder([], self.prng, "Mayor of Testville")
        assert holder.is_independent
