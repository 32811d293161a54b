"""Tests for participant generation per electoral system."""

from py_polisim.core.alea_prng import AleaPRNG
from py_polisim.core.election_systems import (
    ParticipantParams,
    generate_election_participants,
    handle_fptp_participants,
)
from py_polisim.core.elections import get_election_types
from py_polisim.core.models import ElectionType


def _type(country_id, type_id):
    return next(t for t in get_election_types(country_id) if t.id == type_id)


class TestFPTP:
    """Single-winner rosters."""

    def setup_method(self):
        self.prng = AleaPRNG("fptp")
        self.mayor = _type("USA", "mayor_usa")

    def test_open_race(self, generated_city):
        params = ParticipantParams(
            election_type=self.mayor,
            party_pool=generated_city.political_landscape,
            entity_population=generated_city.population,
            city=generated_city,
        )
        result = handle_fptp_participants(params, self.prng)

        assert result.party_lists is None and result.mmp_data is None
        assert 2 <= len(result.candidates) <= 6
        assert sum(c.polling for c in result.candidates) == 100

    def test_running_incumbent_is_on_the_ballot(self, generated_city, politician_factory):
        incumbent = politician_factory(
            "inc", party_id=generated_city.political_landscape[0].id, is_actually_running=True
        )
        params = ParticipantParams(
            election_type=self.mayor,
            party_pool=generated_city.political_landscape,
            incumbents=[incumbent],
            entity_population=generated_city.population,
            city=generated_city,
        )
        candidates = generate_election_participants(params, self.prng).candidates

        assert candidates[0].id == "inc"
        assert candidates[0].is_incumbent
        assert len(candidates) >= 2

    def test_retiring_incumbent_is_not(self, generated_city, politician_factory):
        incumbent = politician_factory("inc", is_actually_running=False)
        params = ParticipantParams(
            election_type=self.mayor,
            party_pool=generated_city.political_landscape,
            incumbents=[incumbent],
            city=generated_city,
        )
        candidates = generate_election_participants(params, self.prng).candidates
        assert "inc" not in {c.id for c in candidates}

    def test_empty_party_pool_uses_independents(self, generated_city):
        params = ParticipantParams(election_type=self.mayor, city=generated_city)
        candidates = generate_election_participants(params, self.prng).candidates
        assert len(candidates) == 2
        assert all(c.party_id.startswith("independent_ai_challenger_") for c in candidates)

    def test_unknown_system_falls_back(self, generated_city):
        odd = ElectionType(id="odd", office_name_template="Odd", level="local_city", electoral_system="Sortition")
        params = ParticipantParams(
            election_type=odd, party_pool=generated_city.political_landscape, city=generated_city
        )
        result = generate_election_participants(params, self.prng)
        assert result.candidates


class TestMultiMember:

    def test_mmd_roster_exceeds_seats(self, generated_city):
        council = _type("USA", "city_council_usa")
        params = ParticipantParams(
            election_type=council,
            party_pool=generated_city.political_landscape,
            number_of_seats=7,
            entity_population=generated_city.population,
            city=generated_city,
        )
        candidates = generate_election_participants(params, AleaPRNG("mmd")).candidates

        assert len(candidates) >= 8
        assert len(candidates) <= 70
        assert sum(c.polling for c in candidates) == 100

    def test_party_list_pr(self, generated_city):
        council = _type("NLD", "municipal_council_nld")
        params = ParticipantParams(
            election_type=council,
            party_pool=generated_city.political_landscape,
            number_of_seats=11,
            city=generated_city,
        )
        result = generate_election_participants(params, AleaPRNG("pr"))

        assert result.candidates is None
        assert set(result.party_lists) == {p.id for p in generated_city.political_landscape}
        for party_id, members in result.party_lists.items():
            assert len(members) >= 6
            assert [m.list_position for m in members] == list(range(1, len(members) + 1))
            assert all(m.party_affiliation_read_only.party_id == party_id for m in members)
            assert all(m.base_score >= 1 for m in members)

    def test_mmp(self, generated_city, politician_factory):
        council = _type("GER", "city_council_ger")
        party_id = generated_city.political_landscape[0].id
        winner = politician_factory(
            "winner", party_id=party_id, is_actually_running=True, is_constituency_winner=True
        )
        params = ParticipantParams(
            election_type=council,
            party_pool=generated_city.political_landscape,
            incumbents=[winner],
            number_of_seats=24,
            entity_population=generated_city.population,
            city=generated_city,
        )
        mmp = generate_election_participants(params, AleaPRNG("mmp")).mmp_data

        assert mmp.num_constituency_seats == 12
        assert mmp.num_list_seats == 12
        assert "winner" in {c.id for c in mmp.constituency_candidates_by_party[party_id]}

        constituency = [c for members in mmp.constituency_candidates_by_party.values() for c in members]
        constituency += mmp.independent_constituency_candidates
        assert sum(c.polling for c in constituency) == 100
