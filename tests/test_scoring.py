"""Tests for candidate scoring and polling normalization."""

from types import SimpleNamespace

from py_polisim.core.alea_prng import AleaPRNG
from py_polisim.core.scoring import (
    NO_STATS_SCORE,
    _safe_score,
    calculate_base_candidate_score,
    normalize_polling,
    policy_alignment_points,
)


class TestBaseScore:
    """Base scores are integers of at least 1."""

    def test_score_is_positive_int(self, city_factory, politician_factory):
        prng = AleaPRNG("scores")
        for mood in ("Prospering", "Content", "Very Unhappy"):
            city = city_factory(mood=mood)
            for i in range(50):
                candidate = politician_factory(f"c{i}", party_id=None)
                score = calculate_base_candidate_score(candidate, SimpleNamespace(incumbents=[]), city, prng)
                assert isinstance(score, int)
                assert score >= 1

    def test_no_stats_gives_flat_score(self, city_factory, politician_factory):
        city = city_factory(with_stats=False)
        score = calculate_base_candidate_score(politician_factory("a"), None, city, AleaPRNG("x"))
        assert score == NO_STATS_SCORE

    def test_prospering_incumbent_beats_challenger(self, city_factory, politician_factory):
        """Incumbency in a prospering city outweighs the score jitter."""
        city = city_factory(mood="Prospering")
        incumbent = politician_factory("inc", is_incumbent=True)
        challenger = politician_factory("chal")
        election = SimpleNamespace(incumbents=[incumbent])

        for seed in range(50):
            prng = AleaPRNG(f"prospering-{seed}")
            inc_score = calculate_base_candidate_score(incumbent, election, city, prng)
            chal_score = calculate_base_candidate_score(challenger, election, city, prng)
            assert inc_score > chal_score

    def test_unhappy_city_punishes_incumbent(self, city_factory, politician_factory):
        city = city_factory(mood="Very Unhappy")
        incumbent = politician_factory("inc", is_incumbent=True)
        challenger = politician_factory("chal")
        election = SimpleNamespace(incumbents=[incumbent])

        for seed in range(50):
            prng = AleaPRNG(f"unhappy-{seed}")
            inc_score = calculate_base_candidate_score(incumbent, election, city, prng)
            chal_score = calculate_base_candidate_score(challenger, election, city, prng)
            assert inc_score < chal_score


class TestPolicyAlignment:

    def test_main_issue_match_is_worth_more(self):
        stances = {"crime_and_policing": "community_policing"}
        profile = {"crime_and_policing": "community_policing"}
        assert policy_alignment_points(stances, profile, ["Crime"]) == 3
        assert policy_alignment_points(stances, profile, ["Housing"]) == 1

    def test_mismatch_scores_nothing(self):
        stances = {"crime_and_policing": "community_policing"}
        profile = {"crime_and_policing": "social_programs_first"}
        assert policy_alignment_points(stances, profile, ["Crime"]) == 0


class TestNormalizePolling:
    """Polling always sums to exactly 100."""

    def test_zero_recognition_splits_evenly(self, politician_factory):
        candidates = [politician_factory(f"c{i}", base_score=20) for i in range(3)]
        polled = normalize_polling(candidates, 10_000)
        assert [c.polling for c in polled] == [34, 33, 33]

    def test_sums_to_100_and_never_negative(self, politician_factory):
        prng = AleaPRNG("polling")
        for _ in range(100):
            n = prng.randint(1, 9)
            candidates = [
                politician_factory(
                    f"c{i}",
                    base_score=prng.randint(1, 80),
                    name_recognition=prng.randint(0, 50_000),
                )
                for i in range(n)
            ]
            polled = normalize_polling(candidates, prng.randint(0, 100_000))
            assert sum(c.polling for c in polled) == 100
            assert all(c.polling >= 0 for c in polled)

    def test_recognition_above_population_is_capped(self, politician_factory):
        candidates = [
            politician_factory("a", base_score=10, name_recognition=10**7),
            politician_factory("b", base_score=10, name_recognition=10**7),
        ]
        assert [c.polling for c in normalize_polling(candidates, 1000)] == [50, 50]

    def test_empty_roster(self):
        assert normalize_polling([], 1000) == []

    def test_input_is_not_mutated(self, politician_factory):
        candidates = [politician_factory("a", base_score=5)]
        normalize_polling(candidates, 100)
        assert candidates[0].polling == 0

    def test_invalid_scores_count_as_one(self):
        assert _safe_score(float("nan")) == 1.0
        assert _safe_score(-4) == 1.0
        assert _safe_score("high") == 1.0
        assert _safe_score(12) == 12.0
