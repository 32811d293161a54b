"""Tests for the Alea PRNG stream and its helpers."""

import pytest

from py_polisim.core.alea_prng import AleaPRNG


class TestAleaPRNG:
    """Determinism and helper behaviour."""

    def test_same_seed_same_sequence(self):
        """Two streams with the same seed produce identical values."""
        a = AleaPRNG("polisim")
        b = AleaPRNG("polisim")
        assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]

    def test_different_seeds_diverge(self):
        a = AleaPRNG("alpha")
        b = AleaPRNG("beta")
        assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]

    def test_random_in_unit_interval(self):
        prng = AleaPRNG("unit")
        for _ in range(1000):
            value = prng.random()
            assert 0 <= value < 1

    def test_randint_is_inclusive(self):
        """Both bounds are reachable and nothing falls outside them."""
        prng = AleaPRNG("ints")
        seen = {prng.randint(1, 3) for _ in range(500)}
        assert seen == {1, 2, 3}

    def test_randint_reversed_bounds(self):
        prng = AleaPRNG("reversed")
        for _ in range(100):
            assert -1 <= prng.randint(1, -1) <= 1

    def test_choice_on_empty_raises(self):
        with pytest.raises(IndexError):
            AleaPRNG("empty").choice([])

    def test_shuffle_returns_permutation_copy(self):
        prng = AleaPRNG("shuffle")
        items = list(range(10))
        shuffled = prng.shuffle(items)
        assert sorted(shuffled) == items
        assert items == list(range(10))

    def test_sample_clamps_k(self):
        prng = AleaPRNG("sample")
        assert sorted(prng.sample([1, 2, 3], 10)) == [1, 2, 3]
        assert prng.sample([1, 2, 3], -1) == []

    def test_token_is_base36(self):
        token = AleaPRNG("token").token()
        assert len(token) == 9
        assert all(c in "0123456789abcdefghijklmnopqrstuvwxyz" for c in token)

    def test_call_count_tracks_draws(self):
        prng = AleaPRNG("count")
        for _ in range(7):
            prng.random()
        assert prng.call_count == 7

    def test_spawn_is_deterministic(self):
        child_a = AleaPRNG("parent").spawn("names")
        child_b = AleaPRNG("parent").spawn("names")
        assert child_a.random() == child_b.random()
