"""Tests for the city statistic calculators."""

from py_polisim.core.stat_calculator import (
    calculate_all_city_stats,
    calculate_crime_rate,
    calculate_healthcare_metrics,
    calculate_poverty_rate,
    calculate_unemployment_rate,
)


class TestCalculators:

    def test_zero_population_guards(self):
        assert calculate_healthcare_metrics(0, 1000, None, None)["healthcare_coverage"] == 0.0
        assert calculate_poverty_rate(0, 40000, 6, "Slow Growth", 0, "Average", 20) == 0.0
        assert calculate_crime_rate(0, 1000, 6, 15, "Average", "City") == 0.0

    def test_more_police_lowers_crime(self):
        low = calculate_crime_rate(100_000, 2_000_000, 6, 15, "Average", "City")
        high = calculate_crime_rate(100_000, 20_000_000, 6, 15, "Average", "City")
        assert high < low

    def test_healthcare_coverage_capped(self):
        metrics = calculate_healthcare_metrics(1000, 10**9, None, None)
        assert metrics["healthcare_coverage"] == 100.0

    def test_poverty_rises_with_unemployment(self):
        low = calculate_poverty_rate(100_000, 40000, 4, "Slow Growth", 0, "Average", 20)
        high = calculate_poverty_rate(100_000, 40000, 12, "Slow Growth", 0, "Average", 20)
        assert high > low

    def test_unemployment_bounds(self):
        assert calculate_unemployment_rate(10**6, 0, "City", "Booming") >= 1.0
        assert calculate_unemployment_rate(0, 50, "Village/Town", "Recession") <= 25.0


class TestAllCityStats:

    def test_missing_budget_returns_empty(self, city_factory):
        city = city_factory(with_stats=False)
        assert calculate_all_city_stats(city) == {}

    def test_returns_numeric_and_rating_stats(self, generated_city):
        stats = calculate_all_city_stats(generated_city)
        for key in (
            "healthcare_coverage",
            "healthcare_cost_per_person",
            "poverty_rate",
            "unemployment_rate",
            "crime_rate_per_1000",
            "infrastructure_state",
            "environment_rating",
            "culture_arts_rating",
        ):
            assert key in stats
        assert 0 <= stats["healthcare_coverage"] <= 100
