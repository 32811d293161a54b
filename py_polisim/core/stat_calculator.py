"""
City statistic calculators.

Healthcare, poverty, crime and unemployment are driven by per-capita budget
allocations, the economy and demographics. The formulas are intentionally
simple linear adjustments around a baseline, clamped to plausible ranges.
"""

from __future__ import annotations

from typing import Dict, Optional

import structlog

from ..data.city_data import CITY_TYPE_METROPOLIS, CITY_TYPE_VILLAGE
from ..data.levels import (
    ECONOMIC_OUTLOOK_LEVELS,
    RATING_LEVELS,
    rating_from_per_capita,
)
from .models import City, Demographics, EconomicProfile

logger = structlog.get_logger()

BASE_HEALTHCARE_COST_PER_CAPITA = 200
TARGET_WELFARE_PER_CAPITA = 150
TARGET_POLICE_PER_CAPITA = 100


def calculate_healthcare_metrics(
    population: int,
    allocation: float,
    demographics: Optional[Demographics],
    economic_profile: Optional[EconomicProfile],
) -> Dict[str, float]:
    """Coverage percentage and spend per resident for a health budget."""
    if population <= 0:
        return {"healthcare_coverage": 0.0, "healthcare_cost_per_person": 0.0}

    senior = demographics.age_distribution.senior if demographics else 15
    gdp = economic_profile.gdp_per_capita if economic_profile else 40000

    cost_per_capita = BASE_HEALTHCARE_COST_PER_CAPITA
    cost_per_capita *= 1 + (senior / 100 - 0.1) * 0.5
    cost_per_capita *= 1 + (gdp / 50000 - 1) * 0.1

    required = population * cost_per_capita
    coverage = (allocation / required) * 100 if required > 0 else 0.0
    coverage = max(0.0, min(100.0, coverage))

    return {
        "healthcare_coverage": round(coverage, 1),
        "healthcare_cost_per_person": round(allocation / population, 2),
    }


def calculate_poverty_rate(
    population: int,
    gdp_per_capita: float,
    unemployment_rate: float,
    economic_outlook: Optional[str],
    welfare_allocation: float,
    education_quality: Optional[str],
    youth_percent: float,
) -> float:
    if population <= 0:
        return 0.0

    rate = 18.0
    rate += (40000 - gdp_per_capita) / 2000
    rate += (unemployment_rate - 6.0) * 2.5

    if economic_outlook in ECONOMIC_OUTLOOK_LEVELS:
        rate += [-3.0, -1.5, 0.0, 1.5, 3.0][ECONOMIC_OUTLOOK_LEVELS.index(economic_outlook)] * -1

    per_capita = welfare_allocation / population
    if per_capita > TARGET_WELFARE_PER_CAPITA:
        rate -= min(5, (per_capita - TARGET_WELFARE_PER_CAPITA) / 50)
    else:
        rate += min(5, (TARGET_WELFARE_PER_CAPITA - per_capita) / 30)

    if education_quality in RATING_LEVELS:
        rate += [-2.0, -1.0, 0.0, 1.0, 2.0][RATING_LEVELS.index(education_quality)] * -1

    rate += (youth_percent / 100 - 0.2) * 2

    return max(0.5, min(50.0, round(rate, 1)))


def calculate_crime_rate(
    population: int,
    police_allocation: float,
    unemployment_rate: float,
    poverty_rate: float,
    education_quality: Optional[str],
    city_type: Optional[str],
) -> float:
    """Crimes per 1000 residents."""
    if population <= 0:
        return 0.0

    rate = 35.0
    per_capita = police_allocation / population
    if per_capita > TARGET_POLICE_PER_CAPITA:
        rate -= min(10, (per_capita - TARGET_POLICE_PER_CAPITA) / 20)
    else:
        rate += min(10, (TARGET_POLICE_PER_CAPITA - per_capita) / 10)

    rate += (unemployment_rate - 6.0) * 3.0
    rate += (poverty_rate - 15.0) * 1.5

    if education_quality in RATING_LEVELS:
        rate += [-3.0, -1.5, 0.0, 1.5, 3.0][RATING_LEVELS.index(education_quality)] * -1

    if city_type == CITY_TYPE_METROPOLIS:
        rate += 5.0
    elif city_type == CITY_TYPE_VILLAGE:
        rate -= 5.0

    return max(5.0, min(150.0, round(rate, 1)))


def calculate_unemployment_rate(
    gdp_per_capita: float,
    poverty_rate: float,
    city_type: Optional[str],
    economic_outlook: Optional[str],
) -> float:
    rate = 6.0
    if gdp_per_capita > 60000:
        rate -= 1.5
    elif gdp_per_capita > 45000:
        rate -= 0.8
    elif gdp_per_capita < 30000:
        rate += 1.2
    elif gdp_per_capita < 35000:
        rate += 0.6

    rate += (poverty_rate - 15.0) * 0.15

    if city_type == CITY_TYPE_METROPOLIS:
        rate += 0.3
    elif city_type == CITY_TYPE_VILLAGE:
        rate += 0.8

    if economic_outlook == "Booming":
        rate -= 1.5
    elif economic_outlook == "Stagnant":
        rate += 0.8
    elif economic_outlook == "Recession":
        rate += 2.0

    return max(1.0, min(25.0, round(rate, 1)))


def calculate_all_city_stats(city: City) -> Dict[str, object]:
    """
    Recompute every numeric stat for ``city``.

    Returns an empty dict when the city lacks the stats, budget, economy or
    demographics the calculators depend on.
    """
    stats = city.stats
    if not stats or not stats.budget or not city.economic_profile or not city.demographics:
        logger.warning("Missing core city data for stat calculation", city_id=city.id)
        return {}

    population = city.population
    allocations = stats.budget.expense_allocations
    gdp = city.economic_profile.gdp_per_capita

    health = calculate_healthcare_metrics(
        population,
        allocations.get("public_health_services", 0),
        city.demographics,
        city.economic_profile,
    )
    poverty = calculate_poverty_rate(
        population,
        gdp,
        stats.unemployment_rate,
        stats.economic_outlook,
        allocations.get("social_welfare_programs", 0),
        stats.education_quality,
        city.demographics.age_distribution.youth,
    )
    unemployment = calculate_unemployment_rate(gdp, poverty, stats.type, stats.economic_outlook)
    crime = calculate_crime_rate(
        population,
        allocations.get("police_department", 0),
        unemployment,
        poverty,
        stats.education_quality,
        stats.type,
    )

    safe_pop = max(1, population)
    infrastructure = allocations.get("road_infrastructure", 0) + allocations.get("public_transit", 0)

    return {
        **health,
        "poverty_rate": poverty,
        "unemployment_rate": unemployment,
        "crime_rate_per_1000": crime,
        "infrastructure_state": rating_from_per_capita(infrastructure / safe_pop, [500, 300, 150, 50]),
        "environment_rating": rating_from_per_capita(
            allocations.get("waste_management", 0) / safe_pop, [100, 60, 30, 10]
        ),
        "culture_arts_rating": rating_from_per_capita(
            allocations.get("libraries_and_culture", 0) / safe_pop, [80, 50, 25, 10]
        ),
    }
