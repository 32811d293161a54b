"""Shared builders for simulation tests."""

import pytest

from py_polisim.core.alea_prng import AleaPRNG
from py_polisim.core.city_generator import CityGenerationOptions, generate_full_city_data
from py_polisim.core.models import (
    AgeDistribution,
    Budget,
    Campaign,
    City,
    CityLaws,
    CityStats,
    Demographics,
    EconomicProfile,
    EducationLevels,
    GameDate,
    GovernmentOffice,
    Party,
    Politician,
    TaxRates,
)
from py_polisim.core.politicians import generate_national_parties


def build_budget(income=1_000_000, expenses=None, debt=0):
    allocations = expenses or {"police_department": 400_000, "public_education": 500_000}
    total_expenses = sum(allocations.values())
    return Budget(
        tax_rates=TaxRates(property=0.01, sales=0.05, business=0.03),
        income_sources={"property_tax_revenue": income},
        expense_allocations=allocations,
        total_annual_income=income,
        total_annual_expenses=total_expenses,
        balance=income - total_expenses,
        accumulated_debt=debt,
    )


def build_parties(popularities=(25, 25, 25, 25)):
    return [
        Party(
            id=f"party_{i}",
            name=f"Party {i}",
            ideology="Centrist",
            ideology_id="centrist",
            popularity=float(p),
        )
        for i, p in enumerate(popularities)
    ]


def build_city(
    mood="Content",
    poverty=15.0,
    crime=35.0,
    unemployment=6.0,
    budget=None,
    landscape=None,
    population=100_000,
    with_stats=True,
):
    stats = None
    if with_stats:
        stats = CityStats(
            type="City",
            wealth="mid",
            main_issues=["Crime", "Housing"],
            overall_citizen_mood=mood,
            poverty_rate=poverty,
            crime_rate_per_1000=crime,
            unemployment_rate=unemployment,
            healthcare_coverage=80.0,
            budget=budget if budget is not None else build_budget(),
        )
    return City(
        id="city_test",
        name="Testville",
        country_id="USA",
        population=population,
        demographics=Demographics(
            age_distribution=AgeDistribution(youth=20, young_adult=25, adult=40, senior=15),
            education_levels=EducationLevels(
                high_school_or_less=35, some_college=35, bachelors_or_higher=30
            ),
        ),
        economic_profile=EconomicProfile(dominant_industries=["services"], gdp_per_capita=40000),
        stats=stats,
        city_laws=CityLaws(minimum_wage=10.0),
        political_landscape=landscape if landscape is not None else build_parties(),
    )


def build_politician(pid, party_id="party_0", **overrides):
    data = dict(id=pid, name=f"Politician {pid}", party_id=party_id, party_name="Party 0")
    data.update(overrides)
    return Politician(**data)


def build_campaign(city=None, player=None, offices=None, elections=None):
    date = GameDate(year=2025, month=1, day=1)
    return Campaign(
        id="campaign_test",
        seed="test",
        country_id="USA",
        start_date=date,
        current_date=date,
        player=player or build_politician("player_1", is_player=True),
        city=city or build_city(),
        elections=elections or [],
        government_offices=offices or [],
    )


def build_council(count=3):
    members = [build_politician(f"council_{i}") for i in range(count)]
    return GovernmentOffice(
        office_id="council",
        office_name="City Council",
        level="local_city",
        members=members,
        number_of_seats=count,
    )


@pytest.fixture
def prng():
    return AleaPRNG("test-seed")


@pytest.fixture
def city_factory():
    return build_city


@pytest.fixture
def budget_factory():
    return build_budget


@pytest.fixture
def politician_factory():
    return build_politician


@pytest.fixture
def campaign_factory():
    return build_campaign


@pytest.fixture
def council_factory():
    return build_council


@pytest.fixture
def party_factory():
    return build_parties


@pytest.fixture
def generated_city():
    """A fully generated city with a national party landscape."""
    prng = AleaPRNG("generated-city")
    parties = generate_national_parties(prng)
    return generate_full_city_data(
        CityGenerationOptions(population=150_000, base_parties=parties), prng
    )
