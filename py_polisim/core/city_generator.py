"""
City and state generation.

Builds a self-consistent city record (demographics, economy, budget, stats,
laws and political landscape) from a population figure and a country. The
generator mirrors the step-by-step flow of the other generators in this
package: each step is a plain function taking an explicit PRNG, and
``CityGenerator.generate`` runs them in order and logs progress.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

from ..data.city_data import (
    CITY_LAW_OPTIONS,
    CITY_TYPE_CITY,
    CITY_TYPE_METROPOLIS,
    CITY_TYPE_VILLAGE,
    EXPENSE_CATEGORIES,
    FEDERAL_MINIMUM_WAGE,
    INDUSTRIES,
    MAIN_ISSUES,
    MIN_SETTLEMENT_POPULATION,
    STATE_TOWN_SIZE_CAP,
    WEIGHTED_SHARE_PERCENT,
)
from ..data.levels import (
    ECONOMIC_OUTLOOK_LEVELS,
    MOOD_LEVELS,
    RATING_LEVELS,
)
from ..data.policy_questions import POLICY_QUESTIONS
from .alea_prng import AleaPRNG
from .apportionment import apportion_percentages, normalize_by_sum
from .models import (
    AgeDistribution,
    Budget,
    City,
    CityLaws,
    CityStats,
    Demographics,
    EconomicProfile,
    EducationLevels,
    Party,
    State,
    TaxRates,
)
from .names import NameGenerator
from .politicians import generate_local_landscape, normalize_party_popularities
from .stat_calculator import (
    calculate_crime_rate,
    calculate_healthcare_metrics,
    calculate_poverty_rate,
)

logger = structlog.get_logger()


# --- Demographics and economy -------------------------------------------


def generate_city_demographics(prng: AleaPRNG) -> Demographics:
    """
    Draw age and education shares.

    Both groups sum to exactly 100 with ``senior >= 10`` and
    ``high_school_or_less >= 15``.
    """
    youth = prng.randint(15, 25)
    young_adult = prng.randint(20, 30)
    adult = prng.randint(30, 40)
    senior = 100 - (youth + young_adult + adult)
    if senior < 10:
        adult -= 10 - senior
        senior = 10

    bachelors = prng.randint(15, 40)
    some_college = prng.randint(25, 45)
    high_school = 100 - (bachelors + some_college)
    if high_school < 15:
        some_college -= 15 - high_school
        high_school = 15

    ages = apportion_percentages([youth, young_adult, adult, senior])
    education = apportion_percentages([high_school, some_college, bachelors])

    return Demographics(
        age_distribution=AgeDistribution(
            youth=ages[0], young_adult=ages[1], adult=ages[2], senior=ages[3]
        ),
        education_levels=EducationLevels(
            high_school_or_less=education[0],
            some_college=education[1],
            bachelors_or_higher=education[2],
        ),
    )


def generate_economic_profile(
    population: int, demographics: Demographics, prng: AleaPRNG
) -> EconomicProfile:
    industries = prng.sample(INDUSTRIES, prng.randint(1, 3))

    gdp = prng.randint(20000, 50000)
    if demographics.education_levels.bachelors_or_higher > 30:
        gdp += prng.randint(5000, 15000)
    if "tech" in industries:
        gdp += prng.randint(5000, 20000)
    if "manufacturing" in industries and "tech" not in industries:
        gdp -= prng.randint(0, 5000)

    return EconomicProfile(dominant_industries=industries, gdp_per_capita=gdp)


def classify_city_type(population: int) -> str:
    if population < 50000:
        return CITY_TYPE_VILLAGE
    if population < 250000:
        return CITY_TYPE_CITY
    return CITY_TYPE_METROPOLIS


def classify_wealth(economic_profile: EconomicProfile, demographics: Demographics) -> str:
    gdp = economic_profile.gdp_per_capita
    education = demographics.education_levels
    if gdp > 50000 and education.bachelors_or_higher > 30:
        return "high"
    if gdp < 30000 or education.high_school_or_less > 35:
        return "low"
    return "mid"


# --- Budget --------------------------------------------------------------


def calculate_detailed_income_sources(
    population: int,
    gdp_per_capita: float,
    tax_rates: TaxRates,
    city_type: str,
    industries: List[str],
    city_laws: Optional[CityLaws],
    prng: AleaPRNG,
) -> Dict[str, int]:
    """Annual revenue per income line."""
    property_multiplier = {CITY_TYPE_METROPOLIS: 3.0, CITY_TYPE_CITY: 2.5}.get(city_type, 2.0)
    property_value_factor = prng.randint(35, 45) / 100
    property_tax = math.floor(
        population * gdp_per_capita * property_multiplier * property_value_factor * tax_rates.property
    )

    consumer_spending = gdp_per_capita * prng.randint(25, 35) / 100
    wage_multiplier = 1.0
    if city_laws is not None and city_laws.minimum_wage:
        wage_multiplier = min(1 + (city_laws.minimum_wage / FEDERAL_MINIMUM_WAGE - 1) * 0.4, 1.5)
    sales_tax = math.floor(population * consumer_spending * wage_multiplier * tax_rates.sales)

    business_factor = 0.1
    if "finance" in industries or "tech" in industries:
        business_factor += 0.05
    if "manufacturing" in industries:
        business_factor += 0.03
    business_tax = math.floor(population * gdp_per_capita * business_factor * tax_rates.business)

    fees = math.floor(
        population * prng.randint(15, 35) + len(industries) * gdp_per_capita * 0.0015
    )

    utility = 0
    if city_type != CITY_TYPE_VILLAGE and prng.random() < 0.6:
        utility = math.floor(population * prng.randint(25, 60))

    grants = math.floor(
        population * prng.randint(10, 30) + (population * 15 if gdp_per_capita < 35000 else 0)
    )
    investment = math.floor(
        (property_tax + sales_tax + business_tax) * prng.randint(1, 15) / 1000
    )
    other = math.floor(population * prng.randint(5, 15))

    return {
        "property_tax_revenue": property_tax,
        "sales_tax_revenue": sales_tax,
        "business_tax_revenue": business_tax,
        "fees_and_licenses": fees,
        "utility_revenue": utility,
        "grants_and_aid": grants,
        "investment_income": investment,
        "other_revenue": other,
    }


def _expense_weights(city_type: str, main_issues: List[str], prng: AleaPRNG) -> Dict[str, float]:
    small = city_type == CITY_TYPE_VILLAGE
    large = city_type in (CITY_TYPE_METROPOLIS, CITY_TYPE_CITY)
    weights = {
        "police_department": prng.randint(10, 16),
        "fire_department": prng.randint(5, 9),
        "emergency_services": prng.randint(2, 5),
        "road_infrastructure": prng.randint(7, 11),
        "public_transit": prng.randint(1, 4) if small else prng.randint(5, 9),
        "water_and_sewer": prng.randint(3, 6),
        "waste_management": prng.randint(2, 5),
        "public_education": prng.randint(18, 25) if large else prng.randint(12, 20),
        "public_health_services": prng.randint(4, 7),
        "social_welfare_programs": prng.randint(5, 9),
        "parks_and_recreation": prng.randint(2, 5),
        "libraries_and_culture": prng.randint(1, 4),
        "city_planning_and_development": prng.randint(2, 5),
        "general_administration": prng.randint(6, 10),
    }

    issues = set(main_issues)
    if issues & {"Crime", "Public Safety"}:
        weights["police_department"] = min(25, weights["police_department"] + prng.randint(2, 4))
    if "Infrastructure" in issues:
        weights["road_infrastructure"] = min(20, weights["road_infrastructure"] + prng.randint(2, 3))
    if "Education" in issues:
        weights["public_education"] = min(30, weights["public_education"] + prng.randint(2, 4))
    if "Healthcare" in issues:
        weights["public_health_services"] = min(15, weights["public_health_services"] + prng.randint(1, 2))
    if issues & {"Housing", "Poverty"}:
        weights["social_welfare_programs"] = min(15, weights["social_welfare_programs"] + prng.randint(1, 3))
    return weights


def generate_initial_budget(
    population: int,
    gdp_per_capita: float,
    main_issues: List[str],
    city_type: str,
    wealth: str,
    industries: List[str],
    tax_rates: TaxRates,
    prng: AleaPRNG,
    city_laws: Optional[CityLaws] = None,
) -> Budget:
    """
    Build an annual budget whose totals reconcile exactly.

    ``total_annual_expenses`` is the sum of all sixteen allocations and
    ``balance`` is income minus expenses. Miscellaneous spending absorbs
    whatever the weighted categories leave of the expense target.
    """
    income_sources = calculate_detailed_income_sources(
        population, gdp_per_capita, tax_rates, city_type, industries, city_laws, prng
    )
    total_income = sum(income_sources.values())

    per_capita = prng.randint(550, 950)
    if wealth == "high":
        per_capita *= prng.randint(120, 140) / 100
    elif wealth == "low":
        per_capita *= prng.randint(70, 85) / 100
    if city_type == CITY_TYPE_METROPOLIS:
        per_capita *= prng.randint(105, 115) / 100

    target = math.floor(population * per_capita)
    target = max(math.floor(total_income * 0.8), min(math.floor(total_income * 1.2), target))

    weights = _expense_weights(city_type, main_issues, prng)
    shares = normalize_by_sum(list(weights.values()), WEIGHTED_SHARE_PERCENT, precision=1)
    allocations = {
        key: math.floor(target * share / 100) for key, share in zip(weights.keys(), shares)
    }

    debt = 0
    if total_income < target * 0.9 or prng.random() < 0.35:
        debt = prng.randint(0, math.floor(total_income * prng.randint(15, 70) / 100))
    allocations["debt_servicing"] = math.floor(debt * prng.randint(4, 8) / 100)
    allocations["miscellaneous_expenses"] = max(0, target - sum(allocations.values()))

    allocations = {key: int(allocations.get(key, 0)) for key in EXPENSE_CATEGORIES}
    total_expenses = sum(allocations.values())

    return Budget(
        tax_rates=tax_rates,
        income_sources=income_sources,
        expense_allocations=allocations,
        total_annual_income=total_income,
        total_annual_expenses=total_expenses,
        balance=total_income - total_expenses,
        accumulated_debt=debt,
    )


# --- Stats and laws ------------------------------------------------------


def generate_initial_city_stats(
    population: int,
    demographics: Demographics,
    economic_profile: EconomicProfile,
    prng: AleaPRNG,
) -> CityStats:
    city_type = classify_city_type(population)
    wealth = classify_wealth(economic_profile, demographics)
    main_issues = prng.sample(MAIN_ISSUES, prng.randint(2, 3))[:3]

    tax_rates = TaxRates(
        property=prng.randint(80, 150) / 10000,
        sales=prng.randint(300, 800) / 10000,
        business=prng.randint(200, 600) / 10000,
    )
    budget = generate_initial_budget(
        population,
        economic_profile.gdp_per_capita,
        main_issues,
        city_type,
        wealth,
        economic_profile.dominant_industries,
        tax_rates,
        prng,
    )

    economic_outlook = prng.choice(ECONOMIC_OUTLOOK_LEVELS)
    education_quality = prng.choice(RATING_LEVELS)
    unemployment = prng.randint(30, 120) / 10
    allocations = budget.expense_allocations

    health = calculate_healthcare_metrics(
        population, allocations["public_health_services"], demographics, economic_profile
    )
    poverty = calculate_poverty_rate(
        population,
        economic_profile.gdp_per_capita,
        unemployment,
        economic_outlook,
        allocations["social_welfare_programs"],
        education_quality,
        demographics.age_distribution.youth,
    )
    crime = calculate_crime_rate(
        population,
        allocations["police_department"],
        unemployment,
        poverty,
        education_quality,
        city_type,
    )
    return CityStats(
        type=city_type,
        wealth=wealth,
        main_issues=main_issues,
        economic_outlook=economic_outlook,
        education_quality=education_quality,
        infrastructure_state=prng.choice(RATING_LEVELS),
        overall_citizen_mood=prng.choice(MOOD_LEVELS),
        environment_rating=prng.choice(RATING_LEVELS),
        culture_arts_rating=prng.choice(RATING_LEVELS),
        unemployment_rate=unemployment,
        healthcare_coverage=health["healthcare_coverage"],
        healthcare_cost_per_person=health["healthcare_cost_per_person"],
        poverty_rate=poverty,
        crime_rate_per_1000=crime,
        budget=budget,
        electorate_policy_profile={
            q["id"]: prng.choice(q["options"])["value"] for q in POLICY_QUESTIONS
        },
    )


def generate_initial_city_laws(
    stats: CityStats, economic_profile: EconomicProfile, prng: AleaPRNG
) -> CityLaws:
    gdp = economic_profile.gdp_per_capita
    if stats.wealth == "high" or gdp > 45000:
        minimum_wage = prng.randint(10, 15) + prng.choice([0, 0.25, 0.5, 0.75])
    elif stats.wealth == "mid" or gdp > 30000:
        minimum_wage = prng.randint(8, 12) + prng.choice([0, 0.25, 0.5, 0.75])
    else:
        minimum_wage = FEDERAL_MINIMUM_WAGE

    return CityLaws(
        minimum_wage=minimum_wage,
        **{law: prng.choice(options) for law, options in CITY_LAW_OPTIONS.items()},
    )


# --- Full city and state -------------------------------------------------


class CityGenerationOptions(BaseModel):
    """Inputs for a full city."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    population: int = Field(default=120000, ge=0, description="Resident count")
    country_id: str = Field(default="USA", description="Country code for names and elections")
    region_id: Optional[str] = Field(default=None, description="Owning state or region")
    name: Optional[str] = Field(default=None, description="Fixed name; generated when omitted")
    base_parties: List[Party] = Field(
        default_factory=list, description="National parties the local landscape derives from"
    )


class CityGenerator:
    """Runs the city generation steps in order."""

    def __init__(
        self,
        options: Optional[CityGenerationOptions] = None,
        prng: Optional[AleaPRNG] = None,
        name_generator: Optional[NameGenerator] = None,
    ):
        self.options = options or CityGenerationOptions()
        self.prng = prng or AleaPRNG("cities")
        self.names = name_generator or NameGenerator(self.prng)

    def generate(self) -> City:
        opts = self.options
        logger.info("Generating city", population=opts.population, country=opts.country_id)

        logger.info("Step 1: Drawing demographics")
        demographics = generate_city_demographics(self.prng)

        logger.info("Step 2: Building economic profile")
        economy = generate_economic_profile(opts.population, demographics, self.prng)

        logger.info("Step 3: Deriving stats and budget")
        stats = generate_initial_city_stats(opts.population, demographics, economy, self.prng)

        logger.info("Step 4: Enacting local laws")
        laws = generate_initial_city_laws(stats, economy, self.prng)

        logger.info("Step 5: Building political landscape")
        landscape = generate_local_landscape(opts.base_parties, self.prng)

        city = City(
            id=f"city_{self.prng.token()}",
            name=opts.name or self.names.generate_city_name(opts.country_id),
            country_id=opts.country_id,
            region_id=opts.region_id,
            population=opts.population,
            demographics=demographics,
            economic_profile=economy,
            stats=stats,
            city_laws=laws,
            political_landscape=landscape,
        )
        logger.info(
            "City generated",
            city=city.name,
            type=stats.type,
            balance=stats.budget.balance,
            parties=len(landscape),
        )
        return city


def generate_full_city_data(
    options: CityGenerationOptions,
    prng: AleaPRNG,
    name_generator: Optional[NameGenerator] = None,
) -> City:
    return CityGenerator(options, prng, name_generator).generate()


def generate_cities_for_state(
    state_population: int,
    country_id: str,
    region_id: Optional[str],
    base_parties: List[Party],
    prng: AleaPRNG,
    name_generator: Optional[NameGenerator] = None,
    max_towns: int = 12,
) -> List[City]:
    """
    Split a state's population into a capital, major cities and towns.

    The capital takes 5-20%, each major city 5-15% and towns share what is
    left, each capped at 200k. Population not placed in a town is treated
    as rural and stays with the state.
    """
    names = name_generator or NameGenerator(prng)
    sizes: List[int] = []
    remaining = state_population

    capital = math.floor(state_population * prng.randint(5, 20) / 100)
    if capital >= MIN_SETTLEMENT_POPULATION:
        sizes.append(capital)
        remaining -= capital

    for _ in range(prng.randint(1, 4)):
        size = math.floor(state_population * prng.randint(5, 15) / 100)
        if size < MIN_SETTLEMENT_POPULATION or size > remaining:
            break
        sizes.append(size)
        remaining -= size

    for _ in range(max_towns):
        if remaining < MIN_SETTLEMENT_POPULATION:
            break
        size = math.floor(remaining * prng.randint(5, 30) / 100)
        size = max(MIN_SETTLEMENT_POPULATION, min(STATE_TOWN_SIZE_CAP, size))
        size = min(size, remaining)
        sizes.append(size)
        remaining -= size

    cities = [
        generate_full_city_data(
            CityGenerationOptions(
                population=size,
                country_id=country_id,
                region_id=region_id,
                base_parties=base_parties,
            ),
            prng,
            names,
        )
        for size in sizes
    ]
    logger.info(
        "Generated cities for state",
        region=region_id,
        cities=len(cities),
        rural_population=remaining,
    )
    return cities


def generate_full_state_data(
    population: int,
    country_id: str,
    base_parties: List[Party],
    prng: AleaPRNG,
    name: Optional[str] = None,
    name_generator: Optional[NameGenerator] = None,
) -> State:
    names = name_generator or NameGenerator(prng)
    state_id = f"state_{prng.token()}"

    landscape = normalize_party_popularities(
        [
            p.model_copy(update={"popularity": float(max(5, min(95, 50 + prng.randint(-10, 10))))})
            for p in base_parties
        ]
    )
    cities = generate_cities_for_state(
        population, country_id, state_id, base_parties, prng, names
    )

    return State(
        id=state_id,
        name=name or names.generate_state_name(),
        country_id=country_id,
        population=population,
        capital_city_id=cities[0].id if cities else None,
        cities=cities,
        political_landscape=landscape,
        legislature_seats=prng.randint(40, 120),
    )
