"""
Canonical data model for cities, parties, politicians and elections.

Every generator and tick function reads and returns these pydantic models.
Tick functions never mutate their inputs; they return new copies.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GameDate(BaseModel):
    """Calendar date inside the simulation."""

    year: int = Field(description="Calendar year")
    month: int = Field(ge=1, le=12, description="Month, 1-12")
    day: int = Field(default=1, ge=1, le=31, description="Day of month")

    def add_months(self, months: int) -> GameDate:
        total = self.year * 12 + (self.month - 1) + months
        return GameDate(year=total // 12, month=total % 12 + 1, day=self.day)

    def key(self) -> tuple:
        return (self.year, self.month, self.day)

    def is_on_or_before(self, other: GameDate) -> bool:
        return self.key() <= other.key()


# --- City ----------------------------------------------------------------


class AgeDistribution(BaseModel):
    """Population share per age bracket, in percent."""

    youth: int = Field(description="Under 18")
    young_adult: int = Field(description="18-34")
    adult: int = Field(description="35-64")
    senior: int = Field(description="65 and over")

    def total(self) -> int:
        return self.youth + self.young_adult + self.adult + self.senior


class EducationLevels(BaseModel):
    """Share of adults per highest education level, in percent."""

    high_school_or_less: int
    some_college: int
    bachelors_or_higher: int

    def total(self) -> int:
        return self.high_school_or_less + self.some_college + self.bachelors_or_higher


class Demographics(BaseModel):
    age_distribution: AgeDistribution
    education_levels: EducationLevels


class EconomicProfile(BaseModel):
    dominant_industries: List[str] = Field(default_factory=list)
    gdp_per_capita: int = Field(description="GDP per resident in currency units")
    key_local_issues_from_profile: List[str] = Field(default_factory=list)


class TaxRates(BaseModel):
    """Tax rates as fractions (0.012 is 1.2%)."""

    property: float
    sales: float
    business: float


class Budget(BaseModel):
    """Annual city budget."""

    tax_rates: TaxRates
    income_sources: Dict[str, int] = Field(default_factory=dict)
    expense_allocations: Dict[str, int] = Field(default_factory=dict)
    total_annual_income: int = 0
    total_annual_expenses: int = 0
    balance: int = 0
    accumulated_debt: int = 0

    def is_reconciled(self) -> bool:
        """Expenses match their allocations and balance matches both totals."""
        return (
            self.total_annual_expenses == sum(self.expense_allocations.values())
            and self.balance == self.total_annual_income - self.total_annual_expenses
        )


class CityStats(BaseModel):
    """Derived city statistics and qualitative ratings."""

    type: str = Field(description="Village/Town, City or Metropolis")
    wealth: str = Field(description="low, mid or high")
    main_issues: List[str] = Field(default_factory=list)
    economic_outlook: str = "Slow Growth"
    education_quality: str = "Average"
    infrastructure_state: str = "Average"
    overall_citizen_mood: str = "Concerned"
    environment_rating: str = "Average"
    culture_arts_rating: str = "Average"
    unemployment_rate: float = 6.0
    healthcare_coverage: float = 0.0
    healthcare_cost_per_person: float = 0.0
    poverty_rate: float = 15.0
    crime_rate_per_1000: float = 35.0
    budget: Optional[Budget] = None
    electorate_policy_profile: Dict[str, str] = Field(
        default_factory=dict, description="Preferred option value per policy question"
    )


class CityLaws(BaseModel):
    minimum_wage: float = Field(description="Hourly minimum wage")
    plastic_bag_policy: str = "No Regulation"
    smoking_in_public_places: str = "Banned Indoors"
    alcohol_sales_hours: str = "6am-2am"
    rent_control: str = "None"
    noise_ordinance: str = "Standard"
    recycling_mandate: str = "Voluntary"


class Party(BaseModel):
    """A party and its share of the local political landscape."""

    id: str
    name: str
    ideology: str
    ideology_id: str
    color: str = "#888888"
    popularity: float = Field(default=0.0, ge=0.0, le=100.0)
    ideology_scores: Dict[str, float] = Field(default_factory=dict)


class City(BaseModel):
    id: str
    name: str
    country_id: str
    region_id: Optional[str] = None
    population: int
    demographics: Optional[Demographics] = None
    economic_profile: Optional[EconomicProfile] = None
    stats: Optional[CityStats] = None
    city_laws: Optional[CityLaws] = None
    political_landscape: List[Party] = Field(default_factory=list)

    @property
    def adult_population(self) -> int:
        if not self.demographics:
            return self.population
        youth = self.demographics.age_distribution.youth
        return int(self.population * (100 - youth) / 100)


class State(BaseModel):
    id: str
    name: str
    country_id: str
    population: int
    capital_city_id: Optional[str] = None
    cities: List[City] = Field(default_factory=list)
    political_landscape: List[Party] = Field(default_factory=list)
    legislature_seats: int = 0


# --- Politicians ---------------------------------------------------------


class PoliticianAttributes(BaseModel):
    charisma: int = 5
    integrity: int = 5
    intelligence: int = 5
    negotiation: int = 5
    oratory: int = 5
    fundraising: int = 5


class PoliticianBackground(BaseModel):
    education: str = ""
    career: str = ""


class PartyAffiliation(BaseModel):
    party_id: str
    party_name: str
    party_color: str


class Politician(BaseModel):
    """A candidate, officeholder or the player."""

    id: str
    name: str
    first_name: str = ""
    last_name: str = ""
    age: int = 45
    party_id: Optional[str] = None
    party_name: str = "Independent"
    party_color: str = "#888888"
    attributes: PoliticianAttributes = Field(default_factory=PoliticianAttributes)
    background: PoliticianBackground = Field(default_factory=PoliticianBackground)
    policy_stances: Dict[str, str] = Field(default_factory=dict)
    ideology_scores: Dict[str, float] = Field(default_factory=dict)
    calculated_ideology: str = "Centrist"
    base_score: int = 0
    polling: int = 0
    name_recognition: int = 0
    campaign_funds: int = 0
    treasury: int = 0
    approval_rating: int = 50
    media_buzz: int = 0
    political_capital: int = 0
    party_support: int = 0
    is_incumbent: bool = False
    is_player: bool = False
    is_actually_running: bool = False
    is_constituency_winner: bool = False
    current_office: Optional[str] = None
    list_position: Optional[int] = None
    party_affiliation_read_only: Optional[PartyAffiliation] = None

    @property
    def is_independent(self) -> bool:
        return not self.party_id or self.party_id.startswith("independent")


# --- Elections -----------------------------------------------------------


class CouncilSeatTier(BaseModel):
    pop_threshold: Optional[int] = Field(
        default=None, description="Upper population bound; None means unbounded"
    )
    extra_seats_range: List[int] = Field(default_factory=lambda: [0, 0])


class ElectionType(BaseModel):
    """Static definition of a recurring election."""

    id: str
    office_name_template: str
    level: str
    frequency_years: int = 4
    election_month: Optional[int] = None
    generates_one_winner: bool = True
    electoral_system: str = "FPTP"
    vote_target: str = "candidate"
    min_council_seats: Optional[int] = None
    council_seat_population_tiers: List[CouncilSeatTier] = Field(default_factory=list)
    mmp_constituency_seats_ratio: Optional[float] = None
    mmp_list_seats_ratio: Optional[float] = None
    pr_threshold_percent: Optional[float] = None
    party_list_type: Optional[str] = None
    pr_allocation_method: Optional[str] = None


class CandidateResult(BaseModel):
    candidate_id: str
    votes: int = 0
    percentage: float = 0.0


class ElectionOutcome(BaseModel):
    status: Literal["upcoming", "concluded"] = "upcoming"
    winners: List[Politician] = Field(default_factory=list)
    results_by_candidate: List[CandidateResult] = Field(default_factory=list)
    results_by_party: Dict[str, float] = Field(default_factory=dict)
    turnout_actual: Optional[float] = None


class MMPData(BaseModel):
    party_lists: Dict[str, List[Politician]] = Field(default_factory=dict)
    constituency_candidates_by_party: Dict[str, List[Politician]] = Field(default_factory=dict)
    independent_constituency_candidates: List[Politician] = Field(default_factory=list)
    num_constituency_seats: int = 0
    num_list_seats: int = 0


class ElectionInstance(BaseModel):
    """One scheduled election with its participants."""

    id: str
    instance_id_base: str
    election_type_id: str
    office_name: str
    level: str
    electoral_system: str
    election_date: GameDate
    filing_deadline: GameDate
    number_of_seats_to_fill: int = 1
    seat_distribution_method: str = "single_winner"
    incumbents: List[Politician] = Field(default_factory=list)
    candidates: Optional[List[Politician]] = None
    party_lists: Optional[Dict[str, List[Politician]]] = None
    mmp_data: Optional[MMPData] = None
    expected_turnout: float = 0.0
    total_eligible_voters: int = 0
    outcome: ElectionOutcome = Field(default_factory=ElectionOutcome)

    @model_validator(mode="after")
    def _single_participant_shape(self) -> ElectionInstance:
        populated = [
            name
            for name in ("candidates", "party_lists", "mmp_data")
            if getattr(self, name) is not None
        ]
        if len(populated) != 1:
            raise ValueError(
                f"Exactly one participant container must be set, got {populated or 'none'}"
            )
        return self

    @property
    def incumbent_ids(self) -> List[str]:
        return [p.id for p in self.incumbents]

    def all_candidates(self) -> List[Politician]:
        """Flattened view over whichever participant container is set."""
        if self.candidates is not None:
            return list(self.candidates)
        if self.party_lists is not None:
            return [c for members in self.party_lists.values() for c in members]
        if self.mmp_data is not None:
            out = [c for members in self.mmp_data.party_lists.values() for c in members]
            out += [
                c
                for members in self.mmp_data.constituency_candidates_by_party.values()
                for c in members
            ]
            out += self.mmp_data.independent_constituency_candidates
            return out
        return []


class GovernmentOffice(BaseModel):
    office_id: str
    office_name: str
    level: str
    election_type_id: Optional[str] = None
    holder: Optional[Politician] = None
    members: List[Politician] = Field(default_factory=list)
    number_of_seats: int = 1
    term_ends: Optional[GameDate] = None


# --- Legislation and news ------------------------------------------------


class BillPolicy(BaseModel):
    policy_id: str
    chosen_parameters: Dict[str, Any] = Field(default_factory=dict)


class Bill(BaseModel):
    id: str
    name: str
    proposer_id: str
    proposer_name: str
    policies: List[BillPolicy] = Field(default_factory=list)
    theme: str = ""
    status: Literal["proposed", "passed", "failed"] = "proposed"
    proposed_date: Optional[GameDate] = None

    @property
    def policy_ids(self) -> List[str]:
        return [p.policy_id for p in self.policies]


class NewsItem(BaseModel):
    headline: str
    summary: str = ""
    type: str = "general"
    impact: Literal["positive", "negative", "neutral"] = "neutral"
    date: Optional[GameDate] = None


class UpdateResult(BaseModel):
    """Outcome of one monthly step.

    ``applied`` carries the new sub-object in ``updates``; ``unchanged``
    means the step ran and found nothing to change; ``skipped`` means a
    precondition failed and ``reason`` says which.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: Literal["applied", "unchanged", "skipped"]
    reason: Optional[str] = None
    updates: Optional[Any] = None
    news_items: List[NewsItem] = Field(default_factory=list)

    @classmethod
    def applied(cls, updates: Any, news_items: Optional[List[NewsItem]] = None) -> UpdateResult:
        return cls(status="applied", updates=updates, news_items=news_items or [])

    @classmethod
    def unchanged(cls) -> UpdateResult:
        return cls(status="unchanged")

    @classmethod
    def skipped(cls, reason: str) -> UpdateResult:
        return cls(status="skipped", reason=reason)

    @property
    def changed(self) -> bool:
        return self.status == "applied"


# --- Application state ---------------------------------------------------


class Campaign(BaseModel):
    """Whole simulation state for one playthrough."""

    id: str
    seed: str
    country_id: str
    start_date: GameDate
    current_date: GameDate
    player: Politician
    city: City
    state: Optional[State] = None
    national_parties: List[Party] = Field(default_factory=list)
    elections: List[ElectionInstance] = Field(default_factory=list)
    government_offices: List[GovernmentOffice] = Field(default_factory=list)
    proposed_bills: List[Bill] = Field(default_factory=list)
    news: List[NewsItem] = Field(default_factory=list)
    last_election_years: Dict[str, int] = Field(default_factory=dict)
    months_elapsed: int = 0

    @property
    def player_is_mayor(self) -> bool:
        office = (self.player.current_office or "").lower()
        return "mayor" in office or "bürgermeister" in office

    def council_members(self) -> List[Politician]:
        """Members of every multi-seat local office."""
        members: List[Politician] = []
        for office in self.government_offices:
            if office.level == "local_city" and office.number_of_seats > 1:
                members.extend(office.members)
        return members

    def city_executive(self) -> Optional[GovernmentOffice]:
        for office in self.government_offices:
            if office.level == "local_city" and office.number_of_seats == 1:
                return office
        return None
