"""Fixed catalogues used when generating cities."""

INDUSTRIES = [
    "manufacturing",
    "services",
    "tech",
    "tourism",
    "agriculture",
    "education",
    "healthcare",
    "government",
]

MAIN_ISSUES = [
    "Infrastructure",
    "Employment",
    "Housing",
    "Crime",
    "Education",
    "Healthcare",
    "Pollution",
    "Local Services",
]

CITY_TYPE_VILLAGE = "Village/Town"
CITY_TYPE_CITY = "City"
CITY_TYPE_METROPOLIS = "Metropolis"

INCOME_SOURCE_KEYS = [
    "property_tax_revenue",
    "sales_tax_revenue",
    "business_tax_revenue",
    "fees_and_licenses",
    "utility_revenue",
    "grants_and_aid",
    "investment_income",
    "other_revenue",
]

EXPENSE_CATEGORIES = [
    "police_department",
    "fire_department",
    "emergency_services",
    "road_infrastructure",
    "public_transit",
    "water_and_sewer",
    "waste_management",
    "public_education",
    "public_health_services",
    "social_welfare_programs",
    "parks_and_recreation",
    "libraries_and_culture",
    "city_planning_and_development",
    "general_administration",
    "debt_servicing",
    "miscellaneous_expenses",
]

# Share of the expense target spread over the weighted categories. The rest
# is left for debt servicing and miscellaneous spending.
WEIGHTED_SHARE_PERCENT = 90

# Bounds for generated towns in the long tail of a state
STATE_TOWN_SIZE_CAP = 200000
MIN_SETTLEMENT_POPULATION = 400

CITY_LAW_OPTIONS = {
    "plastic_bag_policy": ["No Regulation", "Fee per Bag", "Full Ban"],
    "smoking_in_public_places": ["Allowed", "Designated Areas Only", "Banned Indoors", "Banned Everywhere"],
    "alcohol_sales_hours": ["24 Hours", "6am-2am", "8am-Midnight", "10am-10pm"],
    "rent_control": ["None", "Stabilization Only", "Strict Caps"],
    "noise_ordinance": ["Lenient", "Standard", "Strict"],
    "recycling_mandate": ["Voluntary", "Residential Only", "Mandatory for All"],
}

FEDERAL_MINIMUM_WAGE = 7.25
