"""Policy questions used for candidate stances and electorate profiles.

Each option carries an ``ideology_effect`` on the six ideology axes. A
candidate's calculated ideology is the average effect of the options they
picked.
"""

from .ideologies import IDEOLOGY_AXES


def _effect(economic=0.0, social=0.0, ecology=0.0, liberty=0.0, authority=0.0, scope=0.0):
    return dict(zip(IDEOLOGY_AXES, (economic, social, ecology, liberty, authority, scope)))


POLICY_QUESTIONS = [
    {
        "id": "minimum_wage",
        "category": "Economy",
        "question_text": "How should the minimum wage balance employment and living standards?",
        "options": [
            {"value": "raise_to_living_wage", "text": "Raise it to a living wage", "ideology_effect": _effect(-2.5, -0.5, 0, -0.5, 0.5, 2.5)},
            {"value": "index_to_inflation", "text": "Index it to inflation", "ideology_effect": _effect(-0.8, 0, 0, 0, 0, 0.8)},
            {"value": "leave_to_market", "text": "Leave wages to the market", "ideology_effect": _effect(3.0, 0.5, 0, 1.5, -1.0, -2.5)},
        ],
    },
    {
        "id": "local_taxation",
        "category": "Economy",
        "question_text": "How should the city raise revenue?",
        "options": [
            {"value": "progressive_property_tax", "text": "Higher taxes on valuable property", "ideology_effect": _effect(-2.0, -0.5, 0, -0.5, 0.5, 2.0)},
            {"value": "balanced_mix", "text": "Keep a balanced mix of taxes and fees", "ideology_effect": _effect(0, 0, 0, 0, 0, 0)},
            {"value": "cut_taxes_cut_spending", "text": "Cut taxes and trim spending", "ideology_effect": _effect(2.5, 1.0, -0.5, 1.0, -0.5, -2.5)},
        ],
    },
    {
        "id": "education_funding",
        "category": "Education",
        "question_text": "How should public education be funded?",
        "options": [
            {"value": "increase_public_funding", "text": "Increase funding for public schools", "ideology_effect": _effect(-1.5, -1.0, 0, 0.5, 0, 2.0)},
            {"value": "performance_based", "text": "Tie funding to school performance", "ideology_effect": _effect(1.0, 0, 0, 0, 1.0, 0)},
            {"value": "school_choice_vouchers", "text": "Expand school choice and vouchers", "ideology_effect": _effect(2.5, 1.5, 0, 1.5, -1.0, -2.0)},
        ],
    },
    {
        "id": "healthcare_access",
        "category": "Healthcare",
        "question_text": "What role should the city play in healthcare access?",
        "options": [
            {"value": "public_clinics_for_all", "text": "Fund free public clinics for everyone", "ideology_effect": _effect(-3.0, -1.0, 0, 0, 0.5, 3.0)},
            {"value": "subsidize_low_income", "text": "Subsidize care for low-income residents", "ideology_effect": _effect(-1.0, 0, 0, 0, 0, 1.0)},
            {"value": "private_providers", "text": "Leave healthcare to private providers", "ideology_effect": _effect(2.5, 0.5, 0, 1.0, -1.0, -2.5)},
        ],
    },
    {
        "id": "crime_and_policing",
        "category": "Public Safety",
        "question_text": "How should the city tackle crime?",
        "options": [
            {"value": "more_police_tougher_penalties", "text": "More police and tougher penalties", "ideology_effect": _effect(0.5, 2.0, 0, -2.0, 2.5, 0.5)},
            {"value": "community_policing", "text": "Community policing and prevention", "ideology_effect": _effect(-0.5, -0.5, 0, 0.5, 0, 0.5)},
            {"value": "social_programs_first", "text": "Invest in social programs instead of policing", "ideology_effect": _effect(-1.5, -2.0, 0, 2.0, -2.0, 1.5)},
        ],
    },
    {
        "id": "housing_affordability",
        "category": "Housing",
        "question_text": "How should housing affordability be addressed?",
        "options": [
            {"value": "rent_control_public_housing", "text": "Rent control and more public housing", "ideology_effect": _effect(-2.5, -1.0, 0, -0.5, 1.0, 2.5)},
            {"value": "zoning_reform", "text": "Loosen zoning so more homes get built", "ideology_effect": _effect(1.0, -0.5, -0.5, 1.0, -1.0, -0.5)},
            {"value": "protect_neighborhood_character", "text": "Protect existing neighborhood character", "ideology_effect": _effect(0.5, 2.0, 0.5, 0, 0.5, 0)},
        ],
    },
    {
        "id": "infrastructure_priorities",
        "category": "Infrastructure",
        "question_text": "Which infrastructure should get priority?",
        "options": [
            {"value": "public_transit", "text": "Public transit and cycling", "ideology_effect": _effect(-1.0, -1.0, 2.0, 0, 0, 1.5)},
            {"value": "roads_and_bridges", "text": "Roads and bridges", "ideology_effect": _effect(0.5, 1.0, -1.5, 0, 0.5, 0.5)},
            {"value": "public_private_partnerships", "text": "Public-private partnerships", "ideology_effect": _effect(2.0, 0, 0, 0.5, 0, -1.5)},
        ],
    },
    {
        "id": "environmental_regulation",
        "category": "Environment",
        "question_text": "How strictly should the city regulate pollution?",
        "options": [
            {"value": "strict_limits", "text": "Strict emission limits and fines", "ideology_effect": _effect(-1.5, -1.0, 3.0, -0.5, 1.0, 2.0)},
            {"value": "incentives", "text": "Incentives for cleaner businesses", "ideology_effect": _effect(0.5, 0, 1.5, 0, 0, 0.5)},
            {"value": "minimal_regulation", "text": "Minimal regulation to attract jobs", "ideology_effect": _effect(2.5, 0.5, -3.0, 1.0, -1.0, -2.0)},
        ],
    },
    {
        "id": "local_services_delivery",
        "category": "Government",
        "question_text": "How should local services be delivered?",
        "options": [
            {"value": "expand_city_services", "text": "Expand services run by the city", "ideology_effect": _effect(-1.5, 0, 0.5, 0, 1.0, 2.0)},
            {"value": "digital_efficiency", "text": "Modernize and cut red tape", "ideology_effect": _effect(0.5, -0.5, 0, 0.5, 1.5, 0)},
            {"value": "contract_out", "text": "Contract services to private firms", "ideology_effect": _effect(2.5, 0.5, 0, 0.5, -1.0, -2.5)},
        ],
    },
    {
        "id": "civil_liberties",
        "category": "Social",
        "question_text": "How should the city balance surveillance and privacy?",
        "options": [
            {"value": "expand_surveillance", "text": "Expand cameras and monitoring", "ideology_effect": _effect(0, 1.5, 0, -3.0, 3.0, 1.0)},
            {"value": "oversight_board", "text": "Allow monitoring with independent oversight", "ideology_effect": _effect(0, 0, 0, 0, 0.5, 0)},
            {"value": "ban_facial_recognition", "text": "Ban facial recognition and limit data collection", "ideology_effect": _effect(0, -1.0, 0, 3.0, -2.5, -0.5)},
        ],
    },
]

POLICY_QUESTIONS_BY_ID = {q["id"]: q for q in POLICY_QUESTIONS}


def find_option(question_id: str, value: str):
    """Return the option dict for ``value`` on a question, or None."""
    question = POLICY_QUESTIONS_BY_ID.get(question_id)
    if not question:
        return None
    for option in question["options"]:
        if option["value"] == value:
            return option
    return None
