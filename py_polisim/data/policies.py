"""City policies that AI council members can bundle into bills."""

from .ideologies import IDEOLOGY_AXES


def _lean(**weights):
    return {axis: float(weights.get(axis, 0.0)) for axis in IDEOLOGY_AXES}


CITY_POLICIES = [
    {
        "id": "economic_development",
        "name": "Economic Development Fund",
        "area": "economy",
        "cost_level": 2,
        "addresses_issues": ["Employment", "Economic Growth"],
        "ideology_lean": _lean(economic=1.0, state_intervention_scope=0.3),
        "parameter": {"key": "funding_change_percent", "default": 10, "min": 5, "max": 25},
    },
    {
        "id": "public_safety",
        "name": "Public Safety Initiative",
        "area": "safety",
        "cost_level": 2,
        "addresses_issues": ["Crime", "Public Safety"],
        "ideology_lean": _lean(social_traditionalism=0.8, authority_structure=1.0),
        "parameter": {"key": "funding_change_percent", "default": 10, "min": 5, "max": 30},
    },
    {
        "id": "education_funding",
        "name": "Education Funding Boost",
        "area": "education",
        "cost_level": 3,
        "addresses_issues": ["Education", "Education Quality"],
        "ideology_lean": _lean(economic=-0.6, state_intervention_scope=1.0),
        "parameter": {"key": "funding_change_percent", "default": 8, "min": 5, "max": 20},
    },
    {
        "id": "infrastructure_investment",
        "name": "Infrastructure Investment Plan",
        "area": "infrastructure",
        "cost_level": 3,
        "addresses_issues": ["Infrastructure", "Infrastructure Development"],
        "ideology_lean": _lean(state_intervention_scope=0.6, authority_structure=0.3),
        "parameter": {"key": "funding_change_percent", "default": 12, "min": 5, "max": 30},
    },
    {
        "id": "environmental_protection",
        "name": "Environmental Protection Ordinance",
        "area": "environment",
        "cost_level": 1,
        "addresses_issues": ["Pollution"],
        "ideology_lean": _lean(ecology=1.2, economic=-0.4),
        "parameter": None,
    },
    {
        "id": "healthcare_access",
        "name": "Community Healthcare Access",
        "area": "health",
        "cost_level": 2,
        "addresses_issues": ["Healthcare", "Healthcare Access"],
        "ideology_lean": _lean(economic=-1.0, state_intervention_scope=1.0),
        "parameter": {"key": "funding_change_percent", "default": 10, "min": 5, "max": 25},
    },
    {
        "id": "housing_policy",
        "name": "Affordable Housing Program",
        "area": "housing",
        "cost_level": 2,
        "addresses_issues": ["Housing", "Social Welfare"],
        "ideology_lean": _lean(economic=-0.8, social_traditionalism=-0.3, state_intervention_scope=0.8),
        "parameter": None,
    },
    {
        "id": "transportation_planning",
        "name": "Transportation Master Plan",
        "area": "infrastructure",
        "cost_level": 1,
        "addresses_issues": ["Infrastructure", "Local Services"],
        "ideology_lean": _lean(ecology=0.5, state_intervention_scope=0.4),
        "parameter": None,
    },
]

CITY_POLICIES_BY_ID = {p["id"]: p for p in CITY_POLICIES}
