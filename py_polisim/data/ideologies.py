"""Base ideologies with their colors and ideal points on the policy axes."""

IDEOLOGY_AXES = [
    "economic",
    "social_traditionalism",
    "ecology",
    "personal_liberty",
    "authority_structure",
    "state_intervention_scope",
]


def _point(*values):
    return dict(zip(IDEOLOGY_AXES, values))


BASE_IDEOLOGIES = [
    {"id": "conservative", "name": "Conservative", "color": "#3182CE"},
    {"id": "liberal", "name": "Liberal", "color": "#E53E3E"},
    {"id": "socialist", "name": "Socialist", "color": "#D69E2E"},
    {"id": "green", "name": "Green", "color": "#38A169"},
    {"id": "nationalist", "name": "Nationalist", "color": "#6B46C1"},
    {"id": "centrist", "name": "Centrist", "color": "#718096"},
    {"id": "libertarian", "name": "Libertarian", "color": "#FACC15"},
    {"id": "social_democrat", "name": "Social Democrat", "color": "#E53E3E"},
    {"id": "progressive", "name": "Progressive", "color": "#9F7AEA"},
    {"id": "populist", "name": "Populist", "color": "#ED8936"},
    {"id": "agrarian", "name": "Agrarian", "color": "#84A31A"},
    {"id": "technocratic", "name": "Technocratic", "color": "#0EA5E9"},
]

IDEOLOGY_IDEAL_POINTS = {
    "conservative": _point(2, 2.5, -1, -0.5, 1.5, 0.5),
    "liberal": _point(-1.5, -1.5, 2, 2.5, -1, 1.5),
    "socialist": _point(-3.5, -2, 1.5, -1, 1.5, 3.5),
    "green": _point(-1.5, -2.5, 2.5, 1.0, -1.5, 2.0),
    "nationalist": _point(0.5, 1.5, -1, -1, 2, 1.5),
    "centrist": _point(0, 0, 0, 0, 0, 0),
    "libertarian": _point(3.5, 0, -2, 4, -3.5, -4),
    "social_democrat": _point(-2.5, -2.5, 2, 1.5, -0.5, 2.5),
    "progressive": _point(-2.5, -2, 2.3, 2.5, -2, 2.5),
    "populist": _point(0, 0, -1, 0, 1.5, 0),
    "agrarian": _point(-1, 2.5, 2.5, 0, -1.5, 1),
    "technocratic": _point(0, 0, 1.5, -1.5, 3, 2),
}

# Words used to build party names per ideology
PARTY_NAME_PATTERNS = {
    "conservative": ["Conservative Party", "Heritage Alliance", "Union for Tradition"],
    "liberal": ["Liberal Party", "Free Citizens' Union", "Liberal Democrats"],
    "socialist": ["Socialist Party", "Workers' Front", "People's Socialist League"],
    "green": ["Green Party", "Ecology Movement", "Greens Alliance"],
    "nationalist": ["National Front", "Patriotic Union", "Homeland Party"],
    "centrist": ["Centre Party", "Moderate Alliance", "Common Ground Party"],
    "libertarian": ["Libertarian Party", "Liberty Caucus", "Free Market Alliance"],
    "social_democrat": ["Social Democratic Party", "Labour Party", "Social Alliance"],
    "progressive": ["Progressive Party", "Forward Movement", "New Progress"],
    "populist": ["People's Party", "Voice of the People", "Citizens' Movement"],
    "agrarian": ["Farmers' Union", "Rural Party", "Agrarian League"],
    "technocratic": ["Reform Party", "Party of Experts", "Evidence First"],
}

CENTRIST_THRESHOLD = 0.25
