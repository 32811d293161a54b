"""Static catalogue of election types by country."""

_CITY_COUNCIL_TIERS = [
    {"pop_threshold": 50000, "extra_seats_range": [0, 2]},
    {"pop_threshold": 250000, "extra_seats_range": [2, 6]},
    {"pop_threshold": 1000000, "extra_seats_range": [5, 10]},
    {"pop_threshold": None, "extra_seats_range": [8, 12]},
]

_ASSEMBLY_TIERS = [
    {"pop_threshold": 100000, "extra_seats_range": [4, 10]},
    {"pop_threshold": 500000, "extra_seats_range": [10, 20]},
    {"pop_threshold": None, "extra_seats_range": [20, 35]},
]

ELECTION_TYPES_BY_COUNTRY = {
    "USA": [
        {
            "id": "mayor_usa",
            "office_name_template": "Mayor of {city_name}",
            "level": "local_city",
            "frequency_years": 4,
            "election_month": 11,
            "generates_one_winner": True,
            "electoral_system": "FPTP",
        },
        {
            "id": "city_council_usa",
            "office_name_template": "City Council Member - {city_name} (At-Large)",
            "level": "local_city",
            "frequency_years": 4,
            "election_month": 11,
            "generates_one_winner": False,
            "electoral_system": "PluralityMMD",
            "min_council_seats": 5,
            "council_seat_population_tiers": _CITY_COUNCIL_TIERS,
        },
        {
            "id": "state_governor_usa",
            "office_name_template": "Governor of {state_name}",
            "level": "local_state",
            "frequency_years": 4,
            "election_month": 11,
            "generates_one_winner": True,
            "electoral_system": "FPTP",
        },
        {
            "id": "national_president_usa",
            "office_name_template": "President of the United States",
            "level": "national_head_of_state_and_government",
            "frequency_years": 4,
            "election_month": 11,
            "generates_one_winner": True,
            "electoral_system": "ElectoralCollege",
            "vote_target": "candidate_via_electors",
        },
    ],
    "GER": [
        {
            "id": "mayor_ger",
            "office_name_template": "Oberbürgermeister of {city_name}",
            "level": "local_city",
            "frequency_years": 6,
            "election_month": 9,
            "generates_one_winner": True,
            "electoral_system": "TwoRoundSystem",
        },
        {
            "id": "city_council_ger",
            "office_name_template": "Stadtrat of {city_name}",
            "level": "local_city",
            "frequency_years": 5,
            "election_month": 5,
            "generates_one_winner": False,
            "electoral_system": "MMP",
            "vote_target": "party_and_candidate",
            "min_council_seats": 20,
            "council_seat_population_tiers": _ASSEMBLY_TIERS,
            "mmp_constituency_seats_ratio": 0.5,
            "mmp_list_seats_ratio": 0.5,
            "pr_threshold_percent": 5,
        },
    ],
    "NLD": [
        {
            "id": "municipal_council_nld",
            "office_name_template": "Gemeenteraad of {city_name}",
            "level": "local_city",
            "frequency_years": 4,
            "election_month": 3,
            "generates_one_winner": False,
            "electoral_system": "PartyListPR",
            "vote_target": "party_list",
            "min_council_seats": 9,
            "council_seat_population_tiers": _ASSEMBLY_TIERS,
            "party_list_type": "open",
            "pr_allocation_method": "dhondt",
        },
    ],
    "JPN": [
        {
            "id": "mayor_jpn",
            "office_name_template": "Mayor of {city_name}",
            "level": "local_city",
            "frequency_years": 4,
            "election_month": 4,
            "generates_one_winner": True,
            "electoral_system": "FPTP",
        },
        {
            "id": "city_assembly_jpn",
            "office_name_template": "City Assembly Member - {city_name}",
            "level": "local_city",
            "frequency_years": 4,
            "election_month": 4,
            "generates_one_winner": False,
            "electoral_system": "SNTV_MMD",
            "min_council_seats": 12,
            "council_seat_population_tiers": _ASSEMBLY_TIERS,
        },
    ],
    "GBR": [
        {
            "id": "mayor_gbr",
            "office_name_template": "Mayor of {city_name}",
            "level": "local_city",
            "frequency_years": 4,
            "election_month": 5,
            "generates_one_winner": True,
            "electoral_system": "FPTP",
        },
        {
            "id": "borough_council_gbr",
            "office_name_template": "Councillor - {city_name}",
            "level": "local_city",
            "frequency_years": 4,
            "election_month": 5,
            "generates_one_winner": False,
            "electoral_system": "BlockVote",
            "min_council_seats": 7,
            "council_seat_population_tiers": _CITY_COUNCIL_TIERS,
        },
    ],
}

DEFAULT_COUNTRY_ID = "USA"
