"""Seed lists for person and place names, plus politician backgrounds."""

FIRST_NAMES = [
    "Alex", "Jordan", "Taylor", "Morgan", "Casey", "Riley", "Avery", "Quinn",
    "Maria", "James", "Elena", "David", "Sofia", "Daniel", "Grace", "Samuel",
    "Hannah", "Lucas", "Amara", "Noah", "Leila", "Victor", "Ingrid", "Kenji",
    "Priya", "Mateo", "Nadia", "Oliver", "Yuki", "Henrik", "Fatima", "Thomas",
]

LAST_NAMES = [
    "Anderson", "Bauer", "Castillo", "Dubois", "Eriksen", "Fischer", "Garcia",
    "Hughes", "Ito", "Jansen", "Kowalski", "Lambert", "Moreau", "Nakamura",
    "Okafor", "Patel", "Quinn", "Rossi", "Schmidt", "Tanaka", "Usman",
    "Vasquez", "Walker", "Xu", "Yilmaz", "Zimmermann", "Brooks", "Carter",
    "Delgado", "Ellis", "Foster", "Hayes",
]

# Place names per country, used to train the Markov city-name chain
PLACE_NAME_SEEDS = {
    "USA": [
        "Springfield", "Riverton", "Franklin", "Greenville", "Clinton", "Fairview",
        "Madison", "Georgetown", "Salem", "Ashland", "Burlington", "Milton",
        "Lexington", "Oakland", "Bristol", "Dayton", "Auburn", "Chester",
    ],
    "GER": [
        "Hamburg", "Bremen", "Dresden", "Leipzig", "Hannover", "Augsburg",
        "Freiburg", "Lübeck", "Rostock", "Kassel", "Erfurt", "Mainz",
        "Potsdam", "Ulm", "Wolfsburg", "Bamberg",
    ],
    "NLD": [
        "Amsterdam", "Rotterdam", "Utrecht", "Eindhoven", "Groningen", "Tilburg",
        "Almere", "Breda", "Nijmegen", "Haarlem", "Arnhem", "Zwolle",
        "Leiden", "Maastricht", "Dordrecht", "Delft",
    ],
    "JPN": [
        "Sapporo", "Sendai", "Chiba", "Kawasaki", "Niigata", "Shizuoka",
        "Okayama", "Kumamoto", "Kagoshima", "Matsuyama", "Kanazawa", "Nagano",
        "Toyama", "Gifu", "Nara", "Otsu",
    ],
    "GBR": [
        "Manchester", "Birmingham", "Leeds", "Sheffield", "Bristol", "Nottingham",
        "Leicester", "Coventry", "Bradford", "Stoke", "Wolverhampton", "Plymouth",
        "Southampton", "Reading", "Derby", "Norwich",
    ],
}

STATE_NAME_SEEDS = [
    "Columbia", "Lakeshore", "Westmark", "Northland", "Riverside", "Highland",
    "Southport", "Eastvale", "Pinecrest", "Redwood",
]

EDUCATION_BACKGROUNDS = [
    "Bachelor's in Political Science",
    "Law Degree (JD)",
    "Master of Public Administration",
    "Bachelor's in Economics",
    "MBA",
    "Bachelor's in History",
    "PhD in Sociology",
    "Associate Degree",
    "Bachelor's in Engineering",
]

CAREER_BACKGROUNDS = [
    "Attorney",
    "Small Business Owner",
    "Teacher",
    "Community Organizer",
    "Military Veteran",
    "Physician",
    "Union Representative",
    "Journalist",
    "Civil Servant",
    "Corporate Executive",
    "Nonprofit Director",
    "Police Officer",
]
