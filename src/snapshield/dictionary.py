"""Static replacement data.

Everything here is read-only and shared by every pool instance; sampling
state lives in the random source each pool is given, never in this module.
Names are drawn from public-domain census / SSA frequency lists.
"""

from __future__ import annotations

FIRST_NAMES: dict[str, tuple[str, ...]] = {
    "male": (
        "James", "Robert", "John", "Michael", "David", "William", "Richard",
        "Joseph", "Thomas", "Christopher", "Charles", "Daniel", "Matthew",
        "Anthony", "Mark", "Donald", "Steven", "Andrew", "Paul", "Joshua",
        "Kenneth", "Kevin", "Brian", "George", "Timothy", "Ronald", "Jason",
        "Edward", "Jeffrey", "Ryan", "Jacob", "Gary", "Nicholas", "Eric",
        "Jonathan", "Stephen", "Larry", "Justin", "Scott", "Brandon",
    ),
    "female": (
        "Mary", "Patricia", "Jennifer", "Linda", "Elizabeth", "Barbara",
        "Susan", "Jessica", "Sarah", "Karen", "Lisa", "Nancy", "Betty",
        "Sandra", "Margaret", "Ashley", "Kimberly", "Emily", "Donna",
        "Michelle", "Carol", "Amanda", "Melissa", "Deborah", "Stephanie",
        "Dorothy", "Rebecca", "Sharon", "Laura", "Cynthia", "Amy", "Kathleen",
        "Angela", "Shirley", "Brenda", "Emma", "Anna", "Pamela", "Nicole",
        "Samantha",
    ),
}

LAST_NAMES: tuple[str, ...] = (
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller",
    "Davis", "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez",
    "Wilson", "Anderson", "Thomas", "Taylor", "Moore", "Jackson", "Martin",
    "Lee", "Perez", "Thompson", "White", "Harris", "Sanchez", "Clark",
    "Ramirez", "Lewis", "Robinson", "Walker", "Young", "Allen", "King",
    "Wright", "Scott", "Torres", "Nguyen", "Hill", "Flores", "Green",
    "Adams", "Nelson", "Baker", "Hall", "Rivera", "Campbell", "Mitchell",
    "Carter", "Roberts",
)

COMPANY_PREFIXES: tuple[str, ...] = (
    "Acme", "Apex", "Summit", "Pinnacle", "Vertex", "Horizon", "Nexus",
    "Quantum", "Stellar", "Vanguard", "Evergreen", "Bluewave", "Ironclad",
    "Brightpath", "Northstar", "Silverline", "Redwood", "Crescent",
    "Keystone", "Meridian",
)

COMPANY_TYPES: tuple[str, ...] = (
    "Tech", "Systems", "Solutions", "Dynamics", "Labs", "Industries",
    "Networks", "Analytics", "Logistics", "Ventures", "Digital", "Software",
    "Consulting", "Partners", "Holdings", "Media",
)

COMPANY_SUFFIXES: tuple[str, ...] = (
    "Inc", "LLC", "Corp", "Ltd", "Co", "Group",
)

COMPANY_SINGLE_WORD: tuple[str, ...] = (
    "Zentrix", "Novalink", "Quorra", "Brightly", "Fluxion", "Corvana",
    "Lumora", "Tekvio", "Synthra", "Orbitly", "Velocis", "Kintara",
    "Datavo", "Mirravel", "Quillon",
)

TLDS: tuple[str, ...] = (".com", ".net", ".org", ".io", ".co")

STREET_NAMES: tuple[str, ...] = (
    "Main", "Oak", "Pine", "Maple", "Cedar", "Elm", "Washington", "Lake",
    "Hill", "Park", "Spring", "Forest", "River", "Church", "Market",
    "Center", "First", "Second", "Third", "Fourth",
)

STREET_TYPES: tuple[str, ...] = ("St", "Ave", "Rd", "Blvd", "Dr", "Ln", "Ct", "Way")

LOCATION_CITIES: tuple[str, ...] = (
    "Springfield", "Riverside", "Fairview", "Franklin", "Greenville",
    "Bristol", "Clinton", "Georgetown", "Salem", "Madison", "Arlington",
    "Ashland", "Burlington", "Manchester", "Milton", "Oxford", "Dover",
    "Hudson", "Kingston", "Newport", "Lexington", "Marion", "Jackson",
    "Auburn", "Dayton", "Lancaster", "Clayton", "Winchester", "Chester",
    "Mount Vernon",
)

LOCATION_REGIONS: tuple[str, ...] = (
    "Pacific Northwest", "New England", "Midwest", "Gulf Coast",
    "Bay Area", "Inland Empire", "Tri-State Area", "Central Valley",
    "Mountain West", "Southern Plains", "Great Lakes Region", "Low Country",
    "High Desert", "Hill Country", "Upper Peninsula", "Piedmont",
    "Lake District", "Scottish Highlands", "Black Forest", "Outback",
)

LOCATION_COUNTRIES: tuple[str, ...] = (
    "Canada", "Mexico", "Brazil", "Argentina", "Chile", "Peru", "France",
    "Germany", "Italy", "Spain", "Portugal", "Netherlands", "Belgium",
    "Sweden", "Norway", "Finland", "Denmark", "Poland", "Austria",
    "Switzerland", "Ireland", "Japan", "South Korea", "India", "Australia",
    "New Zealand", "Kenya", "Egypt", "Morocco", "Vietnam",
)

LOCATION_FEATURES: tuple[str, ...] = (
    "Atlantic Ocean", "Pacific Ocean", "Indian Ocean", "Mediterranean Sea",
    "Caribbean Sea", "Mississippi River", "Amazon River", "Danube River",
    "Rocky Mountains", "Andes Mountains", "Alps", "Sahara Desert",
    "Mojave Desert", "Grand Canyon", "Niagara Falls", "Lake Superior",
    "Great Barrier Reef", "Hudson Bay", "Gulf of Mexico", "Iberian Peninsula",
)

# Keywords used to infer what kind of place a location string names.
FEATURE_KEYWORDS: tuple[str, ...] = (
    "ocean", "sea", "river", "lake", "mountain", "mountains", "desert",
    "forest", "falls", "canyon", "peak", "reef", "bay", "gulf", "strait",
    "channel", "peninsula", "island", "islands", "coast", "range", "valley",
    "ridge", "basin", "plateau", "plain", "plains", "hills", "highlands",
)

REGION_KEYWORDS: tuple[str, ...] = (
    "area", "region", "district", "territory", "province", "county",
    "metro", "metropolitan", "suburbs", "downtown",
)

# Gazetteer for exact country matches during type inference.
KNOWN_COUNTRIES: tuple[str, ...] = (
    "United States", "United States of America", "United Kingdom",
    "United Arab Emirates", "Czech Republic", "Dominican Republic",
    "Republic of Ireland", "China", "Japan", "France", "Germany", "Italy",
    "Spain", "Canada", "Mexico", "Brazil", "Argentina", "India", "Russia",
    "Australia",
)
