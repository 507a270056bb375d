"""Reference nonprofits and look-alike names for demo data."""

# Registered organizations: (name, EIN)
LEGITIMATE_NONPROFITS: list[tuple[str, str]] = [
    ("American Red Cross", "53-0196605"),
    ("United Way Worldwide", "13-1624107"),
    ("UNICEF USA", "13-1760110"),
    ("Feeding America", "36-3673599"),
    ("Habitat for Humanity International", "91-1914868"),
    ("Doctors Without Borders USA", "13-3433452"),
]

# Unregistered names built from wording that imitates real charities
LOOKALIKE_NAMES: list[str] = [
    "Emergency Relief Fund",
    "Global Humanitarian Aid Society",
    "Red Cross Crisis Foundation",
    "Children's Help Fund",
    "Disaster Donation Center",
    "Community Trust for Families",
]

SCAM_RECIPIENTS: list[str] = [
    "0xScamWallet",
    "0xscam000relief",
    "0xDonateScamFund",
]
