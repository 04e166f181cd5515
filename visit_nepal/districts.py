"""Static reference data: Nepal's districts, provinces and budget ranges."""

from __future__ import annotations

from typing import Dict, List


BUDGET_RANGES: Dict[str, str] = {
    "budget_under_500": "< $500 USD",
    "budget_500_1000": "$500 - $1000 USD",
    "budget_1000_2000": "$1000 - $2000 USD",
    "budget_2000_3000": "$2000 - $3000 USD",
    "budget_over_3000": "> $3000 USD",
}

BUDGET_LABELS: List[str] = list(BUDGET_RANGES.values())

DISTRICTS_BY_REGION: Dict[str, List[str]] = {
    "East Nepal (Koshi Province)": [
        "Bhojpur", "Dhankuta", "Ilam", "Jhapa", "Khotang", "Morang", "Okhaldhunga",
        "Panchthar", "Sankhuwasabha", "Solukhumbu", "Sunsari", "Taplejung", "Terhathum",
        "Udayapur",
    ],
    "Central Nepal (Madhesh Province)": [
        "Bara", "Dhanusha", "Mahottari", "Parsa", "Rautahat", "Saptari", "Sarlahi", "Siraha",
    ],
    "Central Nepal (Bagmati Province)": [
        "Bhaktapur", "Chitwan", "Dhading", "Dolakha", "Kathmandu", "Kavrepalanchok",
        "Lalitpur", "Makwanpur", "Nuwakot", "Ramechhap", "Rasuwa", "Sindhuli",
        "Sindhupalchok",
    ],
    "West Nepal (Gandaki Province)": [
        "Baglung", "Gorkha", "Kaski", "Lamjung", "Manang", "Mustang", "Myagdi",
        "Nawalparasi East", "Parbat", "Syangja", "Tanahun",
    ],
    "West Nepal (Lumbini Province)": [
        "Arghakhanchi", "Banke", "Bardiya", "Dang", "Gulmi", "Kapilvastu",
        "Nawalparasi West", "Palpa", "Pyuthan", "Rolpa", "Rukum East", "Rupandehi",
    ],
    "Mid-West Nepal (Karnali Province)": [
        "Dailekh", "Dolpa", "Humla", "Jajarkot", "Jumla", "Kalikot", "Mugu",
        "Rukum West", "Salyan", "Surkhet",
    ],
    "Far-West Nepal (Sudurpashchim Province)": [
        "Achham", "Baitadi", "Bajhang", "Bajura", "Dadeldhura", "Darchula", "Doti",
        "Kailali", "Kanchanpur",
    ],
}

NEPAL_DISTRICTS: List[str] = sorted(
    district for districts in DISTRICTS_BY_REGION.values() for district in districts
)

_DISTRICT_LOOKUP = {name.lower(): name for name in NEPAL_DISTRICTS}
_REGION_LOOKUP = {
    district: region
    for region, districts in DISTRICTS_BY_REGION.items()
    for district in districts
}


def _squash(value: str) -> str:
    return " ".join(value.split()).lower()


def normalize_district(name: str) -> str:
    """Return the canonical spelling of a district name.

    Matching ignores case and repeated whitespace, so ``"  nawalparasi   east"``
    resolves to ``"Nawalparasi East"``.
    """

    canonical = _DISTRICT_LOOKUP.get(_squash(name or ""))
    if canonical is None:
        raise ValueError(f"Unknown district '{name}'. Please select a valid Nepal district.")
    return canonical


def region_for_district(name: str) -> str:
    return _REGION_LOOKUP[normalize_district(name)]


def normalize_budget(value: str) -> str:
    """Accept a budget label or its key and return the display label."""

    cleaned = (value or "").strip()
    if cleaned in BUDGET_RANGES:
        return BUDGET_RANGES[cleaned]
    if cleaned in BUDGET_LABELS:
        return cleaned
    raise ValueError(
        f"Invalid budget range '{value}'. Expected one of: {', '.join(BUDGET_LABELS)}."
    )
