"""Reference vocabulary for Tanzanian agriculture.

Crops, seasons, farming activities, document categories and agro-regional
zones, each with the English, Swahili and local surface forms the
classifier looks for in free text. Tables are built once at import and
exposed read-only.
"""

from types import MappingProxyType
from typing import Mapping, NamedTuple, Tuple


class Season(NamedTuple):
    name: str
    months: Tuple[int, ...]
    keywords: Tuple[str, ...]


class Category(NamedTuple):
    name: str
    keywords: Tuple[str, ...]


# Canonical crop key -> surface forms. Order is the discovery order used
# when reporting crops, so keep it stable.
CROP_VARIANTS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    # Cereals
    "maize": ("maize", "corn", "mahindi"),
    "rice": ("rice", "mchele", "paddy"),
    "sorghum": ("sorghum", "mtama"),
    "millet": ("millet", "ulezi", "finger millet"),
    "wheat": ("wheat", "ngano"),
    # Legumes
    "beans": ("beans", "maharage", "common beans", "kidney beans"),
    "pigeon_peas": ("pigeon peas", "mbaazi"),
    "cowpeas": ("cowpeas", "kunde"),
    "chickpeas": ("chickpeas", "dengu"),
    "groundnuts": ("groundnuts", "karanga", "peanuts"),
    # Roots and tubers
    "cassava": ("cassava", "muhogo", "manioc"),
    "sweet_potato": ("sweet potato", "viazi vitamu", "batata"),
    "irish_potato": ("irish potato", "viazi vya kizungu", "potato"),
    "yam": ("yam", "kiazi kikuu"),
    # Cash crops
    "coffee": ("coffee", "kahawa", "arabica", "robusta"),
    "tea": ("tea", "chai"),
    "cotton": ("cotton", "pamba"),
    "tobacco": ("tobacco", "tumbaku"),
    "cashew": ("cashew", "korosho", "cashew nuts"),
    "sisal": ("sisal", "katani"),
    # Fruit
    "banana": ("banana", "ndizi", "plantain"),
    "mango": ("mango", "maembe"),
    "avocado": ("avocado", "parachichi"),
    "orange": ("orange", "machungwa", "citrus"),
    "pineapple": ("pineapple", "nanasi"),
    "coconut": ("coconut", "nazi"),
    # Vegetables
    "tomato": ("tomato", "nyanya"),
    "onion": ("onion", "vitunguu"),
    "cabbage": ("cabbage", "kabichi"),
    "spinach": ("spinach", "mchicha"),
    "okra": ("okra", "bamia"),
})

SWAHILI_CROPS: Mapping[str, str] = MappingProxyType({
    "mahindi": "maize",
    "mchele": "rice",
    "mtama": "sorghum",
    "ulezi": "millet",
    "ngano": "wheat",
    "maharage": "beans",
    "mbaazi": "pigeon_peas",
    "kunde": "cowpeas",
    "dengu": "chickpeas",
    "karanga": "groundnuts",
    "muhogo": "cassava",
    "viazi vitamu": "sweet_potato",
    "viazi vya kizungu": "irish_potato",
    "kahawa": "coffee",
    "chai": "tea",
    "pamba": "cotton",
    "tumbaku": "tobacco",
    "korosho": "cashew",
    "katani": "sisal",
    "ndizi": "banana",
    "maembe": "mango",
    "parachichi": "avocado",
    "machungwa": "orange",
    "nanasi": "pineapple",
    "nazi": "coconut",
    "nyanya": "tomato",
    "vitunguu": "onion",
    "kabichi": "cabbage",
    "mchicha": "spinach",
    "bamia": "okra",
})

SEASONS: Mapping[str, Season] = MappingProxyType({
    "masika": Season(
        name="Masika (Long Rains)",
        months=(3, 4, 5),
        keywords=("masika", "long rains", "mvua za masika", "march", "april", "may"),
    ),
    "vuli": Season(
        name="Vuli (Short Rains)",
        months=(10, 11, 12),
        keywords=("vuli", "short rains", "mvua za vuli", "october", "november", "december"),
    ),
    "kiangazi": Season(
        name="Kiangazi (Dry Season)",
        months=(6, 7, 8, 9),
        keywords=(
            "kiangazi", "dry season", "kipindi cha kiangazi",
            "june", "july", "august", "september",
        ),
    ),
    "kipupwe": Season(
        name="Kipupwe (Cold Dry)",
        months=(6, 7),
        keywords=("kipupwe", "cold season", "baridi"),
    ),
})

ACTIVITY_VARIANTS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "planting": ("planting", "sowing", "seeding", "transplanting", "kupanda"),
    "harvesting": ("harvesting", "harvest", "picking", "kuvuna"),
    "weeding": ("weeding", "weed control", "kupalilia"),
    "fertilizing": ("fertilizing", "fertilizer", "manure", "mbolea", "fertilization"),
    "irrigation": ("irrigation", "watering", "umwagiliaji", "drip irrigation", "sprinkler"),
    "pest_control": ("pest control", "pesticide", "spraying", "dawa", "pest management"),
    "disease_control": ("disease control", "fungicide", "disease management", "magonjwa"),
    "land_preparation": ("land preparation", "plowing", "tilling", "kulima", "harrowing"),
    "storage": ("storage", "post-harvest", "kuhifadhi", "warehouse", "ghala"),
    "marketing": ("marketing", "market", "soko", "selling", "kuuza", "price", "bei"),
    "processing": ("processing", "value addition", "usindikaji", "milling", "kusaga"),
})

SWAHILI_ACTIVITIES: Mapping[str, str] = MappingProxyType({
    "kupanda": "planting",
    "kuvuna": "harvesting",
    "kupalilia": "weeding",
    "mbolea": "fertilizing",
    "umwagiliaji": "irrigation",
    "dawa": "pest_control",
    "magonjwa": "disease_control",
    "kulima": "land_preparation",
    "kuhifadhi": "storage",
    "soko": "marketing",
    "usindikaji": "processing",
})

DOCUMENT_CATEGORIES: Mapping[str, Category] = MappingProxyType({
    "crop_guide": Category(
        name="Crop Production Guide",
        keywords=("guide", "manual", "how to grow", "cultivation", "production", "mwongozo"),
    ),
    "weather_advisory": Category(
        name="Weather Advisory",
        keywords=("weather", "forecast", "climate", "rainfall", "temperature", "hali ya hewa"),
    ),
    "market_info": Category(
        name="Market Information",
        keywords=("market", "price", "demand", "supply", "trade", "soko", "bei"),
    ),
    "pest_disease": Category(
        name="Pest & Disease Management",
        keywords=(
            "pest", "disease", "control", "management", "infestation",
            "wadudu", "magonjwa",
        ),
    ),
    "soil_fertility": Category(
        name="Soil & Fertility",
        keywords=("soil", "fertility", "nutrient", "ph", "organic matter", "udongo", "rutuba"),
    ),
    "farming_technique": Category(
        name="Farming Techniques",
        keywords=("technique", "method", "practice", "technology", "innovation", "mbinu"),
    ),
    "policy_regulation": Category(
        name="Policy & Regulations",
        keywords=("policy", "regulation", "law", "government", "subsidy", "sera", "sheria"),
    ),
    "research_report": Category(
        name="Research & Reports",
        keywords=("research", "study", "report", "analysis", "findings", "utafiti", "ripoti"),
    ),
})

# Zone -> place names. A place may sit in more than one zone
# (southern / southern_highlands share four regions).
REGION_ZONES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "northern": ("arusha", "kilimanjaro", "manyara", "tanga"),
    "central": ("dodoma", "singida", "tabora"),
    "southern": ("iringa", "mbeya", "njombe", "ruvuma", "songwe"),
    "southern_highlands": ("mbeya", "iringa", "njombe", "ruvuma"),
    "eastern": ("dar es salaam", "morogoro", "pwani", "coast"),
    "western": ("kigoma", "katavi", "rukwa"),
    "lake_zone": ("mwanza", "mara", "kagera", "geita", "simiyu", "shinyanga"),
    "zanzibar": ("zanzibar", "pemba", "unguja"),
})

SWAHILI_FUNCTION_WORDS: frozenset[str] = frozenset({
    "na", "ya", "wa", "kwa", "ni", "au", "la", "za", "cha", "vya", "mwa",
})


def _keyword_candidates() -> Tuple[str, ...]:
    """Flatten every surface form into the keyword scan order."""
    candidates: list[str] = []
    for variants in CROP_VARIANTS.values():
        candidates.extend(variants)
    candidates.extend(SWAHILI_CROPS.keys())
    for season in SEASONS.values():
        candidates.extend(season.keywords)
    for variants in ACTIVITY_VARIANTS.values():
        candidates.extend(variants)
    candidates.extend(SWAHILI_ACTIVITIES.keys())
    for places in REGION_ZONES.values():
        candidates.extend(places)
    return tuple(candidates)


KEYWORD_CANDIDATES: Tuple[str, ...] = _keyword_candidates()
