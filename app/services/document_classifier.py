"""Rule-based agricultural document classifier.

Infers a document's category, crops, seasons, farming activities, regions
and language from its title and body using dictionary lookups:

1. Language detection (Hangul check, then Swahili function-word ratio)
2. Entity extraction (crops, seasons, activities, regions) by substring match
3. Category scoring (weighted keyword hits, normalized to a confidence)
4. Keyword scan over the whole vocabulary

Everything here is pure. The only ambient input is the calendar month used
by the season signal, supplied through an injectable clock.
"""

import re
from datetime import date
from typing import Callable, List, Optional, Tuple

from app.models.classification import ClassificationResult
from app.services.agri_vocabulary import (
    ACTIVITY_VARIANTS,
    CROP_VARIANTS,
    DOCUMENT_CATEGORIES,
    KEYWORD_CANDIDATES,
    REGION_ZONES,
    SEASONS,
    SWAHILI_ACTIVITIES,
    SWAHILI_CROPS,
    SWAHILI_FUNCTION_WORDS,
)

Clock = Callable[[], date]

DEFAULT_CATEGORY = "general"

# Scoring constants; stored classifications depend on these values.
CONFIDENCE_DIVISOR = 10
MAX_KEYWORDS = 10
SWAHILI_RATIO_THRESHOLD = 0.1
LONG_KEYWORD_LENGTH = 5
MIN_KEYWORD_LENGTH = 3

# Hangul Jamo, Compatibility Jamo and Syllables
_HANGUL_PATTERN = re.compile(r'[\u1100-\u11ff\u3130-\u318f\uac00-\ud7a3]')
_WHITESPACE = re.compile(r'\s+')


def _ordered_unique(items: List[str]) -> List[str]:
    return list(dict.fromkeys(items))


# ---------------------------------------------------------------------------
# Language
# ---------------------------------------------------------------------------

def detect_language(text: str) -> str:
    """Return 'ko', 'sw' or 'en' for the given text.

    Any Hangul character wins outright. Otherwise the text is Swahili when
    more than 10% of its whitespace-separated tokens are common Swahili
    function words.
    """
    if _HANGUL_PATTERN.search(text):
        return "ko"

    tokens = [t for t in _WHITESPACE.split(text.lower()) if t]
    if not tokens:
        return "en"

    swahili_count = sum(1 for t in tokens if t in SWAHILI_FUNCTION_WORDS)
    if swahili_count > len(tokens) * SWAHILI_RATIO_THRESHOLD:
        return "sw"
    return "en"


# ---------------------------------------------------------------------------
# Entity extraction
# ---------------------------------------------------------------------------

def extract_crops(text: str) -> List[str]:
    """Canonical crop keys mentioned in the text, in discovery order."""
    lower_text = text.lower()
    found: List[str] = []

    for crop_key, variants in CROP_VARIANTS.items():
        if any(v in lower_text for v in variants):
            found.append(crop_key)

    for swahili_name, crop_key in SWAHILI_CROPS.items():
        if swahili_name in lower_text:
            found.append(crop_key)

    return _ordered_unique(found)


def extract_seasons(
    text: str,
    month: Optional[int] = None,
    clock: Clock = date.today,
) -> List[str]:
    """Season names named in the text plus those covering the current month.

    ``month`` pins the calendar signal; when omitted it is read from ``clock``.
    """
    lower_text = text.lower()
    current_month = month if month is not None else clock().month
    found: List[str] = []

    for season in SEASONS.values():
        if any(k in lower_text for k in season.keywords):
            found.append(season.name)

    for season in SEASONS.values():
        if current_month in season.months:
            found.append(season.name)

    return _ordered_unique(found)


def extract_activities(text: str) -> List[str]:
    """Canonical farming activity keys mentioned in the text."""
    lower_text = text.lower()
    found: List[str] = []

    for activity_key, variants in ACTIVITY_VARIANTS.items():
        if any(v in lower_text for v in variants):
            found.append(activity_key)

    for swahili_name, activity_key in SWAHILI_ACTIVITIES.items():
        if swahili_name in lower_text:
            found.append(activity_key)

    return _ordered_unique(found)


def extract_regions(text: str) -> List[str]:
    """Matched place names, each followed by the zone it rolls up to.

    Zones are evaluated independently, so a place listed in two zones
    contributes both zone keys.
    """
    lower_text = text.lower()
    found: List[str] = []

    for zone_key, places in REGION_ZONES.items():
        for place in places:
            if place in lower_text:
                found.append(place)
                found.append(zone_key)

    return _ordered_unique(found)


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------

def _keyword_weight(keyword: str) -> int:
    # Keywords longer than five characters score 2
    return 2 if len(keyword) > LONG_KEYWORD_LENGTH else 1


def determine_category(content: str, title: str) -> Tuple[str, float]:
    """Pick the best-scoring category and its normalized confidence.

    Confidence is ``min(score / 10, 1.0)``: any category reaching 10 weighted
    points saturates at 1.0. Ties keep the earlier category; no hits at all
    yield ('general', 0.0).
    """
    combined = f"{title} {content}".lower()
    best_name = DEFAULT_CATEGORY
    best_score = 0

    for category in DOCUMENT_CATEGORIES.values():
        score = sum(_keyword_weight(k) for k in category.keywords if k in combined)
        if score > best_score:
            best_name = category.name
            best_score = score

    return best_name, min(best_score / CONFIDENCE_DIVISOR, 1.0)


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------

def extract_keywords(text: str) -> List[str]:
    """Vocabulary surface forms present in the text, first 10 in scan order.

    The scan covers the whole vocabulary regardless of what the extractors
    confirmed, and the cap of 10 means the list is not exhaustive.
    """
    lower_text = text.lower()
    matches = [
        k for k in KEYWORD_CANDIDATES
        if len(k) > MIN_KEYWORD_LENGTH and k.lower() in lower_text
    ]
    return _ordered_unique(matches)[:MAX_KEYWORDS]


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------

def build_subcategory(crops: List[str], category: str) -> Optional[str]:
    """Join the primary crop with the snake-cased category name."""
    if not crops:
        return None
    return f"{crops[0]}_{_WHITESPACE.sub('_', category.lower())}"


def classify_document(
    title: Optional[str],
    content: Optional[str],
    month: Optional[int] = None,
    clock: Clock = date.today,
) -> ClassificationResult:
    """Classify a document from its title and body.

    Args:
        title: Document title (None is treated as empty).
        content: Document text (None is treated as empty).
        month: Explicit calendar month (1-12); overrides ``clock``.
        clock: Source of today's date for the season calendar signal.

    Returns:
        ClassificationResult. Empty or non-agricultural text yields the
        'general' category with zero confidence and empty lists.
    """
    title = title or ""
    content = content or ""
    full_text = f"{title} {content}"

    crops = extract_crops(full_text)
    category, confidence = determine_category(content, title)

    return ClassificationResult(
        category=category,
        subcategory=build_subcategory(crops, category),
        crops=crops,
        seasons=extract_seasons(full_text, month=month, clock=clock),
        activities=extract_activities(full_text),
        regions=extract_regions(full_text),
        confidence=confidence,
        keywords=extract_keywords(full_text),
        language=detect_language(full_text),
    )
