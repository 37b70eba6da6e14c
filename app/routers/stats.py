"""
Statistics and analytics API endpoints.

Aggregates previously stored classification results: how many documents
were classified, and how they spread over categories, crops, seasons,
activities, regions and languages.
"""

import json
import time
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Tuple

from fastapi import APIRouter, HTTPException, Query, Request, Response, status

from app.db.sources import list_source_classifications
from app.db.supabase_client import get_supabase_client
from app.middleware.rate_limit import RATE_LIMITS, get_limiter
from app.models.classification import ClassificationStats

router = APIRouter(prefix="/api/stats", tags=["statistics"])
limiter = get_limiter()

# Cache for classification statistics (5-minute TTL), keyed by query
_classification_stats_cache: Dict[Tuple[Optional[str], int], Tuple[float, Dict[str, Any]]] = {}
_CLASSIFICATION_STATS_CACHE_TTL = 300  # 5 minutes in seconds
# notebook_id comes from the caller, so the number of keys is bounded here
_CLASSIFICATION_STATS_CACHE_MAX_ENTRIES = 256


def _prune_classification_stats_cache(current_time: float) -> None:
    """Drop expired entries, then the oldest ones while over the size cap."""
    expired = [
        key for key, (cached_at, _) in _classification_stats_cache.items()
        if current_time - cached_at >= _CLASSIFICATION_STATS_CACHE_TTL
    ]
    for key in expired:
        del _classification_stats_cache[key]

    # Dicts keep insertion order, so the first keys are the oldest writes
    while len(_classification_stats_cache) >= _CLASSIFICATION_STATS_CACHE_MAX_ENTRIES:
        del _classification_stats_cache[next(iter(_classification_stats_cache))]


def _string_items(value: Any) -> Iterable[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _top_items(counter: Counter, limit: int) -> List[Tuple[str, int]]:
    # Counter.most_common keeps insertion order for equal counts
    return counter.most_common(limit)


def aggregate_classifications(
    classifications: List[Dict[str, Any]],
    top: int = 5,
) -> ClassificationStats:
    """Count stored classifications per dimension.

    Entries without a string category are skipped as malformed.
    """
    categories: Counter = Counter()
    crops: Counter = Counter()
    seasons: Counter = Counter()
    activities: Counter = Counter()
    regions: Counter = Counter()
    languages: Counter = Counter()
    total_documents = 0
    total_confidence = 0.0

    for classification in classifications:
        category = classification.get('category')
        if not isinstance(category, str):
            continue

        total_documents += 1
        categories[category] += 1

        language = classification.get('language')
        if isinstance(language, str):
            languages[language] += 1

        confidence = classification.get('confidence')
        if isinstance(confidence, (int, float)):
            total_confidence += float(confidence)

        crops.update(_string_items(classification.get('crops')))
        seasons.update(_string_items(classification.get('seasons')))
        activities.update(_string_items(classification.get('activities')))
        regions.update(_string_items(classification.get('regions')))

    avg_confidence = (total_confidence / total_documents) if total_documents > 0 else 0.0

    return ClassificationStats(
        total_documents=total_documents,
        categories=dict(categories),
        crops=dict(crops),
        seasons=dict(seasons),
        activities=dict(activities),
        regions=dict(regions),
        languages=dict(languages),
        avg_confidence=round(avg_confidence, 3),
        top_categories=_top_items(categories, top),
        top_crops=_top_items(crops, top),
        top_seasons=_top_items(seasons, top),
        top_activities=_top_items(activities, top),
        top_regions=_top_items(regions, top),
    )


@router.get("/classification", status_code=status.HTTP_200_OK)
@limiter.limit(RATE_LIMITS["stats"])  # type: ignore[untyped-decorator]
async def get_classification_stats(
    request: Request,
    notebook_id: Optional[str] = None,
    top: int = Query(default=5, ge=1, le=50),
) -> Response:
    """
    Get aggregate statistics over auto-classified source documents.

    Results are cached for 5 minutes per (notebook_id, top) to reduce
    database load.

    Args:
        notebook_id: Restrict to the sources of one notebook
        top: Length of the top_* lists (1-50, default 5)

    Returns:
        200: JSON with classification statistics including:
            - total_documents: Number of classified sources
            - categories / crops / seasons / activities / regions / languages:
              counts per value
            - avg_confidence: Mean category confidence
            - top_categories / top_crops / top_seasons / top_activities / top_regions:
              [name, count] pairs, most frequent first
        500: Database error

    Example response:
        {
            "total_documents": 12,
            "categories": {"Crop Production Guide": 7, "Market Information": 5},
            "crops": {"maize": 6, "beans": 3},
            "languages": {"en": 9, "sw": 3},
            "avg_confidence": 0.425,
            "top_categories": [["Crop Production Guide", 7], ["Market Information", 5]],
            "top_crops": [["maize", 6], ["beans", 3]],
            ...
        }

    Raises:
        HTTPException: Database query errors
    """
    cache_key = (notebook_id, top)
    current_time = time.time()
    cached = _classification_stats_cache.get(cache_key)
    if cached and (current_time - cached[0]) < _CLASSIFICATION_STATS_CACHE_TTL:
        return Response(
            content=json.dumps(cached[1]),
            media_type="application/json",
            status_code=status.HTTP_200_OK,
            headers={"X-Cache-Hit": "true"}
        )

    try:
        supabase_client = get_supabase_client()
        classifications = await list_source_classifications(
            supabase_client,
            notebook_id=notebook_id,
        )
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database error: {str(e)}"
        )

    stats = aggregate_classifications(classifications, top=top).model_dump(mode="json")
    _prune_classification_stats_cache(current_time)
    _classification_stats_cache[cache_key] = (current_time, stats)

    return Response(
        content=json.dumps(stats),
        media_type="application/json",
        status_code=status.HTTP_200_OK,
        headers={"X-Cache-Hit": "false"}
    )
