"""Pydantic models for agricultural document classification.

Used by the document classifier to report the category, crops, seasons,
activities, regions and language it inferred, and by the API layer for
request bodies and aggregated statistics.
"""

from typing import Any, Dict, List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class ClassificationResult(BaseModel):
    """Result of auto-classifying an agricultural document."""

    model_config = ConfigDict(frozen=True)

    category: str = Field(
        description="Display name of the best-matching category, or 'general'"
    )
    subcategory: Optional[str] = Field(
        default=None,
        description="Primary crop joined with the category, e.g. maize_crop_production_guide"
    )
    crops: List[str] = Field(
        default_factory=list,
        description="Canonical crop keys in order of first discovery"
    )
    seasons: List[str] = Field(
        default_factory=list,
        description="Season display names matched by keyword or by the current month"
    )
    activities: List[str] = Field(
        default_factory=list,
        description="Canonical farming activity keys"
    )
    regions: List[str] = Field(
        default_factory=list,
        description="Matched place names and their zone keys"
    )
    confidence: float = Field(
        ge=0.0, le=1.0,
        description="Category match strength (0.0 to 1.0), saturates at 10 weighted points"
    )
    keywords: List[str] = Field(
        default_factory=list,
        max_length=10,
        description="Vocabulary surface forms found in the text (at most 10)"
    )
    language: Literal["en", "sw", "ko"] = Field(
        default="en",
        description="Detected dominant language"
    )

    def to_metadata(self) -> Dict[str, Any]:
        """Serialize for storage, omitting an absent subcategory."""
        return self.model_dump(exclude_none=True)


class ClassifyDocumentRequest(BaseModel):
    """Request body sent by the ingestion pipeline.

    Every field is optional at the schema level so a missing sourceId can be
    reported with the service's own error envelope rather than a 422.
    """

    model_config = ConfigDict(populate_by_name=True)

    source_id: Optional[str] = Field(default=None, alias="sourceId")
    title: Optional[str] = None
    content: Optional[str] = None
    file_path: Optional[str] = Field(default=None, alias="filePath")


class ClassificationStats(BaseModel):
    """Aggregate counters over stored classifications."""

    total_documents: int = 0
    categories: Dict[str, int] = Field(default_factory=dict)
    crops: Dict[str, int] = Field(default_factory=dict)
    seasons: Dict[str, int] = Field(default_factory=dict)
    activities: Dict[str, int] = Field(default_factory=dict)
    regions: Dict[str, int] = Field(default_factory=dict)
    languages: Dict[str, int] = Field(default_factory=dict)
    avg_confidence: float = 0.0
    top_categories: List[Tuple[str, int]] = Field(default_factory=list)
    top_crops: List[Tuple[str, int]] = Field(default_factory=list)
    top_seasons: List[Tuple[str, int]] = Field(default_factory=list)
    top_activities: List[Tuple[str, int]] = Field(default_factory=list)
    top_regions: List[Tuple[str, int]] = Field(default_factory=list)
