"""Database functions for source documents and their classification metadata.

This module reads document text for classification, writes classification
results back into the ``metadata`` column, and lists stored classifications
for the statistics endpoint.
"""

import logging
from typing import Any, Dict, List, Optional
from supabase import Client

from app.config import get_settings
from app.models.classification import ClassificationResult

logger = logging.getLogger(__name__)


class SourceUpdateError(Exception):
    """Raised when classification metadata could not be written."""


def _sources_table() -> str:
    return get_settings().sources_table


async def get_source_text(client: Client, source_id: str) -> Optional[Dict[str, Any]]:
    """Fetch the stored title, content and summary of a source.

    Lookup problems are not fatal to classification: they are logged and
    reported as ``None`` so the caller can fall back to the request fields.

    Args:
        client: Supabase client instance
        source_id: ID of the source row

    Returns:
        Dict with 'title', 'content', 'summary' keys, or None if unavailable
    """
    try:
        response = (
            client.table(_sources_table())
            .select('title, content, summary')
            .eq('id', source_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        logger.error("Error fetching source %s: %s", source_id, e)
        return None

    if not response.data:
        logger.warning("Source %s not found; classifying request fields only", source_id)
        return None
    return response.data[0]


async def get_source_metadata(client: Client, source_id: str) -> Dict[str, Any]:
    """Return the current metadata dict of a source ({} when absent or unreadable)."""
    try:
        response = (
            client.table(_sources_table())
            .select('metadata')
            .eq('id', source_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        logger.warning("Could not read metadata for source %s: %s", source_id, e)
        return {}

    if not response.data:
        return {}
    metadata = response.data[0].get('metadata')
    return dict(metadata) if isinstance(metadata, dict) else {}


async def update_source_classification(
    client: Client,
    source_id: str,
    classification: ClassificationResult,
    classified_at: str,
) -> Dict[str, Any]:
    """Merge a classification into the source's metadata column.

    Existing metadata keys are preserved; ``classification``,
    ``classified_at`` and ``auto_classified`` are overwritten.

    Args:
        client: Supabase client instance
        source_id: ID of the source row
        classification: Result to store
        classified_at: ISO-8601 UTC timestamp of the classification

    Returns:
        Dict: The metadata that was written

    Raises:
        SourceUpdateError: If the update fails
    """
    metadata = await get_source_metadata(client, source_id)
    metadata.update({
        'classification': classification.to_metadata(),
        'classified_at': classified_at,
        'auto_classified': True,
    })

    try:
        client.table(_sources_table()).update(
            {'metadata': metadata}
        ).eq('id', source_id).execute()
    except Exception as e:
        logger.error("Error updating source metadata for %s: %s", source_id, e)
        raise SourceUpdateError(f"Failed to update source metadata: {str(e)}") from e

    return metadata


async def list_source_classifications(
    client: Client,
    notebook_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Return stored classification dicts, skipping unclassified sources.

    Args:
        client: Supabase client instance
        notebook_id: Restrict to sources of one notebook when given

    Returns:
        List of classification dicts as stored in ``metadata.classification``

    Raises:
        Exception: If database query fails
    """
    try:
        query = client.table(_sources_table()).select('id, metadata')
        if notebook_id:
            query = query.eq('notebook_id', notebook_id)
        response = query.execute()
    except Exception as e:
        raise Exception(f"Failed to list source classifications: {str(e)}")

    classifications: List[Dict[str, Any]] = []
    for row in response.data or []:
        metadata = row.get('metadata')
        if not isinstance(metadata, dict):
            continue
        classification = metadata.get('classification')
        if isinstance(classification, dict):
            classifications.append(classification)
    return classifications
