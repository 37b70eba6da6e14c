"""
Document classification API endpoint.

Called by the ingestion pipeline whenever a source's text becomes available.
Classifies the document and stores the result in the source's metadata.
"""

import json
import logging
from datetime import UTC, date, datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request, Response, status

from app.db.sources import SourceUpdateError, get_source_text, update_source_classification
from app.db.supabase_client import get_supabase_client
from app.middleware.logging import CLASSIFICATION_HEADER, get_request_id
from app.middleware.rate_limit import classify_rate_limit, get_limiter
from app.models.classification import ClassifyDocumentRequest
from app.services.document_classifier import Clock, classify_document

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["classification"])
limiter = get_limiter()


def get_classifier_clock() -> Clock:
    """Clock used for the season calendar signal (overridable in tests)."""
    return date.today


def _json_response(
    payload: Dict[str, Any],
    status_code: int,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    return Response(
        content=json.dumps(payload),
        media_type="application/json",
        status_code=status_code,
        headers=headers,
    )


def _error_response(message: str, status_code: int) -> Response:
    return _json_response({"error": message, "success": False}, status_code)


@router.options("/classify-document", status_code=status.HTTP_200_OK)
async def classify_document_preflight() -> Response:
    """Answer CORS preflight with an empty 200."""
    return Response(status_code=status.HTTP_200_OK)


@router.post("/classify-document", status_code=status.HTTP_200_OK)
@limiter.limit(classify_rate_limit)  # type: ignore[untyped-decorator]
async def classify_source(
    request: Request,
    body: ClassifyDocumentRequest,
    clock: Clock = Depends(get_classifier_clock),
) -> Response:
    """
    Classify a source document and persist the result as metadata.

    When ``content`` is not supplied, the stored title/content/summary of the
    source is used instead; if that is unavailable too, the title alone is
    classified. Lookup failures never abort the request.

    Returns:
        200: {"success": true, "classification": {...}, "sourceId": "..."}
        400: Missing sourceId
        500: Classification metadata could not be stored
    """
    request_id = get_request_id(request)

    if not body.source_id:
        return _error_response("Source ID is required", status.HTTP_400_BAD_REQUEST)

    source_id = body.source_id
    title = body.title or ""
    content = body.content or ""

    try:
        supabase_client = get_supabase_client()
    except ValueError as e:
        logger.error("[%s] Supabase client unavailable: %s", request_id, e)
        return _error_response(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)

    if not content:
        stored = await get_source_text(supabase_client, source_id)
        if stored is not None:
            title = stored.get('title') or title
            content = stored.get('content') or stored.get('summary') or ""

    # Nothing to read: classify the title on its own
    if not content:
        content = title

    classification = classify_document(title, content, clock=clock)

    try:
        await update_source_classification(
            supabase_client,
            source_id,
            classification,
            classified_at=datetime.now(UTC).isoformat(),
        )
    except SourceUpdateError as e:
        logger.error("[%s] Classification not stored for source %s: %s", request_id, source_id, e)
        return _error_response(str(e), status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info(
        "[%s] Classified source %s as %s (confidence=%.2f, language=%s)",
        request_id, source_id, classification.category,
        classification.confidence, classification.language,
    )

    return _json_response(
        {
            "success": True,
            "classification": classification.to_metadata(),
            "sourceId": source_id,
        },
        status.HTTP_200_OK,
        headers={CLASSIFICATION_HEADER: classification.category},
    )
