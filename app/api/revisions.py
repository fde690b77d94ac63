"""
Revision endpoints.

Serve the formatted diff of a revision and accept notes on it.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import async_session_factory, get_db
from app.store import SqlRevisionStore, load_reference_resolver
from src.revision_diff import (
    InvalidNoteError,
    Note,
    ReferenceResolver,
    RevisionDiffSet,
    RevisionNotFoundError,
    RevisionStore,
    add_note,
    get_revision_diff,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Dependencies ---

def get_revision_store() -> RevisionStore:
    """Revision store used by the endpoints."""
    return SqlRevisionStore(async_session_factory)


async def get_reference_resolver(
    db: AsyncSession = Depends(get_db),
) -> ReferenceResolver:
    """Lookup resolver loaded from the database."""
    return await load_reference_resolver(db)


# --- Request/Response Models ---

class NoteRequest(BaseModel):
    """Request body for adding a note to a revision."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "author_id": 7,
                "content": "Fixed the publication date from the cover scan."
            }
        }
    )

    author_id: int = Field(..., ge=1, description="Editor leaving the note")
    content: str = Field(..., min_length=1, max_length=5000, description="Note text")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(description="Error type")
    message: str = Field(description="Error message")


def _not_found(e: RevisionNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": "not_found", "message": str(e)},
    )


# --- Endpoints ---

@router.get(
    "/{revision_id}",
    response_model=RevisionDiffSet,
    responses={
        200: {"description": "Formatted revision diff"},
        404: {"model": ErrorResponse, "description": "Revision not found"},
    },
    summary="Get the formatted diff of a revision",
)
async def read_revision_diff(
    revision_id: int,
    store: RevisionStore = Depends(get_revision_store),
    resolver: ReferenceResolver = Depends(get_reference_resolver),
) -> RevisionDiffSet:
    """
    Compute the changes a revision made to every entity it touched.

    Blocks are ordered Author, Edition, EditionGroup, Publisher, Work.
    """
    try:
        return await get_revision_diff(
            revision_id,
            store,
            resolver,
            fail_fast=settings.revision_diff_fail_fast,
        )
    except RevisionNotFoundError as e:
        logger.info("Revision not found | revision=%s", revision_id)
        raise _not_found(e)


@router.post(
    "/{revision_id}/notes",
    response_model=Note,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse, "description": "Revision not found"},
        422: {"model": ErrorResponse, "description": "Invalid note"},
    },
    summary="Add a note to a revision",
)
async def create_revision_note(
    revision_id: int,
    request: NoteRequest,
    store: RevisionStore = Depends(get_revision_store),
) -> Note:
    """Attach an editor's note to an existing revision."""
    try:
        return await add_note(revision_id, request.author_id, request.content, store)
    except RevisionNotFoundError as e:
        raise _not_found(e)
    except InvalidNoteError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error": "validation_error", "message": str(e)},
        )
