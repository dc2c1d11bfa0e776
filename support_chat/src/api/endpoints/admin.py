"""Admin endpoints module.

This module provides Flask routes for managing the FAQ knowledge base:
uploading FAQ documents and creating, listing, updating and deleting entries.
"""

import logging
import math
from typing import List, Optional, Tuple

from flask import Blueprint, Response, jsonify, request
from flask_pydantic import validate  # type: ignore
from pydantic import BaseModel, ConfigDict, Field

from support_chat.conf.config import Config
from support_chat.src.api.middleware.error_handler import is_development
from support_chat.src.api.middleware.exceptions import (
    NotFoundError,
    ServiceError,
    ValidationError,
)
from support_chat.src.services import FAQService
from support_chat.src.services.faq import (
    DocumentExtractionError,
    UnsupportedDocumentError,
)

logger = logging.getLogger(__name__)


# Schema definitions
class FAQCreateRequest(BaseModel):
    """Request model for creating a FAQ entry."""

    question: str = Field(..., min_length=1, description="Question text")
    answer: str = Field(..., min_length=1, description="Answer text")
    category: Optional[str] = Field(None, description="Category label")
    keywords: Optional[List[str]] = Field(
        None, description="Explicit keywords, derived from the text when omitted"
    )
    priority: Optional[int] = Field(
        None, ge=Config.MIN_PRIORITY, le=Config.MAX_PRIORITY
    )


class FAQUpdateRequest(BaseModel):
    """Request model for updating a FAQ entry. Omitted fields are left unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    question: Optional[str] = Field(None, min_length=1)
    answer: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    priority: Optional[int] = Field(
        None, ge=Config.MIN_PRIORITY, le=Config.MAX_PRIORITY
    )
    is_active: Optional[bool] = Field(None, alias="isActive")


class FAQListQuery(BaseModel):
    """Query parameters for listing FAQ entries."""

    page: int = Field(1, ge=1)
    limit: int = Field(Config.DEFAULT_PAGE_SIZE, ge=1)
    category: Optional[str] = None
    search: Optional[str] = None


def init_admin_routes(faq_service: FAQService) -> Blueprint:
    """Initialize admin routes with the provided services.

    Args:
        faq_service: Service for FAQ management and ingestion.

    Returns:
        Blueprint: Flask blueprint with configured admin routes.
    """
    admin_bp = Blueprint("admin", __name__)

    @admin_bp.route("/admin/upload-faqs", methods=["POST"])
    def upload_faqs() -> Tuple[Response, int]:
        """Create FAQ entries from an uploaded PDF or plain-text document.

        Expects a multipart form with a ``file`` part and an optional ``category``.

        Returns:
            JSON with the created entries and the number of dropped fragments
        """
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            raise ValidationError("No file uploaded")

        category = request.form.get("category") or None
        logger.info(
            f"Processing uploaded FAQ file {upload.filename!r} ({upload.mimetype})"
        )
        try:
            result = faq_service.ingest_document(
                upload.read(), upload.mimetype, category=category
            )
        except UnsupportedDocumentError as e:
            raise ValidationError(str(e))
        except DocumentExtractionError as e:
            raise ServiceError(
                message="Failed to process FAQ file",
                details=str(e) if is_development() else None,
            )

        return (
            jsonify(
                {
                    "message": f"Successfully processed {len(result.entries)} FAQs",
                    "faqs": [entry.to_dict() for entry in result.entries],
                    "droppedFragments": result.dropped_fragments,
                }
            ),
            200,
        )

    @admin_bp.route("/admin/faqs", methods=["GET"])
    @validate()
    def list_faqs(query: FAQListQuery) -> Tuple[Response, int]:  # type: ignore
        """List FAQ entries with optional category and search filters."""
        entries, total = faq_service.list_faqs(
            page=query.page,
            limit=query.limit,
            category=query.category,
            search=query.search,
        )
        return (
            jsonify(
                {
                    "faqs": [entry.to_dict() for entry in entries],
                    "pagination": {
                        "page": query.page,
                        "limit": query.limit,
                        "total": total,
                        "pages": math.ceil(total / query.limit),
                    },
                }
            ),
            200,
        )

    @admin_bp.route("/admin/faqs", methods=["POST"])
    @validate()
    def create_faq(body: FAQCreateRequest) -> Tuple[Response, int]:  # type: ignore
        entry = faq_service.create_faq(
            body.question,
            body.answer,
            category=body.category,
            keywords=body.keywords,
            priority=body.priority,
        )
        return (
            jsonify({"message": "FAQ created successfully", "faq": entry.to_dict()}),
            201,
        )

    @admin_bp.route("/admin/faqs/<faq_id>", methods=["PUT"])
    @validate()
    def update_faq(faq_id: str, body: FAQUpdateRequest) -> Tuple[Response, int]:  # type: ignore
        entry = faq_service.update_faq(
            faq_id,
            question=body.question,
            answer=body.answer,
            category=body.category,
            priority=body.priority,
            is_active=body.is_active,
        )
        if entry is None:
            raise NotFoundError("FAQ not found")
        return (
            jsonify({"message": "FAQ updated successfully", "faq": entry.to_dict()}),
            200,
        )

    @admin_bp.route("/admin/faqs/<faq_id>", methods=["DELETE"])
    def delete_faq(faq_id: str) -> Tuple[Response, int]:
        if not faq_service.delete_faq(faq_id):
            raise NotFoundError("FAQ not found")
        return jsonify({"message": "FAQ deleted successfully"}), 200

    return admin_bp
