"""Chat endpoints module.

This module provides Flask routes for chat functionality including:
1. Sending a message and receiving the assistant reply
2. Listing a user's conversation history
3. Fetching a single conversation
4. Listing the models the completion API offers
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from flask import Blueprint, Response, jsonify
from flask_pydantic import validate  # type: ignore
from pydantic import BaseModel, ConfigDict, Field

from support_chat.conf.config import Config
from support_chat.src.api.middleware.error_handler import is_development
from support_chat.src.api.middleware.exceptions import (
    CollaboratorError,
    ConfigurationError,
    NotFoundError,
    ServiceError,
)
from support_chat.src.services import BaseLLMService, ChatService, CompletionError

logger = logging.getLogger(__name__)


# Schema definitions
class ChatRequest(BaseModel):
    """Chat request model for validation."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., min_length=1, description="User's message")
    user_id: str = Field(..., alias="userId", min_length=1, description="User identifier")
    session_id: str = Field(
        ..., alias="sessionId", min_length=1, description="Session identifier"
    )


class ChatResponseModel(BaseModel):
    """Chat response model."""

    model_config = ConfigDict(populate_by_name=True)

    response: str = Field(..., description="Assistant reply")
    conversation_id: str = Field(..., alias="conversationId")
    timestamp: str = Field(..., description="Reply timestamp")
    model: str = Field(..., description="Model that produced the reply")


class HistoryQuery(BaseModel):
    """Query parameters for the conversation history."""

    limit: int = Field(Config.HISTORY_PAGE_SIZE, ge=1)
    page: int = Field(1, ge=1)


class ConversationQuery(BaseModel):
    """Query parameters identifying a conversation's owner."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)


def _upstream_details(error: CompletionError) -> Optional[Any]:
    if not is_development():
        return None
    if isinstance(error.body, (str, dict)):
        return error.body
    return str(error)


def init_chat_routes(
    chat_service: ChatService, llm_service: Optional[BaseLLMService]
) -> Blueprint:
    """Initialize chat routes with the provided services.

    Args:
        chat_service: Service running chat exchanges.
        llm_service: Completion service used for model listing, if configured.

    Returns:
        Blueprint: Flask blueprint with configured chat routes.
    """
    chat_bp = Blueprint("chat", __name__)

    def require_llm_service() -> BaseLLMService:
        if llm_service is None:
            raise ConfigurationError("OpenRouter API key not configured")
        return llm_service

    @chat_bp.route("/chat", methods=["POST"])
    @validate()
    def chat(body: ChatRequest) -> Tuple[Response, int]:  # type: ignore
        """Send a message and return the assistant reply.

        Args:
            body: Validated request containing the message and session identifiers

        Returns:
            JSON with the reply, conversation id, timestamp and model
        """
        require_llm_service()
        logger.info(
            f"Chat message from user {body.user_id}, session {body.session_id}"
        )
        try:
            result = chat_service.process_message(
                body.message, body.user_id, body.session_id
            )
        except CompletionError as e:
            logger.error(f"Completion failed for session {body.session_id}: {e}")
            raise CollaboratorError(details=_upstream_details(e))
        except Exception as e:
            logger.exception(f"Exchange failed for session {body.session_id}")
            raise CollaboratorError(details=str(e) if is_development() else None)

        response = ChatResponseModel(
            response=result.response,
            conversation_id=result.conversation_id,
            timestamp=result.timestamp,
            model=result.model,
        )
        return jsonify(response.model_dump(by_alias=True)), 200

    @chat_bp.route("/chat/history/<user_id>", methods=["GET"])
    @validate()
    def chat_history(user_id: str, query: HistoryQuery) -> Tuple[Response, int]:  # type: ignore
        """List a user's conversations, most recently updated first."""
        conversations = chat_service.get_history(
            user_id, page=query.page, limit=query.limit
        )
        payload: List[Dict[str, Any]] = [c.to_dict() for c in conversations]
        return jsonify(payload), 200

    @chat_bp.route("/chat/conversation/<session_id>", methods=["GET"])
    @validate()
    def get_conversation(session_id: str, query: ConversationQuery) -> Tuple[Response, int]:  # type: ignore
        conversation = chat_service.get_conversation(query.user_id, session_id)
        if conversation is None:
            raise NotFoundError("Conversation not found")
        return jsonify(conversation.to_dict()), 200

    @chat_bp.route("/chat/models", methods=["GET"])
    def list_models() -> Tuple[Response, int]:
        """List the free models available upstream alongside the model in use."""
        service = require_llm_service()
        try:
            models = service.list_models()
        except CompletionError as e:
            raise ServiceError(
                message="Failed to fetch available models", details=_upstream_details(e)
            )
        return (
            jsonify(
                {"currentModel": service.model_name, "availableModels": models}
            ),
            200,
        )

    return chat_bp
