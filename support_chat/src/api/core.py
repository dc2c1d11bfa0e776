"""Core API setup and configuration.

This module configures API middleware, error handling, and other global API components.
"""

import logging
from typing import Optional

from flask import Flask

from support_chat.src.api.endpoints import register_endpoints
from support_chat.src.api.middleware import register_middleware
from support_chat.src.services import BaseLLMService, ChatService, FAQService

logger = logging.getLogger(__name__)


def setup_api(
    app: Flask,
    chat_service: ChatService,
    faq_service: FAQService,
    llm_service: Optional[BaseLLMService],
) -> None:
    """Set up API with middleware and endpoints.

    Args:
        app: Flask application
        chat_service: Service running chat exchanges
        faq_service: Service for FAQ management and ingestion
        llm_service: Completion service used for model listing, if configured
    """
    # Register middleware
    register_middleware(app)

    # Register endpoints
    register_endpoints(app, chat_service, faq_service, llm_service)
