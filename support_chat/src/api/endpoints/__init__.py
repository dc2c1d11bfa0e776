"""API endpoints package.

This package contains endpoint definitions for the API.
"""

from typing import Optional

from flask import Flask

from support_chat.src.api.endpoints.admin import init_admin_routes
from support_chat.src.api.endpoints.chat import init_chat_routes
from support_chat.src.api.endpoints.health import init_health_routes
from support_chat.src.services import BaseLLMService, ChatService, FAQService

API_PREFIX = "/api"


def register_endpoints(
    app: Flask,
    chat_service: ChatService,
    faq_service: FAQService,
    llm_service: Optional[BaseLLMService],
) -> None:
    """Register all API endpoints with the application.

    Args:
        app: Flask application
        chat_service: Service running chat exchanges
        faq_service: Service for FAQ management and ingestion
        llm_service: Completion service used for model listing, if configured
    """
    # Import and register chat endpoints
    app.register_blueprint(
        init_chat_routes(chat_service, llm_service), url_prefix=API_PREFIX
    )

    # Import and register admin endpoints
    app.register_blueprint(init_admin_routes(faq_service), url_prefix=API_PREFIX)

    app.register_blueprint(init_health_routes(), url_prefix=API_PREFIX)
