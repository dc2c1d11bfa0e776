"""Flask application for an AI customer-support chat with an FAQ knowledge base."""

import argparse
import logging
import os
import sys
from typing import Optional

from flask import Flask
from flask_cors import CORS

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from support_chat.conf.config import Config
from support_chat.src.api import setup_api
from support_chat.src.services import (
    BaseLLMService,
    ConversationStore,
    FAQStore,
    create_chat_service,
    create_conversation_store,
    create_faq_service,
    create_faq_store,
    create_llm_service,
)

# Logging is configured in support_chat/__init__.py
logger = logging.getLogger(__name__)


def create_app(
    llm_service: Optional[BaseLLMService] = None,
    faq_store: Optional[FAQStore] = None,
    conversation_store: Optional[ConversationStore] = None,
    environment: Optional[str] = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        llm_service: Completion service; created from Config when omitted. If
            no API key is configured the chat endpoints report a configuration error
        faq_store: FAQ store; defaults to Config.FAQ_STORE_PATH
        conversation_store: Conversation ledger; defaults to
            Config.CONVERSATION_STORE_PATH
        environment: Overrides Config.ENVIRONMENT for this app

    Returns:
        Configured Flask application
    """
    logger.info("Starting application setup...")

    # Create Flask app
    app = Flask(__name__)
    CORS(app, origins=[Config.FRONTEND_URL])
    app.config["ENVIRONMENT"] = environment or Config.ENVIRONMENT
    app.config["MAX_CONTENT_LENGTH"] = Config.MAX_UPLOAD_BYTES
    # Let request validation errors reach the JSON error handlers
    app.config["FLASK_PYDANTIC_VALIDATION_ERROR_RAISE"] = True

    # Create services using factory methods
    if llm_service is None:
        try:
            llm_service = create_llm_service()
        except ValueError as e:
            # Chat endpoints answer with a configuration error until a key is set
            logger.warning(f"Completion service unavailable: {e}")

    if faq_store is None:
        faq_store = create_faq_store()
    if conversation_store is None:
        conversation_store = create_conversation_store()
    logger.info(
        f"Stores ready (FAQs: {faq_store.file_path}, "
        f"conversations: {conversation_store.file_path})"
    )

    faq_service = create_faq_service(faq_store)
    chat_service = create_chat_service(llm_service, conversation_store, faq_store)

    # Set up API routes
    logger.info("Setting up API routes")
    setup_api(app, chat_service, faq_service, llm_service)
    logger.info("API routes configured")

    logger.info(f"Application setup complete ({app.config['ENVIRONMENT']})")
    return app


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Run the support chat backend with arguments (--port, --model, --env)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=Config.FLASK_PORT,
        help=f"Port to listen on (default: {Config.FLASK_PORT})",
    )
    parser.add_argument(
        "--model",
        type=str,
        default=Config.LLM_MODEL_NAME,
        help=f"Completion model to use (default: {Config.LLM_MODEL_NAME})",
    )
    parser.add_argument(
        "--env",
        type=str,
        choices=Config.VALID_ENVIRONMENTS,
        default=Config.ENVIRONMENT,
        help=f"Runtime environment (default: {Config.ENVIRONMENT})",
    )

    args = parser.parse_args()

    # Set configuration from command line arguments
    Config.FLASK_PORT = args.port
    Config.LLM_MODEL_NAME = args.model
    Config.ENVIRONMENT = args.env

    logger.info(f"Using completion model: {Config.LLM_MODEL_NAME}")
    logger.info(f"Environment: {Config.ENVIRONMENT}")

    # Initialize LLM service; without an API key the server still starts
    llm_service = None
    try:
        llm_service = create_llm_service(model_name=Config.LLM_MODEL_NAME)
        logger.info("OpenRouter LLM service initialized successfully!")
    except ValueError as e:
        logger.warning(f"OpenRouter LLM service not configured: {str(e)}")
    except Exception as e:
        logger.error(f"Failed to initialize OpenRouter LLM service: {str(e)}")
        sys.exit(1)

    # Create app and run
    app = create_app(llm_service)
    app.run(host="0.0.0.0", port=Config.FLASK_PORT)
