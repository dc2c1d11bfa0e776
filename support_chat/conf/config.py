"""Configuration module for the support chat backend."""

import os
from pathlib import Path
from typing import FrozenSet, List, Optional


class ConfigMeta(type):
    """Metaclass to prevent direct instantiation and enforce singleton attributes."""

    def __call__(cls, *args: object, **kwargs: object) -> None:
        """Prevent direct instantiation."""
        raise TypeError("Config cannot be instantiated directly. Use class attributes.")


class Config(metaclass=ConfigMeta):
    """Singleton configuration class. Access attributes directly via the class.

    Components never read these values at call time; the service factory passes
    them in at construction so tests can substitute their own.
    """

    # =========================================================================
    # Path Configuration
    # =========================================================================
    BASE_DIR: Path = Path(__file__).parent.parent.parent
    DATA_DIR: Path = Path(os.getenv("SUPPORT_CHAT_DATA_DIR", str(BASE_DIR / "data")))
    FAQ_STORE_PATH: Path = DATA_DIR / "faqs.json"
    CONVERSATION_STORE_PATH: Path = DATA_DIR / "conversations.json"

    # =========================================================================
    # Server Configuration
    # =========================================================================
    FLASK_PORT: int = int(os.getenv("PORT", "5000"))
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    VALID_ENVIRONMENTS: List[str] = ["development", "production", "test"]
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024  # 10MB upload limit

    # =========================================================================
    # Completion API Configuration
    # =========================================================================
    OPENROUTER_API_KEY: Optional[str] = os.getenv("OPENROUTER_API_KEY")
    OPENROUTER_BASE_URL: str = os.getenv(
        "OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"
    )
    LLM_MODEL_NAME: str = os.getenv(
        "LLM_MODEL_NAME", "mistralai/mistral-7b-instruct:free"
    )
    LLM_MAX_TOKENS: int = 500
    LLM_TEMPERATURE: float = 0.7
    LLM_REQUEST_TIMEOUT: float = 60.0
    LLM_MAX_RETRIES: int = 2
    APP_TITLE: str = "AI Customer Support Chat"

    # =========================================================================
    # FAQ Matching Configuration
    # =========================================================================
    STOP_WORDS: FrozenSet[str] = frozenset(
        ["the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by"]
    )
    MIN_KEYWORD_LENGTH: int = 3  # Tokens of length <= 2 are dropped
    MAX_KEYWORDS: int = 10
    FAQ_CANDIDATE_LIMIT: int = 10
    MIN_PRIORITY: int = 1
    MAX_PRIORITY: int = 10
    DEFAULT_PRIORITY: int = 1
    DEFAULT_CATEGORY: str = "General"
    UPLOAD_CATEGORY: str = "Uploaded"

    # =========================================================================
    # Conversation Configuration
    # =========================================================================
    HISTORY_WINDOW: int = 10  # Trailing messages forwarded upstream
    TITLE_MAX_LENGTH: int = 50
    TITLE_ELLIPSIS: str = "..."

    # =========================================================================
    # Pagination
    # =========================================================================
    DEFAULT_PAGE_SIZE: int = 20
    HISTORY_PAGE_SIZE: int = 50

    if ENVIRONMENT not in VALID_ENVIRONMENTS:
        raise ValueError(
            f"Invalid environment: {ENVIRONMENT}. Must be one of {VALID_ENVIRONMENTS}"
        )
