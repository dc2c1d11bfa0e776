"""Service module for interacting with chat-completion APIs.

This module provides a high-level interface for the completion collaborator:
- BaseLLMService: the interface the chat flow depends on
- OpenRouterLLMService: OpenRouter's OpenAI-compatible API (via OpenAI SDK)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests
from openai import APIError, APIStatusError, OpenAI
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from support_chat.conf.config import Config
from support_chat.src.data_classes import ChatMessage, MessageRole

logger = logging.getLogger(__name__)


class CompletionError(RuntimeError):
    """Raised when the completion API fails or returns an unusable response.

    Attributes:
        status_code: HTTP status of the failed call, if one was received
        body: Raw upstream error body, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class BaseLLMService(ABC):
    """Base class for completion services.

    This abstract class defines the interface that all completion services must implement.
    """

    model_name: str

    @abstractmethod
    def complete(
        self,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        model: Optional[str] = None,
    ) -> ChatMessage:
        """Generate the assistant reply to a conversation.

        Args:
            messages: Ordered role/content messages
            max_tokens: Maximum number of tokens to generate. If None, uses service default
            temperature: Sampling temperature. If None, uses service default
            model: Model identifier. If None, uses service default

        Returns:
            ChatMessage: The assistant reply

        Raises:
            CompletionError: If the API call fails or the response is malformed
        """

    @abstractmethod
    def list_models(self) -> List[Dict[str, Any]]:
        """List the models this service can be pointed at.

        Raises:
            CompletionError: If the model listing cannot be fetched
        """


class OpenRouterLLMService(BaseLLMService):
    """Service for interacting with OpenRouter's chat-completion API."""

    def __init__(
        self,
        api_key: Optional[str] = Config.OPENROUTER_API_KEY,
        base_url: str = Config.OPENROUTER_BASE_URL,
        model_name: str = Config.LLM_MODEL_NAME,
        max_tokens: int = Config.LLM_MAX_TOKENS,
        temperature: float = Config.LLM_TEMPERATURE,
        referer: str = Config.FRONTEND_URL,
        app_title: str = Config.APP_TITLE,
        timeout: float = Config.LLM_REQUEST_TIMEOUT,
        max_retries: int = Config.LLM_MAX_RETRIES,
    ) -> None:
        """Initialize the OpenRouter LLM service."""
        if not api_key:
            raise ValueError(
                "OpenRouter API key not found. Please set the OPENROUTER_API_KEY environment variable."
            )
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model_name = model_name
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout

        # OpenRouter uses these headers for app attribution
        self.client = OpenAI(
            api_key=api_key,
            base_url=self.base_url,
            timeout=timeout,
            max_retries=max_retries,
            default_headers={"HTTP-Referer": referer, "X-Title": app_title},
        )

        # Plain HTTP session for endpoints the SDK does not model
        self.session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=1.0,
            status_forcelist=[500, 502, 503, 504],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        logger.info(f"Initialized OpenRouter LLM service with model: {model_name}")

    def complete(
        self,
        messages: List[Dict[str, str]],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        model: Optional[str] = None,
    ) -> ChatMessage:
        """Generate the assistant reply using OpenRouter's API.

        Args:
            messages: Ordered role/content messages
            max_tokens: Maximum number of tokens to generate. If None, uses service default
            temperature: Sampling temperature. If None, uses service default
            model: Model identifier. If None, uses service default

        Returns:
            ChatMessage: The assistant reply

        Raises:
            CompletionError: If the API call fails or the response is malformed
        """
        try:
            response = self.client.chat.completions.create(
                model=model or self.model_name,
                messages=messages,  # type: ignore[arg-type]
                max_tokens=max_tokens or self.max_tokens,
                temperature=self.temperature if temperature is None else temperature,
                stream=False,
            )
        except APIStatusError as e:
            logger.error(f"OpenRouter API error: {e.status_code} {e.body}")
            raise CompletionError(
                f"OpenRouter API error: {e.status_code}",
                status_code=e.status_code,
                body=e.body,
            ) from e
        except APIError as e:
            logger.error(f"OpenRouter API request failed: {str(e)}")
            raise CompletionError(f"OpenRouter API request failed: {str(e)}") from e

        if (
            not response.choices
            or response.choices[0].message is None
            or response.choices[0].message.content is None
        ):
            raise CompletionError("Invalid response format from OpenRouter API")

        return ChatMessage(
            role=MessageRole.ASSISTANT, content=response.choices[0].message.content
        )

    def list_models(self) -> List[Dict[str, Any]]:
        """List the free models available on OpenRouter.

        A model is free when both its prompt and completion pricing are zero.

        Returns:
            Model summaries with id, name, description and context_length

        Raises:
            CompletionError: If the model listing cannot be fetched
        """
        try:
            response = self.session.get(
                f"{self.base_url}/models",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Could not reach OpenRouter models endpoint: {str(e)}")
            raise CompletionError(f"Failed to fetch models: {str(e)}") from e

        if response.status_code != 200:
            raise CompletionError(
                f"Failed to fetch models: {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        models = response.json().get("data", [])
        return [
            {
                "id": model.get("id"),
                "name": model.get("name"),
                "description": model.get("description"),
                "context_length": model.get("context_length"),
            }
            for model in models
            if _is_free(model.get("pricing"))
        ]


def _is_free(pricing: Optional[Dict[str, Any]]) -> bool:
    if not pricing:
        return False
    return pricing.get("prompt") in (0, "0") and pricing.get("completion") in (0, "0")
