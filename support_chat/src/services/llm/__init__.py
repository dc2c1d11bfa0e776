"""LLM service package."""

from .llm_service import BaseLLMService, CompletionError, OpenRouterLLMService

__all__ = [
    "BaseLLMService",
    "CompletionError",
    "OpenRouterLLMService",
]
