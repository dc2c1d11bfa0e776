"""Configuration and prompt definitions for the support chat backend."""

from .config import Config

__all__ = ["Config"]
