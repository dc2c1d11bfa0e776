"""
Backend package for the customer-support chat service.

This package contains the support chat backend components including:
- Flask application and API routes
- FAQ ingestion, keyword extraction and relevance matching
- Conversation context assembly and completion API integration
- JSON-backed storage for FAQs and conversations
- Configuration and prompt modules
"""

import logging
import os

# Configure logging with clickable paths before anything else imports logging
logging.basicConfig(
    level=logging.INFO, format="%(levelname)s: %(pathname)s:%(lineno)d %(message)s"
)


class ClickablePathFilter(logging.Filter):
    """Filter to make file paths clickable in the terminal."""

    def filter(self, record: logging.LogRecord) -> bool:
        if hasattr(record, "pathname"):
            workspace_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
            try:
                record.pathname = os.path.relpath(record.pathname, workspace_root)
            except ValueError:
                # Path lives on another drive; leave it absolute
                pass
        return True


logging.getLogger().addFilter(ClickablePathFilter())
