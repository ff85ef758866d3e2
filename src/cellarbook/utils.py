"""
Utility functions for Cellarbook.

Input sanitization and Supabase response helpers. Importing it configures logging.
"""

import logging
import re
import unicodedata
from typing import Any, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# =======================
# INPUT SANITIZATION
# =======================

def sanitize_text_input(text: Optional[str], max_length: int = 5000) -> str:
    """
    Clean free-text form input (notes, food pairing, comments).

    Args:
        text: Raw user input
        max_length: Maximum allowed length

    Returns:
        Sanitized text, empty string for None
    """
    if not text:
        return ""

    text = text[:max_length]

    # Remove excessive newlines (keep max 2 consecutive)
    text = re.sub(r'\n{3,}', '\n\n', text)

    # Remove non-printable characters (except newlines, tabs)
    text = ''.join(char for char in text if char.isprintable() or char in '\n\t')

    return text.strip()


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Form fields send '' for unset; the database wants NULL."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def escape_like(value: str) -> str:
    """Escape LIKE/ILIKE metacharacters so a pattern matches literally."""
    return re.sub(r'([\\%_])', r'\\\1', value)


def sanitize_filename(name: str) -> str:
    """Sanitize a file name stem for use as a storage key."""
    # NFKD splits accented chars into base + combining mark, then drop marks
    normalized = unicodedata.normalize('NFKD', name)
    ascii_str = normalized.encode('ascii', 'ignore').decode('ascii')

    sanitized = re.sub(r'[^\w\s-]', '', ascii_str.lower())
    sanitized = re.sub(r'[-\s]+', '_', sanitized)
    return sanitized.strip('_')


# =======================
# SUPABASE RESPONSES
# =======================

def first_row(response) -> dict[str, Any]:
    """First row of a query response, or {} when nothing matched."""
    data = response.data or []
    return data[0] if data else {}
