"""
Cellarbook Configuration
Centralized settings for the application
"""

import os
from typing import Any, Optional

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

# Storage
IMAGE_BUCKET = "wine-images"
MAX_IMAGE_SIZE_MB = 5

# Paging / list limits
PRODUCER_PAGE_SIZE = 50
FRIEND_RATINGS_LIMIT = 20
USER_SEARCH_LIMIT = 10

# Cellar statistics
BOTTLE_VOLUME_LITERS = 0.75


def normalize_secret_string(raw_value: Any, secret_name: str) -> str:
    """Normalize and validate secret strings from Streamlit secrets or env."""
    if raw_value is None:
        raise ValueError(f"{secret_name} is missing")

    value = str(raw_value).strip()
    quote_pairs = [
        ('"', '"'),
        ("'", "'"),
        ("“", "”"),
        ("‘", "’"),
    ]
    for left_quote, right_quote in quote_pairs:
        if value.startswith(left_quote) and value.endswith(right_quote) and len(value) >= 2:
            value = value[1:-1].strip()
            break

    if not value:
        raise ValueError(f"{secret_name} is empty")
    return value


def get_setting(name: str, default: Optional[str] = None) -> Optional[str]:
    """Get a setting from Streamlit secrets, falling back to the environment."""
    try:
        return st.secrets[name]
    except (FileNotFoundError, KeyError, AttributeError):
        return os.getenv(name, default)


def get_required_setting(name: str) -> str:
    """Get a setting that must be present and non-empty."""
    return normalize_secret_string(get_setting(name), name)
