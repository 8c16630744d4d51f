"""
Configuration for chunkwise.

Values come from environment variables, optionally loaded from a .env file
in the project root.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent

load_dotenv(PROJECT_ROOT / ".env")

# Gemini (primary content source)
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_TEMPERATURE = float(os.getenv("GEMINI_TEMPERATURE", "0.7"))

# Expiry of the AI call counts as a primary failure
CONTENT_SOURCE_TIMEOUT_SECONDS = float(os.getenv("CONTENT_SOURCE_TIMEOUT_SECONDS", "20"))

DEFAULT_CHUNK_COUNT = int(os.getenv("DEFAULT_CHUNK_COUNT", "3"))
DEFAULT_NATIVE_LANGUAGE = os.getenv("DEFAULT_NATIVE_LANGUAGE", "en")
