"""
Configuration management for the Classroom Hub comment bank.
"""
import json
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

from .services.tags import DEFAULT_LEVEL_EMOJI

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Base paths
BASE_DIR = Path(__file__).parent.parent
PACKAGE_DIR = Path(__file__).parent
HOME_DIR = Path.home()

# Storage
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{HOME_DIR / '.classroom_hub.db'}")
SCHEMA_SHAPE = os.getenv("COMMENT_SCHEMA_SHAPE", "join")
SETTINGS_FILE = os.getenv("CLASSROOM_HUB_SETTINGS_FILE", str(HOME_DIR / ".classroom_hub_settings.json"))

# Display
LEVEL_EMOJI_JSON = os.getenv("LEVEL_EMOJI_JSON", "")

# API Configuration
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")
AI_MODEL = os.getenv("AI_MODEL", os.getenv("OPENAI_MODEL", "gpt-4o-mini"))

# Server configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
DEBUG = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")


def load_level_emoji(raw):
    """Parse a LEVEL_EMOJI_JSON value; fall back to the default mapping on any problem."""
    if not raw:
        return dict(DEFAULT_LEVEL_EMOJI)
    try:
        parsed = json.loads(raw)
    except ValueError as e:
        logger.warning("Ignoring invalid LEVEL_EMOJI_JSON: %s", e)
        return dict(DEFAULT_LEVEL_EMOJI)
    if not isinstance(parsed, dict):
        logger.warning("Ignoring LEVEL_EMOJI_JSON: expected a JSON object")
        return dict(DEFAULT_LEVEL_EMOJI)
    return {str(k): str(v) for k, v in parsed.items()}


class Config:
    """Application configuration class."""

    def __init__(self, **overrides):
        self.database_url = DATABASE_URL
        self.schema_shape = SCHEMA_SHAPE
        self.settings_file = SETTINGS_FILE
        self.openai_api_key = OPENAI_API_KEY
        self.anthropic_api_key = ANTHROPIC_API_KEY
        self.ai_model = AI_MODEL
        self.level_emoji_json = LEVEL_EMOJI_JSON
        self.update(overrides)
        # Parsed once; not re-read per request
        self.level_emoji = load_level_emoji(self.level_emoji_json)

    def to_dict(self):
        return {
            "database_url": self.database_url,
            "schema_shape": self.schema_shape,
            "settings_file": self.settings_file,
            "ai_model": self.ai_model,
            "ai_configured": bool(self.openai_api_key or self.anthropic_api_key),
            "level_emoji": self.level_emoji,
        }

    def update(self, data: dict):
        for key, value in data.items():
            if hasattr(self, key):
                setattr(self, key, value)


# Global config instance
config = Config()
