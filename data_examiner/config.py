"""
Global Configuration Settings

Centralized configuration for the Data Examiner service.
Controls the analysis collaborator, conversation limits, upload handling
and other runtime settings.
"""

import os
import tempfile
import logging

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"


class AppConfig:
    """Global application configuration."""

    def __init__(self):
        # Analysis collaborator (OpenAI-compatible chat completions)
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY") or os.getenv("GROQ_API_KEY")
        self.OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL)
        self.OPENAI_MODEL = os.getenv("OPENAI_MODEL", DEFAULT_MODEL)
        self.ANALYSIS_TEMPERATURE = self._get_float_env("ANALYSIS_TEMPERATURE", 0.7)
        self.ANALYSIS_MAX_TOKENS = self._get_int_env("ANALYSIS_MAX_TOKENS", 4000)
        self.ANALYSIS_TIMEOUT = self._get_float_env("ANALYSIS_TIMEOUT", 30.0)
        self.ANALYSIS_MAX_RETRIES = self._get_int_env("ANALYSIS_MAX_RETRIES", 1)

        # Payload limits
        self.SAMPLE_ROWS = self._get_int_env("SAMPLE_ROWS", 50)

        # Conversation Configuration
        self.MAX_CONVERSATION_TURNS = self._get_int_env("MAX_CONVERSATION_TURNS", 20)
        self.MAX_SESSIONS = self._get_int_env("MAX_SESSIONS", 100)
        self.SESSION_SWEEP_INTERVAL = self._get_float_env("SESSION_SWEEP_INTERVAL", 30 * 60)

        # Upload Configuration
        self.MAX_UPLOAD_MB = self._get_int_env("MAX_UPLOAD_MB", 50)
        self.UPLOAD_DIR = os.getenv("UPLOAD_DIR") or tempfile.gettempdir()

        # HTTP Configuration
        self.RATE_LIMIT = os.getenv("RATE_LIMIT", "30/minute")
        self.ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

        # Logging Configuration
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

        # Development/Debug Configuration
        self.DEBUG_MODE = self._get_bool_env("DEBUG_MODE", default=False)

        self._log_configuration()

    def _get_bool_env(self, key: str, default: bool = False) -> bool:
        """Get boolean value from environment variable."""
        value = os.getenv(key, "").lower()
        if value in ("true", "1", "yes", "on"):
            return True
        elif value in ("false", "0", "no", "off"):
            return False
        else:
            return default

    def _get_int_env(self, key: str, default: int) -> int:
        value = os.getenv(key)
        if not value:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Invalid integer for {key}: {value!r}, using {default}")
            return default

    def _get_float_env(self, key: str, default: float) -> float:
        value = os.getenv(key)
        if not value:
            return default
        try:
            return float(value)
        except ValueError:
            logger.warning(f"Invalid number for {key}: {value!r}, using {default}")
            return default

    def _log_configuration(self):
        """Log the current configuration settings."""
        logger.info("🔧 Application Configuration:")
        logger.info(f"   Analysis Model: {self.OPENAI_MODEL}")
        logger.info(f"   Analysis Service: {'✅ CONFIGURED' if self.is_analysis_configured() else '❌ NOT CONFIGURED'}")
        logger.info(f"   Analysis Timeout: {self.ANALYSIS_TIMEOUT}s")
        logger.info(f"   Conversation Cap: {self.MAX_CONVERSATION_TURNS} turns, {self.MAX_SESSIONS} sessions")
        logger.info(f"   Debug Mode: {'✅ ENABLED' if self.DEBUG_MODE else '❌ DISABLED'}")
        logger.info(f"   Log Level: {self.LOG_LEVEL}")

    def is_analysis_configured(self) -> bool:
        """Check whether an API key for the analysis service is available."""
        return bool(self.OPENAI_API_KEY)

    def is_development_mode(self) -> bool:
        """Check if running in development mode."""
        return self.DEBUG_MODE or os.getenv("ENVIRONMENT", "").lower() in ("dev", "development", "local")

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_MB * 1024 * 1024

    def get_summary(self) -> dict:
        """Get a summary of current configuration."""
        return {
            "analysis_configured": self.is_analysis_configured(),
            "analysis_model": self.OPENAI_MODEL,
            "analysis_timeout": self.ANALYSIS_TIMEOUT,
            "sample_rows": self.SAMPLE_ROWS,
            "max_conversation_turns": self.MAX_CONVERSATION_TURNS,
            "max_sessions": self.MAX_SESSIONS,
            "max_upload_mb": self.MAX_UPLOAD_MB,
            "debug_mode": self.DEBUG_MODE,
            "log_level": self.LOG_LEVEL,
            "development_mode": self.is_development_mode()
        }


# Global configuration instance
config = AppConfig()


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    return config


# Environment variable documentation
ENV_VARS_HELP = """
Environment Variables for Configuration:

🤖 Analysis service:
   OPENAI_API_KEY=...                 # API key (GROQ_API_KEY also accepted)
   OPENAI_BASE_URL=https://...        # OpenAI-compatible endpoint (default: Groq)
   OPENAI_MODEL=llama-3.3-70b-versatile
   ANALYSIS_TIMEOUT=30                # Seconds before falling back to local statistics

💬 Conversations:
   MAX_CONVERSATION_TURNS=20          # Turns kept per conversation
   MAX_SESSIONS=100                   # Sessions kept before the sweep evicts half
   SESSION_SWEEP_INTERVAL=1800        # Seconds between sweeps

📁 Uploads:
   MAX_UPLOAD_MB=50
   UPLOAD_DIR=/tmp

🐛 Development:
   DEBUG_MODE=true|false              # Enable debug mode (default: false)
   LOG_LEVEL=INFO|DEBUG|WARNING       # Logging level (default: INFO)
"""

if __name__ == "__main__":
    print("🔧 Data Examiner Configuration")
    print("=" * 50)
    for key, value in config.get_summary().items():
        print(f"{key}: {value}")
    print("\n" + ENV_VARS_HELP)
