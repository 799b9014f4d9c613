import os
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

# Webhook paths Twilio is pointed at. The renderer uses them as Record/Redirect targets.
VOICE_ENTRY_PATH = "/voice-entry"
TURN_CALLBACK_PATH = "/turn-callback"

DEFAULT_GREETING = "Hello, thanks for calling. How can I help you today?"
DEFAULT_APOLOGY = "Sorry, I'm having trouble responding right now."


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


class Settings:
    """Environment-backed configuration, read once per instance."""

    def __init__(self):
        self.OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY")
        self.TWILIO_ACCOUNT_SID: Optional[str] = os.getenv("TWILIO_ACCOUNT_SID")
        self.TWILIO_AUTH_TOKEN: Optional[str] = os.getenv("TWILIO_AUTH_TOKEN")
        self.AUTOMATION_WEBHOOK_URL: Optional[str] = os.getenv("AUTOMATION_WEBHOOK_URL")

        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = _get_int("PORT", 10000)
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        self.TRANSCRIPTION_MODEL: str = os.getenv("TRANSCRIPTION_MODEL", "gpt-4o-mini-transcribe")
        self.CHAT_MODEL: str = os.getenv("CHAT_MODEL", "gpt-4.1-mini")
        self.RECORDING_FILE_SUFFIX: str = os.getenv("RECORDING_FILE_SUFFIX", ".wav")

        self.TTS_VOICE: str = os.getenv("TTS_VOICE", "alice")
        self.RECORD_TIMEOUT: int = _get_int("RECORD_TIMEOUT", 3)
        self.RECORD_MAX_LENGTH: int = _get_int("RECORD_MAX_LENGTH", 60)
        self.GREETING_MESSAGE: str = os.getenv("GREETING_MESSAGE", DEFAULT_GREETING)
        self.APOLOGY_MESSAGE: str = os.getenv("APOLOGY_MESSAGE", DEFAULT_APOLOGY)

        self.OPENAI_TIMEOUT: float = _get_float("OPENAI_TIMEOUT", 30.0)
        self.HTTP_TIMEOUT: float = _get_float("HTTP_TIMEOUT", 15.0)

    @property
    def has_twilio_credentials(self) -> bool:
        return bool(self.TWILIO_ACCOUNT_SID and self.TWILIO_AUTH_TOKEN)

    def validate_startup(self) -> List[str]:
        """Return configuration warnings. Nothing here stops the server from answering calls."""
        warnings = []
        if not self.OPENAI_API_KEY:
            warnings.append("OPENAI_API_KEY not set - every call turn will end in the apology prompt.")
        if not self.AUTOMATION_WEBHOOK_URL:
            warnings.append("AUTOMATION_WEBHOOK_URL not set - bookings will be confirmed but not forwarded.")
        if not self.has_twilio_credentials:
            warnings.append("TWILIO_ACCOUNT_SID/TWILIO_AUTH_TOKEN not set - recordings are fetched without auth.")
        return warnings


settings = Settings()
