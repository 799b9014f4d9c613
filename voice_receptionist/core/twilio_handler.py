from typing import Optional
import logging
from twilio.twiml.voice_response import VoiceResponse

from voice_receptionist.config.settings import (
    Settings,
    TURN_CALLBACK_PATH,
    VOICE_ENTRY_PATH,
    settings as default_settings,
)
from voice_receptionist.core.call_turn import TurnAction, TurnDecision

logger = logging.getLogger(__name__)


class TwilioHandler:
    """Builds the TwiML documents returned to Twilio. Every method returns a complete document."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    def _say(self, response: VoiceResponse, message: str):
        if self.settings.TTS_VOICE:
            response.say(message, voice=self.settings.TTS_VOICE)
        else:
            response.say(message)

    def greet_and_record(self, greeting: Optional[str] = None) -> str:
        """Speak the opening prompt and record the caller's answer."""
        response = VoiceResponse()
        self._say(response, greeting or self.settings.GREETING_MESSAGE)
        response.record(
            action=TURN_CALLBACK_PATH,
            method="POST",
            timeout=self.settings.RECORD_TIMEOUT,
            max_length=self.settings.RECORD_MAX_LENGTH,
            play_beep=True,
            transcribe=False,
        )
        return str(response)

    def speak_and_loop(self, message: str, redirect_to: str = VOICE_ENTRY_PATH) -> str:
        """Speak the reply, then send Twilio back to the entry point for another turn."""
        response = VoiceResponse()
        self._say(response, message)
        response.redirect(redirect_to, method="POST")
        return str(response)

    def speak_and_end(self, message: str) -> str:
        response = VoiceResponse()
        self._say(response, message)
        response.hangup()
        return str(response)

    def apologize(self, message: Optional[str] = None, redirect_to: Optional[str] = VOICE_ENTRY_PATH) -> str:
        """Speak the apology. With a redirect target the caller gets another try instead of a hang-up."""
        response = VoiceResponse()
        self._say(response, message or self.settings.APOLOGY_MESSAGE)
        if redirect_to:
            response.redirect(redirect_to, method="POST")
        return str(response)

    def render(self, decision: TurnDecision) -> str:
        if decision.action == TurnAction.CONTINUE:
            return self.speak_and_loop(decision.message, decision.redirect_to or VOICE_ENTRY_PATH)
        if decision.action == TurnAction.TERMINATE:
            return self.speak_and_end(decision.message)
        return self.apologize(decision.message, decision.redirect_to)
