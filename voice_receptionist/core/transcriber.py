import logging

from voice_receptionist.config.settings import Settings
from voice_receptionist.core.errors import TranscriptionFailure
from voice_receptionist.services.openai_service import OpenAIService
from voice_receptionist.services.twilio_service import TwilioService
from voice_receptionist.utils.helpers import resolve_recording_url

logger = logging.getLogger(__name__)


class SpeechTranscriber:
    """Turns a Twilio recording reference into text: resolve, download, speech-to-text."""

    def __init__(self, twilio_service: TwilioService, openai_service: OpenAIService, settings: Settings):
        self.twilio_service = twilio_service
        self.openai_service = openai_service
        self.settings = settings

    async def transcribe(self, recording_url: str) -> str:
        try:
            media_url = resolve_recording_url(recording_url, self.settings.RECORDING_FILE_SUFFIX)
        except ValueError as e:
            raise TranscriptionFailure(str(e)) from e

        audio_data = await self.twilio_service.fetch_recording(media_url)
        transcript = await self.openai_service.transcribe_audio(audio_data)
        logger.debug(f"Transcribed {len(audio_data)} bytes into {len(transcript)} characters")
        return transcript
