from typing import Dict, List, Optional
import logging
from openai import AsyncOpenAI, OpenAIError

from voice_receptionist.config.settings import Settings, settings as default_settings
from voice_receptionist.core.errors import ClassificationFailure, TranscriptionFailure
from voice_receptionist.utils.audio import audio_upload_file

logger = logging.getLogger(__name__)


class OpenAIService:
    """Speech-to-text and chat completion calls against the OpenAI API.

    A single instance is shared by all requests. The underlying AsyncOpenAI
    client keeps no per-request state, so concurrent turns can use it freely.
    The client is built on first use so a missing key fails the turn instead
    of the server.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[AsyncOpenAI] = None):
        self.settings = settings or default_settings
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.settings.OPENAI_API_KEY:
                raise ValueError("OPENAI_API_KEY not set in environment variables")
            # One attempt per turn; the timeout turns a hung call into a failure.
            self._client = AsyncOpenAI(
                api_key=self.settings.OPENAI_API_KEY,
                timeout=self.settings.OPENAI_TIMEOUT,
                max_retries=0,
            )
        return self._client

    async def transcribe_audio(self, audio_data: bytes) -> str:
        """Convert recorded audio to text"""
        try:
            upload = audio_upload_file(audio_data, self.settings.RECORDING_FILE_SUFFIX)
            logger.debug(f"Sending {len(audio_data)} bytes to {self.settings.TRANSCRIPTION_MODEL}")
            transcript = await self.client.audio.transcriptions.create(
                model=self.settings.TRANSCRIPTION_MODEL,
                file=upload,
            )
        except (OpenAIError, ValueError) as e:
            logger.error(f"Speech-to-text request failed: {str(e)}")
            raise TranscriptionFailure(f"Speech-to-text request failed: {str(e)}") from e

        return (transcript.text or "").strip()

    async def complete_chat(self, system_prompt: str, user_input: str) -> str:
        """Run one chat completion and return the raw reply text"""
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_input},
        ]
        try:
            logger.debug(f"Sending request to {self.settings.CHAT_MODEL}")
            response = await self.client.chat.completions.create(
                model=self.settings.CHAT_MODEL,
                messages=messages,
            )
        except (OpenAIError, ValueError) as e:
            logger.error(f"Chat completion request failed: {str(e)}")
            raise ClassificationFailure(f"Chat completion request failed: {str(e)}") from e

        if not response.choices:
            raise ClassificationFailure("Chat completion returned no choices")
        content = response.choices[0].message.content
        if not content or not content.strip():
            raise ClassificationFailure("Chat completion returned an empty reply")
        return content.strip()
