from typing import Optional
import asyncio
import logging
import aiohttp

from voice_receptionist.config.settings import Settings, settings as default_settings
from voice_receptionist.core.errors import TranscriptionFailure

logger = logging.getLogger(__name__)


class TwilioService:
    """Downloads call recordings from Twilio."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    def _auth(self) -> Optional[aiohttp.BasicAuth]:
        if self.settings.has_twilio_credentials:
            return aiohttp.BasicAuth(self.settings.TWILIO_ACCOUNT_SID, self.settings.TWILIO_AUTH_TOKEN)
        return None

    async def fetch_recording(self, media_url: str) -> bytes:
        """GET the recording media. Any transport error or non-2xx status is a TranscriptionFailure."""
        timeout = aiohttp.ClientTimeout(total=self.settings.HTTP_TIMEOUT)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(media_url, auth=self._auth()) as response:
                    if response.status >= 400:
                        raise TranscriptionFailure(
                            f"Recording download returned HTTP {response.status} for {media_url}"
                        )
                    audio_data = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error downloading recording {media_url}: {str(e)}")
            raise TranscriptionFailure(f"Recording download failed: {str(e)}") from e

        if not audio_data:
            raise TranscriptionFailure(f"Recording at {media_url} is empty")

        logger.info(f"Downloaded {len(audio_data)} bytes from {media_url}")
        return audio_data
