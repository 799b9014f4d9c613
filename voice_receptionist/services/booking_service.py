from typing import Optional
import asyncio
import logging
import aiohttp

from voice_receptionist.api.models import BookingRequest, DispatchOutcome
from voice_receptionist.config.settings import Settings, settings as default_settings
from voice_receptionist.core.errors import DispatchFailure
from voice_receptionist.utils.helpers import mask_phone_number

logger = logging.getLogger(__name__)


class BookingDispatcher:
    """Forwards confirmed bookings to the automation webhook.

    Runs outside the caller-facing path: the caller has already heard the
    confirmation by the time this executes, so failures are only logged.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    async def _post(self, url: str, payload: dict) -> int:
        timeout = aiohttp.ClientTimeout(total=self.settings.HTTP_TIMEOUT)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=payload) as response:
                    if response.status >= 400:
                        raise DispatchFailure(f"Automation webhook returned HTTP {response.status}")
                    return response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DispatchFailure(f"Automation webhook unreachable: {str(e) or type(e).__name__}") from e

    async def dispatch(self, booking: BookingRequest) -> DispatchOutcome:
        """POST the booking once. Never raises."""
        url = self.settings.AUTOMATION_WEBHOOK_URL
        if not url:
            logger.warning(f"AUTOMATION_WEBHOOK_URL not set, booking for {booking.name} not forwarded")
            return DispatchOutcome(success=False, error="Automation webhook URL not configured")

        payload = booking.model_dump()
        try:
            status_code = await self._post(url, payload)
        except DispatchFailure as e:
            logger.error(f"Booking dispatch failed for {booking.name} "
                         f"({mask_phone_number(booking.phone)}): {str(e)}")
            return DispatchOutcome(success=False, error=str(e))
        except Exception as e:
            logger.exception(f"Unexpected error dispatching booking for {booking.name}")
            return DispatchOutcome(success=False, error=str(e))

        logger.info(f"📅 Booking for {booking.name} ({booking.service} on {booking.date} at {booking.time}) "
                    f"forwarded, webhook answered {status_code}")
        return DispatchOutcome(success=True, status_code=status_code)
