from functools import lru_cache
from typing import Optional
import logging
from fastapi import BackgroundTasks, Depends, Form, Response

from voice_receptionist.config.settings import settings
from voice_receptionist.core.assistant import IntentClassifier
from voice_receptionist.core.call_turn import CallTurnController
from voice_receptionist.core.transcriber import SpeechTranscriber
from voice_receptionist.core.twilio_handler import TwilioHandler
from voice_receptionist.services.booking_service import BookingDispatcher
from voice_receptionist.services.openai_service import OpenAIService
from voice_receptionist.services.twilio_service import TwilioService
from voice_receptionist.utils.helpers import mask_phone_number

logger = logging.getLogger("webhook")

TWIML_MEDIA_TYPE = "application/xml"

# Last resort when even rendering fails; Twilio must always get a document back.
FALLBACK_TWIML = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    "<Response><Say>We're sorry, but there was an error processing your call.</Say></Response>"
)


@lru_cache()
def get_openai_service() -> OpenAIService:
    return OpenAIService(settings)


@lru_cache()
def get_twilio_handler() -> TwilioHandler:
    return TwilioHandler(settings)


@lru_cache()
def get_call_turn_controller() -> CallTurnController:
    openai_service = get_openai_service()
    transcriber = SpeechTranscriber(TwilioService(settings), openai_service, settings)
    return CallTurnController(transcriber, IntentClassifier(openai_service), settings)


@lru_cache()
def get_booking_dispatcher() -> BookingDispatcher:
    return BookingDispatcher(settings)


def _twiml(content: str) -> Response:
    return Response(content=content, media_type=TWIML_MEDIA_TYPE)


async def handle_voice_entry(twilio_handler: TwilioHandler = Depends(get_twilio_handler)):
    """Incoming call, or a redirect back for the next turn: greet and record"""
    try:
        return _twiml(twilio_handler.greet_and_record())
    except Exception as e:
        logger.error(f"Error building greeting TwiML: {str(e)}")
        return _twiml(FALLBACK_TWIML)


async def handle_turn_callback(
    background_tasks: BackgroundTasks,
    RecordingUrl: Optional[str] = Form(None),
    From: Optional[str] = Form(None),
    CallSid: Optional[str] = Form(None),
    controller: CallTurnController = Depends(get_call_turn_controller),
    dispatcher: BookingDispatcher = Depends(get_booking_dispatcher),
    twilio_handler: TwilioHandler = Depends(get_twilio_handler),
):
    """Twilio finished a recording: run the turn and answer with the next instruction"""
    logger.info(f"Turn callback for call {CallSid or 'unknown'} from {mask_phone_number(From)}")
    try:
        turn = await controller.handle_turn(RecordingUrl, From)

        booking = turn.booking
        if booking is not None:
            # Runs after the response is sent; the caller never waits on the webhook.
            background_tasks.add_task(dispatcher.dispatch, booking)

        twiml = twilio_handler.render(turn.decision)
        logger.debug(f"Turn TwiML: {twiml}")
        return _twiml(twiml)
    except Exception:
        logger.exception(f"Critical error in turn callback for call {CallSid or 'unknown'}")
        try:
            return _twiml(twilio_handler.apologize())
        except Exception:
            return _twiml(FALLBACK_TWIML)


async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


async def service_info():
    return {
        "message": "Voice Receptionist API",
        "documentation": "/docs",
        "health": "/health",
    }
