"""Call Turn Controller.

One inbound ``/turn-callback`` webhook is one turn. The controller walks the
turn through

    AWAITING_TRANSCRIPT -> AWAITING_CLASSIFICATION -> BOOKING | CONVERSATION -> RESPONDED

and always ends in RESPONDED with a TurnDecision, whatever fails on the way.
No state survives the turn: continuing the conversation is expressed as a
CONTINUE decision whose redirect target brings Twilio back to the entry point.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

from voice_receptionist.api.models import BookingRequest, ClassificationResult
from voice_receptionist.config.settings import Settings, VOICE_ENTRY_PATH, settings as default_settings
from voice_receptionist.core.assistant import IntentClassifier
from voice_receptionist.core.errors import ClassificationFailure, TranscriptionFailure
from voice_receptionist.core.transcriber import SpeechTranscriber
from voice_receptionist.utils.helpers import mask_phone_number

logger = logging.getLogger(__name__)

NO_SPEECH_MESSAGE = "I didn't catch that. Could you please repeat?"


class TurnState(str, Enum):
    AWAITING_TRANSCRIPT = "awaiting_transcript"
    AWAITING_CLASSIFICATION = "awaiting_classification"
    BOOKING = "booking"
    CONVERSATION = "conversation"
    RESPONDED = "responded"


class TurnAction(str, Enum):
    CONTINUE = "continue"    # speak, then loop back for another turn
    TERMINATE = "terminate"  # speak, then hang up
    APOLOGIZE = "apologize"  # speak the apology; redirect_to decides whether the call goes on


@dataclass
class TurnDecision:
    action: TurnAction
    message: str
    redirect_to: Optional[str] = None


@dataclass
class CallTurn:
    recording_url: Optional[str]
    caller_number: Optional[str]
    state: TurnState = TurnState.AWAITING_TRANSCRIPT
    transcript: Optional[str] = None
    classification: Optional[ClassificationResult] = None
    decision: Optional[TurnDecision] = None

    @property
    def booking(self) -> Optional[BookingRequest]:
        if isinstance(self.classification, BookingRequest):
            return self.classification
        return None

    def transition(self, state: TurnState):
        logger.debug(f"Turn for {mask_phone_number(self.caller_number)}: {self.state.value} -> {state.value}")
        self.state = state


def booking_confirmation(booking: BookingRequest) -> str:
    return (f"Thanks {booking.name}. Your {booking.service} appointment is booked "
            f"for {booking.date} at {booking.time}. Goodbye!")


class CallTurnController:
    """Runs one call turn: transcribe, classify, decide.

    Dispatching a detected booking is left to the caller of ``handle_turn``,
    which reads it from ``CallTurn.booking`` and hands it to a background task.
    """

    def __init__(self, transcriber: SpeechTranscriber, classifier: IntentClassifier,
                 settings: Optional[Settings] = None, entry_path: str = VOICE_ENTRY_PATH):
        self.transcriber = transcriber
        self.classifier = classifier
        self.settings = settings or default_settings
        self.entry_path = entry_path

    def _respond(self, turn: CallTurn, decision: TurnDecision) -> CallTurn:
        turn.decision = decision
        turn.transition(TurnState.RESPONDED)
        return turn

    def _apology(self) -> TurnDecision:
        return TurnDecision(TurnAction.APOLOGIZE, self.settings.APOLOGY_MESSAGE, redirect_to=self.entry_path)

    async def handle_turn(self, recording_url: Optional[str], caller_number: Optional[str]) -> CallTurn:
        """Drive a turn to RESPONDED. Never raises."""
        turn = CallTurn(recording_url=recording_url, caller_number=caller_number)
        try:
            return await self._run(turn)
        except TranscriptionFailure as e:
            logger.error(f"Transcription failed for {mask_phone_number(caller_number)}: {str(e)}")
        except ClassificationFailure as e:
            logger.error(f"Classification failed for {mask_phone_number(caller_number)}: {str(e)}")
        except Exception:
            logger.exception(f"Unexpected error handling turn for {mask_phone_number(caller_number)}")
        # A booking must not be dispatched from a turn that ended in an apology
        turn.classification = None
        return self._respond(turn, self._apology())

    async def _run(self, turn: CallTurn) -> CallTurn:
        if not turn.recording_url:
            raise TranscriptionFailure("Webhook carried no RecordingUrl")

        turn.transcript = await self.transcriber.transcribe(turn.recording_url)
        if not turn.transcript:
            logger.info(f"No speech detected for {mask_phone_number(turn.caller_number)}")
            return self._respond(turn, TurnDecision(TurnAction.CONTINUE, NO_SPEECH_MESSAGE,
                                                    redirect_to=self.entry_path))
        logger.info(f"🗣️  User: {turn.transcript}")

        turn.transition(TurnState.AWAITING_CLASSIFICATION)
        turn.classification = await self.classifier.classify_and_interpret(turn.transcript, turn.caller_number)

        booking = turn.booking
        if booking is not None:
            turn.transition(TurnState.BOOKING)
            logger.info(f"Booking intent detected: {booking.service} on {booking.date} at {booking.time} "
                        f"for {booking.name} ({mask_phone_number(booking.phone)})")
            return self._respond(turn, TurnDecision(TurnAction.TERMINATE, booking_confirmation(booking)))

        turn.transition(TurnState.CONVERSATION)
        reply_text = turn.classification.reply_text
        logger.info(f"🤖  Bot: {reply_text}")
        return self._respond(turn, TurnDecision(TurnAction.CONTINUE, reply_text, redirect_to=self.entry_path))
