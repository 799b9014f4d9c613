"""Intent classification for a single caller utterance.

The model is told to answer with a bare JSON booking object when the caller
wants an appointment and with plain prose otherwise. Its output is then decoded
in two stages: JSON parse, then validation against the booking schema. Anything
that fails either stage is treated as conversation and spoken back unchanged.
"""
from typing import Optional
import json
import logging
from pydantic import ValidationError

from voice_receptionist.api.models import BookingRequest, ClassificationResult, ConversationReply
from voice_receptionist.services.openai_service import OpenAIService

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """
You are an AI receptionist answering the phone for a small business. Be friendly, concise, and helpful.
Your reply is read aloud to the caller, so keep it to one or two short sentences.

If, and only if, the caller wants to book or schedule an appointment, reply with ONLY a JSON object
and nothing else - no prose, no code fences:
{"intent": "booking", "name": "<caller name>", "phone": "<phone number>", "service": "<requested service>", "date": "<date>", "time": "<time>"}

Rules for the booking object:
- All six fields are strings.
- Use an empty string for "phone" if the caller did not say a number.
- Use the date and time exactly as you understood them from the caller.

For every other request, reply with plain conversational text and never include JSON.
"""


def interpret_reply(raw_reply: str, caller_number: Optional[str] = None) -> ClassificationResult:
    """Decide whether the model's raw output is a booking or conversational text.

    :param raw_reply: Text returned by the chat completion.
    :param caller_number: Twilio ``From`` value, used when the booking has no phone.
    :return: BookingRequest for a well-formed booking, ConversationReply otherwise.
    """
    text = raw_reply.strip()
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return ConversationReply(reply_text=text)

    if not isinstance(parsed, dict) or parsed.get("intent") != "booking":
        logger.debug("Model returned JSON without a booking intent, treating it as conversation")
        return ConversationReply(reply_text=text)

    if not parsed.get("phone") and caller_number:
        parsed["phone"] = caller_number
    elif parsed.get("phone") is None:
        parsed["phone"] = ""

    try:
        return BookingRequest.model_validate(parsed)
    except ValidationError as e:
        logger.warning(f"Booking JSON failed validation, treating it as conversation: {e.error_count()} error(s)")
        return ConversationReply(reply_text=text)


class IntentClassifier:
    """Sends the caller's words to the chat model under the booking prompt."""

    def __init__(self, openai_service: OpenAIService, system_prompt: str = SYSTEM_PROMPT):
        self.openai_service = openai_service
        self.system_prompt = system_prompt

    async def classify(self, transcript: str) -> str:
        """Return the model's raw reply. Raises ClassificationFailure."""
        return await self.openai_service.complete_chat(self.system_prompt, transcript)

    async def classify_and_interpret(self, transcript: str, caller_number: Optional[str] = None) -> ClassificationResult:
        raw_reply = await self.classify(transcript)
        return interpret_reply(raw_reply, caller_number)
