from typing import Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, field_validator


class BookingRequest(BaseModel):
    """Appointment extracted from the caller's utterance, forwarded as-is to the automation webhook."""
    # Extra keys from the model are kept so the webhook receives the object as parsed
    model_config = ConfigDict(extra="allow")

    intent: Literal["booking"]
    name: str
    phone: str = ""
    service: str
    date: str  # as stated by the caller, not validated against a calendar
    time: str

    @field_validator("phone", mode="before")
    @classmethod
    def phone_digits_as_text(cls, value):
        # Models often emit the number as a JSON integer
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class ConversationReply(BaseModel):
    """Anything the model said that is not a booking. Spoken back verbatim."""
    reply_text: str


ClassificationResult = Union[BookingRequest, ConversationReply]


class DispatchOutcome(BaseModel):
    success: bool
    status_code: Optional[int] = None
    error: Optional[str] = None
