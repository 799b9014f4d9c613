class VoiceReceptionistError(Exception):
    """Base class for failures raised while handling a call turn."""


class TranscriptionFailure(VoiceReceptionistError):
    """The recording could not be downloaded or converted to text."""


class ClassificationFailure(VoiceReceptionistError):
    """The chat completion call failed or returned nothing usable."""


class DispatchFailure(VoiceReceptionistError):
    """The automation webhook rejected or never received the booking."""
