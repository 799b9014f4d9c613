from xml.etree import ElementTree

from voice_receptionist.api.models import DispatchOutcome

CALLER = "+15551234567"
RECORDING_URL = "https://api.twilio.com/2010-04-01/Accounts/AC123/Recordings/RE123"


class FakeTwilioService:
    def __init__(self, audio=b"RIFF....WAVEfmt ", error=None):
        self.audio = audio
        self.error = error
        self.requested_urls = []

    async def fetch_recording(self, media_url):
        self.requested_urls.append(media_url)
        if self.error:
            raise self.error
        return self.audio


class FakeOpenAIService:
    def __init__(self, transcript="", reply="", transcribe_error=None, chat_error=None):
        self.transcript = transcript
        self.reply = reply
        self.transcribe_error = transcribe_error
        self.chat_error = chat_error
        self.chat_inputs = []

    async def transcribe_audio(self, audio_data):
        if self.transcribe_error:
            raise self.transcribe_error
        return self.transcript

    async def complete_chat(self, system_prompt, user_input):
        self.chat_inputs.append(user_input)
        if self.chat_error:
            raise self.chat_error
        return self.reply


class FakeDispatcher:
    def __init__(self, outcome=None):
        self.outcome = outcome or DispatchOutcome(success=True, status_code=200)
        self.bookings = []

    async def dispatch(self, booking):
        self.bookings.append(booking)
        return self.outcome




def parse_twiml(content):
    """Parse a TwiML document into an ElementTree root, asserting it is a <Response>."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    root = ElementTree.fromstring(content)
    assert root.tag == "Response"
    return root


def verbs(root):
    return [child.tag for child in root]
