import pytest
from fastapi.testclient import TestClient

from fakes import FakeDispatcher, FakeOpenAIService, FakeTwilioService
from main import app
from voice_receptionist.api.endpoints import (
    get_booking_dispatcher,
    get_call_turn_controller,
    get_twilio_handler,
)
from voice_receptionist.config.settings import Settings
from voice_receptionist.core.assistant import IntentClassifier
from voice_receptionist.core.call_turn import CallTurnController
from voice_receptionist.core.transcriber import SpeechTranscriber
from voice_receptionist.core.twilio_handler import TwilioHandler


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("AUTOMATION_WEBHOOK_URL", "https://hooks.example.com/booking")
    monkeypatch.delenv("TWILIO_ACCOUNT_SID", raising=False)
    monkeypatch.delenv("TWILIO_AUTH_TOKEN", raising=False)
    monkeypatch.delenv("TTS_VOICE", raising=False)
    monkeypatch.delenv("RECORDING_FILE_SUFFIX", raising=False)
    return Settings()


@pytest.fixture
def build_controller(settings):
    def _build(transcript="", reply="", fetch_error=None, transcribe_error=None, chat_error=None):
        twilio_service = FakeTwilioService(error=fetch_error)
        openai_service = FakeOpenAIService(transcript=transcript, reply=reply,
                                           transcribe_error=transcribe_error, chat_error=chat_error)
        transcriber = SpeechTranscriber(twilio_service, openai_service, settings)
        controller = CallTurnController(transcriber, IntentClassifier(openai_service), settings)
        return controller, twilio_service, openai_service
    return _build


@pytest.fixture
def dispatcher():
    return FakeDispatcher()


@pytest.fixture
def client_for(settings, dispatcher):
    """TestClient wired to a controller built from the given fakes."""
    def _client(controller):
        app.dependency_overrides[get_call_turn_controller] = lambda: controller
        app.dependency_overrides[get_booking_dispatcher] = lambda: dispatcher
        app.dependency_overrides[get_twilio_handler] = lambda: TwilioHandler(settings)
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()
