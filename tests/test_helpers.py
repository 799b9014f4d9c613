import pytest

from voice_receptionist.config.settings import Settings
from voice_receptionist.utils.audio import audio_upload_file
from voice_receptionist.utils.helpers import mask_phone_number, resolve_recording_url


def test_resolve_recording_url_appends_suffix():
    url = "https://api.twilio.com/Recordings/RE123"
    assert resolve_recording_url(url) == url + ".wav"
    assert resolve_recording_url(url, ".mp3") == url + ".mp3"


def test_resolve_recording_url_keeps_existing_suffix():
    url = "https://api.twilio.com/Recordings/RE123.wav"
    assert resolve_recording_url(url) == url


def test_resolve_recording_url_rejects_blank():
    with pytest.raises(ValueError):
        resolve_recording_url("   ")


def test_mask_phone_number():
    assert mask_phone_number("+15551234567") == "***4567"
    assert mask_phone_number("") == "unknown"
    assert mask_phone_number(None) == "unknown"
    assert mask_phone_number("123") == "***"


def test_audio_upload_file():
    filename, content, mime_type = audio_upload_file(b"data", "mp3")
    assert filename == "recording.mp3"
    assert content == b"data"
    assert mime_type == "audio/mpeg"


def test_settings_defaults(monkeypatch):
    for name in ("PORT", "CHAT_MODEL", "TRANSCRIPTION_MODEL", "RECORDING_FILE_SUFFIX",
                 "OPENAI_API_KEY", "AUTOMATION_WEBHOOK_URL", "TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.PORT == 10000
    assert settings.CHAT_MODEL == "gpt-4.1-mini"
    assert settings.TRANSCRIPTION_MODEL == "gpt-4o-mini-transcribe"
    assert settings.RECORDING_FILE_SUFFIX == ".wav"
    assert len(settings.validate_startup()) == 3


def test_settings_rejects_bad_port(monkeypatch):
    monkeypatch.setenv("PORT", "ten")
    with pytest.raises(ValueError):
        Settings()
