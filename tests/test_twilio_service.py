import base64

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from voice_receptionist.core.errors import TranscriptionFailure
from voice_receptionist.services.twilio_service import TwilioService

AUDIO = b"RIFF\x24\x00\x00\x00WAVEfmt "


def recording_app(seen_headers, status=200, body=AUDIO):
    async def handler(request):
        seen_headers.append(dict(request.headers))
        return web.Response(body=body, status=status, content_type="audio/x-wav")

    app = web.Application()
    app.router.add_get("/Recordings/RE123.wav", handler)
    return app


@pytest.mark.asyncio
async def test_fetch_recording_returns_bytes(settings):
    seen = []
    async with TestServer(recording_app(seen)) as server:
        audio = await TwilioService(settings).fetch_recording(str(server.make_url("/Recordings/RE123.wav")))

    assert audio == AUDIO
    assert "Authorization" not in seen[0]


@pytest.mark.asyncio
async def test_fetch_recording_uses_account_credentials(settings):
    settings.TWILIO_ACCOUNT_SID = "AC123"
    settings.TWILIO_AUTH_TOKEN = "secret"
    seen = []
    async with TestServer(recording_app(seen)) as server:
        await TwilioService(settings).fetch_recording(str(server.make_url("/Recordings/RE123.wav")))

    expected = "Basic " + base64.b64encode(b"AC123:secret").decode("ascii")
    assert seen[0]["Authorization"] == expected


@pytest.mark.asyncio
async def test_fetch_recording_http_error_is_transcription_failure(settings):
    async with TestServer(recording_app([], status=404)) as server:
        with pytest.raises(TranscriptionFailure):
            await TwilioService(settings).fetch_recording(str(server.make_url("/Recordings/RE123.wav")))


@pytest.mark.asyncio
async def test_fetch_empty_recording_is_transcription_failure(settings):
    async with TestServer(recording_app([], body=b"")) as server:
        with pytest.raises(TranscriptionFailure):
            await TwilioService(settings).fetch_recording(str(server.make_url("/Recordings/RE123.wav")))


@pytest.mark.asyncio
async def test_fetch_unreachable_host_is_transcription_failure(settings):
    async with TestServer(recording_app([])) as server:
        url = str(server.make_url("/Recordings/RE123.wav"))
    settings.HTTP_TIMEOUT = 2

    with pytest.raises(TranscriptionFailure):
        await TwilioService(settings).fetch_recording(url)
