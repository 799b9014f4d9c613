import mimetypes
from typing import Tuple

DEFAULT_AUDIO_MIME_TYPE = "audio/wav"


def audio_upload_file(audio_data: bytes, suffix: str = ".wav", basename: str = "recording") -> Tuple[str, bytes, str]:
    """
    Package raw recording bytes as a (filename, content, mime type) tuple.

    The speech-to-text endpoint uses the filename extension to detect the codec.

    :param audio_data: Raw audio bytes as downloaded from Twilio.
    :param suffix: File extension, including the leading dot.
    :param basename: Filename without extension.
    :return: Tuple accepted by the OpenAI SDK as an upload file.
    """
    if not suffix.startswith("."):
        suffix = f".{suffix}"
    mime_type, _ = mimetypes.guess_type(f"{basename}{suffix}")
    return f"{basename}{suffix}", audio_data, mime_type or DEFAULT_AUDIO_MIME_TYPE
