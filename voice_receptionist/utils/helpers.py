def resolve_recording_url(recording_url: str, suffix: str = ".wav") -> str:
    """Twilio hands us the recording resource without an extension; the media needs one."""
    recording_url = recording_url.strip()
    if not recording_url:
        raise ValueError("Recording URL is empty")
    if suffix and not recording_url.endswith(suffix):
        return f"{recording_url}{suffix}"
    return recording_url


def mask_phone_number(phone_number: str) -> str:
    """Keep only the last four digits for log output."""
    if not phone_number:
        return "unknown"
    digits = [c for c in phone_number if c.isdigit()]
    if len(digits) <= 4:
        return "***"
    return "***" + "".join(digits[-4:])
