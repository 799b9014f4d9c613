from fastapi import APIRouter
from voice_receptionist.config.settings import TURN_CALLBACK_PATH, VOICE_ENTRY_PATH
from .endpoints import (
    handle_voice_entry,
    handle_turn_callback,
    health_check,
    service_info,
)

router = APIRouter()

router.add_api_route(VOICE_ENTRY_PATH, handle_voice_entry, methods=["POST"])
router.add_api_route(TURN_CALLBACK_PATH, handle_turn_callback, methods=["POST"])
router.add_api_route("/health", health_check, methods=["GET"])
router.add_api_route("/", service_info, methods=["GET"])
