import uvicorn
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from voice_receptionist.api.routes import router
from voice_receptionist.config.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Voice Receptionist",
    description="Answers Twilio calls, transcribes the caller with OpenAI and books appointments",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)

for warning in settings.validate_startup():
    logger.warning(warning)


if __name__ == "__main__":
    logger.info(f"AI Receptionist server running on port {settings.PORT}")
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT)
