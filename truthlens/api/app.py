"""FastAPI application for the TruthLens service."""

import contextlib
import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file
load_dotenv()

from ..domain.services.export_service import APP_VERSION
from ..infrastructure.dependencies import get_service_container
from .endpoints import analysis, auth, health, history

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application."""
    # Startup: create the credibility service and its provider
    container = get_service_container()
    service = await container.get_credibility_service()
    if service.remote_available:
        logger.info("🚀 TruthLens started with Groq AI")
    else:
        logger.info("🎭 TruthLens started in fallback mode (no Groq API key)")

    yield  # Application runs here

    # Shutdown: cleanup providers
    await container.shutdown()


# Create FastAPI application
app = FastAPI(
    title="TruthLens API",
    description="Content credibility checking with a hosted LLM and a keyword fallback",
    version=APP_VERSION,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # TODO: Configure in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(analysis.router)
app.include_router(auth.router)
app.include_router(history.router)
