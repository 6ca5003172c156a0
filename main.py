import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_settings
from src.core.logging_config import setup_logging

# Configure logging VERY early
settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

from src.routers import mbti as mbti_router

app = FastAPI(
    title="MBTI Profile Engine",
    description="Samples preference questions and scores answers into a four-letter type.",
    version="0.1.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Include Routers ---
app.include_router(mbti_router.router, prefix="/api/v1", tags=["mbti"])


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint to verify service availability.
    """
    return {"status": "ok"}


logger.info(f"MBTI Profile Engine ready (catalog: {settings.catalog_path})")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
