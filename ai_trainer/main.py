"""
AI Trainer Service - Main Entry Point

Workout plans, diet plans and coach chat backed by a hosted language model.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from ai_trainer.core.config import settings
from ai_trainer.core.logger import logger
from ai_trainer.core.limiter import limiter
from ai_trainer.routes import trainer

VERSION = "1.0.0"


# Validate configuration on startup. A missing default key is not fatal:
# callers may still send their own customApiKey.
try:
    settings.validate()
    logger.info("Configuration validated successfully")
except ValueError as e:
    logger.warning(f"Configuration incomplete: {e}")


app = FastAPI(
    title="AI Trainer Service",
    description="AI-generated workout plans, diet plans and coaching chat",
    version=VERSION
)

# Attach rate limiter and its error handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Browser callers hit the trainer endpoint directly
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

app.include_router(trainer.router, tags=["Trainer"])


@app.get("/")
@limiter.limit("60/minute")
def root(request: Request):
    """Health check endpoint."""
    return {"message": "AI Trainer Service running"}


@app.get("/health")
def health():
    """
    Detailed health status.
    Returns 'degraded' if the default AI gateway key is missing.
    """
    missing = settings.missing()

    if missing:
        return JSONResponse(
            status_code=200,
            content={
                "status": "degraded",
                "service": "ai-trainer",
                "version": VERSION,
                "missing_config": missing,
                "message": f"Missing required environment variables: {', '.join(missing)}"
            }
        )

    return {
        "status": "healthy",
        "service": "ai-trainer",
        "version": VERSION
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "ai_trainer.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False
    )
