import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .jurisdictions import JURISDICTIONS
from .routes.jurisdictions import router as jurisdictions_router
from .routes.policy import router as policy_router


# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

VERSION = "0.1.0"


def _cors_origins():
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI):

    # Startup
    print("Starting AI Control Kit")
    print(f"   Jurisdictions: {', '.join(JURISDICTIONS)}")
    print(f"   Token secret:  {' Configured' if os.getenv('TOKEN_SECRET') else ' Not set (using development secret)'}")
    print("   Ready to generate governance policies!")

    yield

    print("Shutting down AI Control Kit")


app = FastAPI(
    title="AI Control Kit — AI Governance Policy Generator",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


origins = _cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=origins != ["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(jurisdictions_router)
app.include_router(policy_router)


@app.get(
    "/",
    summary="API Root",
    description="Welcome endpoint with API information",
    tags=["General"]
)
async def root():
    """Root endpoint with API information."""
    return {
        "name": "AI Control Kit",
        "version": VERSION,
        "description": "Multi-jurisdiction AI governance policy generator",
        "docs": "/docs",
        "endpoints": {
            "jurisdictions": "GET /api/jurisdictions - List supported jurisdictions",
            "questions": "GET /api/questions/{id} - Questions for one jurisdiction",
            "generate": "POST /api/generate - Generate a governance policy",
            "pdf": "GET /api/pdf?token= - Policy data for PDF rendering",
            "health": "GET /health - Service health check"
        }
    }


@app.get(
    "/health",
    summary="Global Health Check",
    description="Check if the API server is running",
    tags=["General"]
)
async def health():
    """Global health check endpoint."""
    return {
        "status": "healthy",
        "service": "ai-control-kit",
        "version": VERSION
    }


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    """Malformed request bodies are client errors: answer 400, not 422."""
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Invalid request",
            "detail": jsonable_encoder(exc.errors()),
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logging.getLogger(__name__).exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "detail": str(exc) if os.getenv("DEBUG", "false").lower() == "true" else "An unexpected error occurred"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "controlkit.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("DEBUG", "false").lower() == "true",
    )
