"""FastAPI application for FarmRisk."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from farmrisk.api.routers import assess, fraud_cases, health
from farmrisk.api.schemas.response import HealthResponse
from farmrisk.config import get_settings
from farmrisk.logger import get_logger

logger = get_logger(__name__)

# Create FastAPI application
app = FastAPI(
    title="FarmRisk API",
    description="Farm credit and insurance risk assessment from KCC, satellite and weather data",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - allow requests from the dashboard frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(assess.router, prefix="/api/assess", tags=["assess"])
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(fraud_cases.router, prefix="/api/fraud-cases", tags=["fraud"])


@app.on_event("startup")
async def startup_event():
    """Log the resolved provider configuration."""
    settings = get_settings()
    logger.info("Starting FarmRisk API server")
    logger.info(f"Satellite provider: {settings.satellite_api_base_url}")
    logger.info(f"Weather provider: {settings.weather_api_base_url}")
    logger.info(f"Risk predictor: {settings.predictor_base_url}")
    logger.info(f"Fraud case store: {settings.fraud_db_path}")
    if settings.registry_path:
        logger.info(f"KCC registry file: {settings.registry_path}")
    else:
        logger.info("KCC registry: built-in sample records")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Shutting down FarmRisk API server")


@app.get("/", response_model=HealthResponse)
async def root():
    """Root endpoint with basic API information."""
    return HealthResponse(status="running", version="1.0.0")


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version="1.0.0")
