"""FastAPI application entry point."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from backend.config import settings
from backend.api.routes import analysis, sites, strong_wind, time_periods
from backend.api.dependencies import get_site_repository
from wind_analysis.exceptions import DataSourceError, EmptyInput, MalformedSourceData
from wind_analysis.utils.log_utils import config_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and load the site list on startup."""
    config_logger(debug=settings.debug)
    get_site_repository().catalog
    yield

# Create FastAPI app with orjson for faster JSON serialization
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    redirect_slashes=False,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(sites.router)
app.include_router(analysis.router)
app.include_router(strong_wind.router)
app.include_router(time_periods.router)


@app.exception_handler(EmptyInput)
async def empty_input_handler(request: Request, exc: EmptyInput):
    return ORJSONResponse(status_code=400, content={"error": exc.message})


@app.exception_handler(MalformedSourceData)
@app.exception_handler(DataSourceError)
async def data_source_handler(request: Request, exc: Exception):
    return ORJSONResponse(status_code=502, content={"error": str(exc)})


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.api_title,
        "version": settings.api_version,
        "docs": "/docs",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
