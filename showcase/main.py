import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from showcase.config import get_settings
from showcase.errors import ShowcaseError
from showcase.routes import vehicles, photos, inquiries, salesperson, admin
from showcase.utils.rate_limit import limiter

# Import event handlers to register them with the event bus
# This must happen before the app starts handling requests
from showcase.events.handlers import notifications  # noqa: F401

# Get settings
settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Something went wrong. Please reload the page."

app = FastAPI(
    title="Pre-Owned Vehicle Showcase API",
    version="1.0.0",
    description="Dealership pre-owned inventory: listings, slot photos and customer inquiries",
)

# Add rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]


@app.exception_handler(ShowcaseError)
async def showcase_error_handler(request: Request, exc: ShowcaseError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": UNEXPECTED_ERROR_MESSAGE})


# Configure CORS with specific origins from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["*"],
)

# Include routers
app.include_router(vehicles.router, prefix="/api", tags=["Vehicles"])
app.include_router(photos.router, prefix="/api", tags=["Photos"])
app.include_router(inquiries.router, prefix="/api", tags=["Inquiries"])
app.include_router(salesperson.router, prefix="/api", tags=["Salesperson"])
app.include_router(admin.router, prefix="/api", tags=["Admin"])

# Local bucket directory, served at STORAGE_PUBLIC_URL when it points here
if settings.storage_backend == "local":
    app.mount(
        "/storage",
        StaticFiles(directory=settings.storage_local_path, check_dir=False),
        name="storage",
    )


@app.get("/")
def read_root():
    return {
        "message": "Pre-Owned Vehicle Showcase API",
        "version": "1.0.0",
        "store_configured": settings.store_configured,
        "endpoints": {
            "vehicles": {
                "grid": "GET /api/vehicles?search=&price_bracket=",
                "detail": "GET /api/vehicles/{vehicle_id}",
                "stock_number_check": "GET /api/vehicles/stock-number-check?stock_number=",
                "create": "POST /api/vehicles",
                "update": "PUT /api/vehicles/{vehicle_id}",
                "price": "PATCH /api/vehicles/{vehicle_id}/price",
                "sold": "POST /api/vehicles/{vehicle_id}/sold",
                "delete": "DELETE /api/vehicles/{vehicle_id}",
            },
            "photos": {
                "slots": "GET /api/photo-slots",
                "list": "GET /api/vehicles/{vehicle_id}/photos",
                "upload": "POST /api/vehicles/{vehicle_id}/photos/{slot}",
                "delete": "DELETE /api/photos/{photo_id}",
            },
            "inquiries": {
                "create": "POST /api/inquiries",
            },
            "salesperson": {
                "sign_in": "POST /api/salesperson/sign-in",
            },
            "admin": {
                "vehicles": "GET /api/admin/vehicles",
                "inquiries": "GET /api/admin/inquiries",
            },
        },
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
