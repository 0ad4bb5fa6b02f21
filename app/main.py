from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from .api import router as api_router
from .api.waste_classification import CORS_HEADERS, cors_json_response
from .config import get_settings
import logging

settings = get_settings()
logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="EcoScan")

# Every response carries the same CORS headers, including 404/405 from the router
@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return cors_json_response({"error": str(exc.detail)}, status_code=exc.status_code)

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}")
    return cors_json_response({"error": "Unknown error occurred"}, status_code=500)

# Include routers
app.include_router(api_router)

@app.get("/")
def root():
    return {"message": "Welcome to EcoScan!"}
