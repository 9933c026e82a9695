from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .api.profile_view import build_profile_view, error_message
from .api.proxycurl import ProxycurlClient
from .config import Settings, load_settings
from .errors import FetchException, ParseException, ProxyError
from .logging_config import get_logger, setup_logging
from .models.device import DEVICE_KINDS
from .models.profile import ErrorResponse, FetchProfileRequest

URL_REQUIRED = "LinkedIn URL is required"
BASE_DIR = Path(__file__).resolve().parent

settings = load_settings()
setup_logging(settings.logging.verbose)
logger = get_logger(__name__)

# Report whether the key is present without exposing it
logger.info(f"PROXYCURL_API_KEY set: {'Yes' if settings.api_key_set else 'No'}")
if not settings.api_key_set:
    logger.warning("PROXYCURL_API_KEY is not set, profile requests will be sent without a token")

app = FastAPI(title="Profile Viewer", description="LinkedIn profile viewer and device test screen")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")
templates = Jinja2Templates(directory=BASE_DIR / "templates")


def get_settings() -> Settings:
    return settings


def get_proxycurl_client(settings: Settings = Depends(get_settings)) -> ProxycurlClient:
    return ProxycurlClient(settings.proxycurl, api_key=settings.api_key)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning(f"Rejected request to {request.url.path}: {errors}")
    if all(error.get("type") in ("missing", "json_invalid") for error in errors):
        return _error(400, URL_REQUIRED)
    return _error(400, f"Invalid request body: {errors[0].get('msg', 'validation failed')}")


@app.exception_handler(ProxyError)
async def proxy_error_handler(request: Request, exc: ProxyError):
    logger.error(f"{exc} {exc.details}")
    return _error(502, exc.message)


@app.post("/api/fetch-profile")
async def fetch_profile(
    payload: FetchProfileRequest,
    client: ProxycurlClient = Depends(get_proxycurl_client),
):
    if not payload.url or not payload.url.strip():
        logger.warning("Fetch rejected: no LinkedIn URL in request body")
        return _error(400, URL_REQUIRED)

    async with client:
        upstream = await client.fetch_profile(payload.url)
    return JSONResponse(status_code=upstream.status_code, content=upstream.data)


@app.get("/", response_class=HTMLResponse)
async def profile_page(
    request: Request,
    url: Optional[str] = None,
    client: ProxycurlClient = Depends(get_proxycurl_client),
):
    context = {"url": url or "", "profile": None, "error": None}
    status_code = 200

    if url is not None:
        if not url.strip():
            context["error"] = URL_REQUIRED
            status_code = 400
        else:
            try:
                async with client:
                    upstream = await client.fetch_profile(url)
            except (FetchException, ParseException) as e:
                logger.error(f"Error fetching profile: {e}")
                context["error"] = e.message
                status_code = 502
            else:
                if upstream.ok and isinstance(upstream.data, dict):
                    context["profile"] = build_profile_view(upstream.data)
                else:
                    context["error"] = error_message(upstream.status_code, upstream.data)
                    status_code = upstream.status_code if not upstream.ok else 502

    return templates.TemplateResponse(request, "profile.html", context, status_code=status_code)


@app.get("/camera_test", response_class=HTMLResponse)
async def camera_test_page(request: Request):
    return templates.TemplateResponse(
        request,
        "camera_test.html",
        {
            "device_kinds": DEVICE_KINDS,
            "device_kinds_data": [kind.model_dump() for kind in DEVICE_KINDS],
        },
    )


@app.get("/api")
async def read_root(settings: Settings = Depends(get_settings)):
    return {
        "message": "Profile Viewer API",
        "status": "running",
        "api_key_set": settings.api_key_set,
        "endpoints": {
            "fetch_profile": "/api/fetch-profile",
            "health": "/api/health",
            "startup_info": "/api/startup-info",
            "profile_page": "/",
            "camera_test": "/camera_test",
        },
        "docs": "/docs",
    }


@app.get("/api/startup-info")
async def startup_info(settings: Settings = Depends(get_settings)):
    """Debug endpoint to check configuration without exposing secrets"""
    return {
        "api_key_set": settings.api_key_set,
        "endpoint": settings.proxycurl.endpoint,
        "timeout_seconds": settings.proxycurl.timeout_seconds,
        "params": settings.proxycurl.params,
    }


@app.get("/api/health")
async def health_check(settings: Settings = Depends(get_settings)):
    if not settings.api_key_set:
        raise HTTPException(
            status_code=503,
            detail="Profile API unavailable: PROXYCURL_API_KEY is not set",
        )
    return {"status": "ok"}


def run():
    import uvicorn

    uvicorn.run(app, host=settings.server.host, port=settings.server.port)
