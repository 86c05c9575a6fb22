from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from apps.generation import CurriculumService, ResourceService, build_client
from careerpath import get_version
from careerpath.core.config import AppConfig, default_config_path, load_app_config
from careerpath.core.events import GenerationEventLog
from careerpath.core.models import to_wire

REPO_ROOT = Path(__file__).resolve().parents[2]
API_KEY_PLACEHOLDER = "GEMINI_API_KEY_PLACEHOLDER"
API_KEY_UNSET = "your-gemini-api-key-here"
INJECTED_SCRIPT = "script.js"
NO_CACHE = "no-cache, no-store, must-revalidate"

ROUTE_ALIASES: Dict[str, str] = {
    "": "loginpageandsighup.html",
    "login": "loginpageandsighup.html",
    "careers": "careerchoose.html",
    "steps": "steps.html",
    "resources": "resources.html",
}

MIME_TYPES: Dict[str, str] = {
    ".html": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".json": "application/json",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".gif": "image/gif",
    ".ico": "image/x-icon",
    ".svg": "image/svg+xml",
}
DEFAULT_MIME = "application/octet-stream"

FALLBACK_NOTICES = {
    "curriculum": "Error generating learning path. Using default curriculum.",
    "resources": "Error generating resources. Using default resources.",
}


class PortalSettings(BaseModel):
    """Runtime configuration for the portal backend."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    static_dir: Path = Field(default=REPO_ROOT / "static")
    config: AppConfig = Field(default_factory=AppConfig)
    curriculum: CurriculumService | None = None
    resources: ResourceService | None = None

    @property
    def api_key(self) -> str | None:
        return self.config.generation.resolve_api_key()

    def resolve_page(self, route: str) -> Path:
        name = ROUTE_ALIASES.get(route.strip("/"), route)
        static_root = self.static_dir.resolve()
        candidate = (static_root / name).resolve()
        try:
            candidate.relative_to(static_root)
        except ValueError as exc:
            raise HTTPException(status_code=404, detail="404 - File Not Found") from exc
        return candidate


@lru_cache
def get_settings() -> PortalSettings:
    load_dotenv()
    config = load_app_config(default_config_path())
    static_override = os.getenv("PORTAL_STATIC_DIR")
    static_dir = Path(static_override).expanduser().resolve() if static_override else config.portal.static_dir
    event_log = GenerationEventLog(config.events_path) if config.events_path else None
    client = build_client(config.generation)
    return PortalSettings(
        static_dir=static_dir,
        config=config,
        curriculum=CurriculumService(client, event_log=event_log),
        resources=ResourceService(client, event_log=event_log),
    )


class CurriculumRequest(BaseModel):
    career: str = Field(..., min_length=1)


class ResourceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    career: str = Field(..., min_length=1)
    step_title: str = Field(..., min_length=1, alias="stepTitle")
    step_description: str = Field(default="", alias="stepDescription")


class CurriculumResponse(BaseModel):
    career: str
    source: str
    notice: str | None = None
    steps: List[Dict[str, Any]]


class ResourceResponse(BaseModel):
    step_title: str = Field(..., serialization_alias="stepTitle")
    source: str
    notice: str | None = None
    resources: Dict[str, Any]


class HealthResponse(BaseModel):
    status: str
    version: str
    generation_enabled: bool


app = FastAPI(title="Career Path Generator", version=get_version())
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health(settings: PortalSettings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(status="ok", version=get_version(), generation_enabled=bool(settings.api_key))


@app.post("/api/curriculum", response_model=CurriculumResponse)
def generate_curriculum(
    request: CurriculumRequest,
    settings: PortalSettings = Depends(get_settings),
) -> CurriculumResponse:
    service = settings.curriculum or CurriculumService()
    outcome = service.generate(request.career)
    return CurriculumResponse(
        career=outcome.career,
        source=outcome.source,
        notice=FALLBACK_NOTICES["curriculum"] if outcome.used_fallback else None,
        steps=[to_wire(step) for step in outcome.steps],
    )


@app.post("/api/resources", response_model=ResourceResponse, response_model_by_alias=True)
def generate_resources(
    request: ResourceRequest,
    settings: PortalSettings = Depends(get_settings),
) -> ResourceResponse:
    service = settings.resources or ResourceService()
    outcome = service.generate(request.career, request.step_title, request.step_description or request.step_title)
    return ResourceResponse(
        step_title=outcome.step_title,
        source=outcome.source,
        notice=FALLBACK_NOTICES["resources"] if outcome.used_fallback else None,
        resources=to_wire(outcome.resources),
    )


@app.get("/{route:path}")
def serve_page(route: str, settings: PortalSettings = Depends(get_settings)) -> Response:
    page = settings.resolve_page(route)
    if not page.is_file():
        raise HTTPException(status_code=404, detail="404 - File Not Found")
    media_type = MIME_TYPES.get(page.suffix.lower(), DEFAULT_MIME)
    headers = {"Cache-Control": NO_CACHE}
    if page.name == INJECTED_SCRIPT:
        text = page.read_text(encoding="utf-8")
        text = inject_api_key(text, settings.api_key)
        return Response(content=text, media_type=media_type, headers=headers)
    return Response(content=page.read_bytes(), media_type=media_type, headers=headers)


def inject_api_key(script: str, api_key: str | None) -> str:
    """Swap the first key placeholder for the configured secret."""
    return script.replace(API_KEY_PLACEHOLDER, api_key or API_KEY_UNSET, 1)


@app.exception_handler(HTTPException)
async def http_error_handler(_: Any, exc: HTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def run() -> None:  # pragma: no cover - manual entry point
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.config.portal.host, port=settings.config.portal.port)


if __name__ == "__main__":  # pragma: no cover
    run()
