"""FastAPI application for the snippet reviewer.

Routes:
  GET  /                  — paste form
  POST /review            — form submission, server-rendered collapsible review
  POST /api/code-review   — JSON: {code} → {review, detectedLanguage}
  POST /api/render        — JSON: {review} → segmented, formatted sections
  GET  /api/health
"""

import asyncio
import logging
import os
from pathlib import Path

from fastapi import FastAPI, Form, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from snippetlens_core.config import load_config
from snippetlens_core.errors import EmptyCodeError
from snippetlens_core.fragments import render_review
from snippetlens_core.reviewer import run_review
from snippetlens_core.sections import SectionDisplayState, segment_review
from snippetlens_web.models import (
    CodeReviewRequest,
    CodeReviewResponse,
    ErrorResponse,
    HealthResponse,
    RenderRequest,
    RenderResponse,
)

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

ICON_GLYPHS = {"alert": "⚠", "code": "</>", "check": "✔"}

NO_CODE = "No code provided"
REVIEW_FAILED = "Failed to review code"


async def _review_in_executor(code: str, config: dict):
    # Provider SDKs are blocking; keep them off the event loop.
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, lambda: run_review(code, config))


def create_app(config: dict | None = None) -> FastAPI:
    app = FastAPI(
        title="snippetlens",
        description="Paste a code snippet, get an AI review grouped into sections",
        version="0.1.0",
    )
    if config is None:
        config = load_config(os.environ.get("SNIPPETLENS_CONFIG", ".snippetlens.yml"))
    app.state.config = config

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        # A malformed review request is reported like a missing snippet;
        # other routes keep FastAPI's default 422 body.
        if request.url.path == "/api/code-review":
            return JSONResponse(status_code=400, content={"error": NO_CODE})
        return await request_validation_exception_handler(request, exc)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        return HealthResponse(model=app.state.config["model"])

    @app.post(
        "/api/code-review",
        response_model=CodeReviewResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def code_review(body: CodeReviewRequest):
        """Detect the snippet's language, then review it."""
        if not body.code or not body.code.strip():
            return JSONResponse(status_code=400, content={"error": NO_CODE})
        try:
            result = await _review_in_executor(body.code, app.state.config)
        except EmptyCodeError:
            return JSONResponse(status_code=400, content={"error": NO_CODE})
        except Exception:
            logger.exception("Code review failed")
            return JSONResponse(status_code=500, content={"error": REVIEW_FAILED})
        return result.to_wire()

    @app.post("/api/render", response_model=RenderResponse)
    async def render(body: RenderRequest) -> RenderResponse:
        """Segment a review text and format each line into display fragments."""
        state = SectionDisplayState.with_collapsed(body.collapsed)
        rendered = render_review(segment_review(body.review), state)
        return RenderResponse(sections=[section.to_dict() for section in rendered])

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        return templates.TemplateResponse(request, "index.html", _page_context())

    @app.post("/review", response_class=HTMLResponse)
    async def review_form(request: Request, code: str = Form("")):
        context = _page_context(code=code)
        status_code = 200
        try:
            result = await _review_in_executor(code, app.state.config)
        except EmptyCodeError:
            context["error"] = NO_CODE
            status_code = 400
        except Exception:
            logger.exception("Code review failed")
            context["error"] = REVIEW_FAILED
            status_code = 500
        else:
            context["detected_language"] = result.detected_language
            context["sections"] = render_review(result.sections(), SectionDisplayState())
        return templates.TemplateResponse(request, "index.html", context, status_code=status_code)

    return app


def _page_context(code: str = "") -> dict:
    return {
        "code": code,
        "error": None,
        "detected_language": None,
        "sections": [],
        "glyphs": ICON_GLYPHS,
    }


app = create_app()
