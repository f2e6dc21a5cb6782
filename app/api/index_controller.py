"""
app/api/index_controller.py

Serves the upload form on GET /.

The page is a static Jinja2 template with no parameters; any failure to
load or render it is logged and answered with a plain 500.
"""

from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from app.core.config import settings
from app.core.exceptions import TemplateRenderError
from app.core.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Index"])

INDEX_TEMPLATE = "index.html"


@lru_cache(maxsize=4)
def _templates(directory: Path) -> Jinja2Templates:
    return Jinja2Templates(directory=str(directory))


def render_index(request: Request) -> Response:
    """Render the upload form, raising TemplateRenderError on any failure."""
    try:
        return _templates(Path(settings.templates_dir)).TemplateResponse(
            request, INDEX_TEMPLATE
        )
    except (TemplateError, OSError) as exc:
        raise TemplateRenderError(f"Could not render '{INDEX_TEMPLATE}': {exc}") from exc


@router.get("/", response_class=HTMLResponse, summary="Upload form")
async def index(request: Request) -> Response:
    try:
        return render_index(request)
    except TemplateRenderError as exc:
        logger.error("Index page failed: %s", exc)
        return PlainTextResponse("Internal Server Error", status_code=500)
