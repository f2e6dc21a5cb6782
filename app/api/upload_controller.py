"""
app/api/upload_controller.py

Handles incoming requests to POST /upload.

This layer is responsible only for HTTP concerns:
  - Enforcing the request body limit, both from the declared
    Content-Length and while the body is being streamed.
  - Parsing the multipart form and collecting the file parts sent
    under the 'files' field.
  - Requiring exactly the configured number of files.
  - Delegating archive building to ArchiveService and streaming the
    result back, deleting the archive once it has been sent.
  - Translating service-level errors into plain-text HTTP responses.

Responses:
  200  The ZIP archive, as an attachment named archive.zip.
  400  The request was rejected: body too large, malformed multipart
       payload, wrong number of files, or a file that is not a PDF/JPEG.
  405  Any method other than POST (answered by the router).
  500  The archive could not be written.  No detail is sent to the client.
"""

from typing import List

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, PlainTextResponse, Response
from starlette.background import BackgroundTask
from starlette.datastructures import UploadFile as StarletteUploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.types import Message, Receive

from app.core.config import settings
from app.core.constants import (
    ARCHIVE_DOWNLOAD_NAME,
    ARCHIVE_MEDIA_TYPE,
    UPLOAD_FIELD_NAME,
)
from app.core.exceptions import (
    ClientInputError,
    InternalFailure,
    MalformedUploadError,
    RequestTooLargeError,
    WrongFileCountError,
)
from app.core.logger import get_logger
from app.models.archive_models import BuiltArchive
from app.services.archive_service import archive_service

logger = get_logger(__name__)

router = APIRouter(tags=["Upload"])

INTERNAL_ERROR_MESSAGE = "Internal Server Error"

# ── Helpers ────────────────────────────────────────────────────────────────────

def _err(message: str, status: int = 400) -> PlainTextResponse:
    """Return a plain-text error response."""
    return PlainTextResponse(message, status_code=status)


def _too_large() -> RequestTooLargeError:
    return RequestTooLargeError(
        f"Total files size too large (max {settings.max_upload_size_mb}MB)"
    )


class BodyLimitExceeded(MultiPartException):
    """
    Raised from inside form parsing when the body outgrows the limit.

    Starlette closes the already spooled parts only for MultiPartException,
    so the size guard raises one of those and the controller turns it into
    RequestTooLargeError afterwards.
    """


def limit_body(receive: Receive, limit: int) -> Receive:
    """
    Wrap an ASGI receive callable so that it raises BodyLimitExceeded
    as soon as more than *limit* body bytes have arrived.
    """
    received = 0

    async def limited_receive() -> Message:
        nonlocal received
        message = await receive()
        if message["type"] == "http.request":
            received += len(message.get("body", b""))
            if received > limit:
                raise BodyLimitExceeded(str(_too_large()))
        return message

    return limited_receive


def _check_declared_length(request: Request, limit: int) -> None:
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise _too_large()


def _collect_uploads(form) -> List[StarletteUploadFile]:
    """
    File parts under the upload field.

    Plain string values and parts sent with an empty filename (an unfilled
    file input) are form values, not files.
    """
    return [
        value
        for value in form.getlist(UPLOAD_FIELD_NAME)
        if isinstance(value, StarletteUploadFile) and value.filename
    ]


async def _archive_request(request: Request) -> BuiltArchive:
    """Validate the request body and build its archive."""
    limit = settings.max_upload_size
    _check_declared_length(request, limit)

    # Without "app" in scope Starlette re-raises parser errors unchanged
    # instead of wrapping them in HTTPException.
    scope = {key: value for key, value in request.scope.items() if key != "app"}
    limited = Request(scope, receive=limit_body(request.receive, limit))
    try:
        form = await limited.form()
    except BodyLimitExceeded as exc:
        raise _too_large() from exc
    except (MultiPartException, StarletteHTTPException, ValueError) as exc:
        raise MalformedUploadError("Invalid multipart/form-data payload.") from exc

    try:
        uploads = _collect_uploads(form)
        required = settings.required_file_count
        if len(uploads) != required:
            raise WrongFileCountError(f"Please upload exactly {required} files")

        logger.info(
            "Upload request received — %s",
            ", ".join(repr(upload.filename) for upload in uploads),
        )
        return await archive_service.build_archive(uploads)
    finally:
        await form.close()


# ── Endpoint ───────────────────────────────────────────────────────────────────

@router.post("/upload", summary="Bundle three PDF/JPEG files into a ZIP archive")
async def upload(request: Request) -> Response:
    """
    Accept exactly three files under the 'files' field:

        curl -F "files=@a.pdf" -F "files=@b.jpg" -F "files=@c.jpeg" \\
             -o archive.zip http://localhost:8080/upload

    Only .pdf, .jpg and .jpeg files (case-insensitive) are accepted.
    """
    try:
        archive = await _archive_request(request)

    except ClientInputError as exc:
        logger.warning("Upload rejected: %s", exc)
        return _err(str(exc))

    except InternalFailure as exc:
        logger.exception("Archive pipeline error: %s", exc)
        return _err(INTERNAL_ERROR_MESSAGE, status=500)

    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error during upload: %s", exc)
        return _err(INTERNAL_ERROR_MESSAGE, status=500)

    return FileResponse(
        archive.path,
        media_type=ARCHIVE_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={ARCHIVE_DOWNLOAD_NAME}"},
        background=BackgroundTask(archive_service.discard, archive.path),
    )
