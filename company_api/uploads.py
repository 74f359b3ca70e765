# company_api/uploads.py
"""
Upload parsing for the logo and banner endpoints.

Accepts either a multipart form with one image under ``field_name``, or (where
allowed) a JSON body ``{"filePath": "<http(s) URL>"}``. Size and type limits
are enforced here, before the profile service is called.
"""

import logging
from typing import Optional

from fastapi import Request
from starlette.datastructures import UploadFile

from company_api.config import settings
from company_api.exceptions import BadRequestError
from company_api.services.assets import REMOTE_SCHEMES, AssetSource

logger = logging.getLogger(__name__)


def _max_size_label() -> str:
    return f"{settings.MAX_UPLOAD_BYTES // (1024 * 1024)}MB"


async def _read_multipart(request: Request, field_name: str) -> Optional[AssetSource]:
    form = await request.form()
    item = form.get(field_name)
    if not isinstance(item, UploadFile):
        return None

    if not (item.content_type or "").startswith("image/"):
        raise BadRequestError("Only image files are allowed")

    content = await item.read()
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise BadRequestError(f"File too large. Maximum size is {_max_size_label()}")
    if not content:
        raise BadRequestError("Uploaded file is empty")

    logger.debug(f"Received {field_name} upload: {item.filename} ({len(content)} bytes)")
    return AssetSource(content=content, mime_type=item.content_type, filename=item.filename)


async def _read_file_path(request: Request) -> Optional[AssetSource]:
    try:
        body = await request.json()
    except ValueError:
        raise BadRequestError("Malformed JSON body")

    file_path = body.get("filePath") if isinstance(body, dict) else None
    if not isinstance(file_path, str) or not file_path.strip():
        return None

    file_path = file_path.strip()
    # Only remote images; server paths must never reach the image host
    if not file_path.lower().startswith(REMOTE_SCHEMES):
        raise BadRequestError("filePath must be an http(s) URL")
    return AssetSource(location=file_path)


async def parse_asset_source(request: Request, field_name: str, allow_file_path: bool = True) -> AssetSource:
    """
    Extract the image to upload from the request.

    Args:
        field_name: Multipart field holding the file ("logo" or "banner")
        allow_file_path: Also accept a JSON ``filePath``

    Raises:
        BadRequestError: Wrong type, too large, or no image supplied
    """
    content_type = request.headers.get("content-type", "")
    source = None

    if content_type.startswith("multipart/form-data"):
        source = await _read_multipart(request, field_name)
    elif allow_file_path and content_type.startswith("application/json"):
        source = await _read_file_path(request)

    if source is None:
        if allow_file_path:
            raise BadRequestError(f"{field_name.capitalize()} file or filePath required")
        raise BadRequestError("No file uploaded")
    return source
