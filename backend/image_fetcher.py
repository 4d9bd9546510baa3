"""
Downloads the photo of a student's handwritten solution and wraps it as an
inline image payload for the completion service.
"""

import logging

import httpx

from backend.llm_provider import ImagePayload

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"


class ImageFetchError(Exception):
    pass


def mime_type_from_header(content_type: str) -> str:
    """``image/png; charset=binary`` → ``image/png``; non-image types → jpeg."""
    value = (content_type or "").split(";")[0].strip().lower()
    return value if value.startswith("image/") else DEFAULT_MIME_TYPE


async def fetch_image(url: str, client: httpx.AsyncClient) -> ImagePayload:
    try:
        resp = await client.get(url)
    except httpx.HTTPError as e:
        raise ImageFetchError(f"fetch image failed: {e}") from e

    if not resp.is_success:
        raise ImageFetchError(f"fetch image failed: {resp.status_code}")

    if not resp.content:
        raise ImageFetchError("fetch image failed: empty body")

    mime_type = mime_type_from_header(resp.headers.get("content-type", ""))
    logger.info("Fetched answer image (%d bytes, %s).", len(resp.content), mime_type)
    return ImagePayload(mime_type=mime_type, data=resp.content)
