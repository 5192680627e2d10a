import asyncio
import base64

from bento.errors import ImageAnalysisError


def _encode(image: bytes) -> str:
    return base64.b64encode(image).decode("utf-8")


async def image_data_url(image: bytes, mime_type: str) -> str:
    """Inline data url for `image`, encoded off the event loop."""
    if not image:
        raise ImageAnalysisError("Empty image.")
    if not mime_type.startswith("image/"):
        raise ImageAnalysisError(f"Not an image: {mime_type}")

    encoded = await asyncio.to_thread(_encode, image)
    return f"data:{mime_type};base64,{encoded}"
