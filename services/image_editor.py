"""
image_editor.py - instruction-based photo editing for the AI studio page.

Sends an uploaded image plus a free-text instruction to the OpenAI Images
edit endpoint and hands back either the edited image (base64 PNG) or the
text the service answered with instead (refusal / explanation).

Requirements:
- `openai` package for API access
- OPENAI_API_KEY set in the environment (or .env)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from openai import BadRequestError, OpenAI, OpenAIError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {"image/png": "png", "image/jpeg": "jpg", "image/webp": "webp"}
EDITED_IMAGE_FILENAME = "circademic-edited-image.png"


class ImageEditError(Exception):
    """The image service could not be reached or failed to answer."""


@dataclass(frozen=True)
class ImageEditResult:
    image_b64: Optional[str] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.image_b64 is not None

    @property
    def data_url(self) -> Optional[str]:
        if self.image_b64 is None:
            return None
        return f"data:image/png;base64,{self.image_b64}"


def make_client(api_key: Optional[str]) -> OpenAI:
    if not api_key:
        raise ImageEditError("API key not found")
    return OpenAI(api_key=api_key)


def edit_image(
    client: OpenAI,
    image_bytes: bytes,
    mime_type: str,
    prompt: str,
    model: str = "gpt-image-1",
) -> ImageEditResult:
    """
    Args:
        client: OpenAI client (see make_client).
        image_bytes: raw uploaded file.
        mime_type: one of ALLOWED_MIME_TYPES.
        prompt: editing instruction.

    Returns:
        ImageEditResult with image_b64 set, or with a message explaining why not.

    Raises:
        ImageEditError: transport / server failure.
    """
    prompt = (prompt or "").strip()
    if not image_bytes or not prompt:
        raise ValueError("Both an image and an instruction are required")
    if mime_type not in ALLOWED_MIME_TYPES:
        raise ValueError(f"Unsupported image type: {mime_type}")

    filename = f"upload.{ALLOWED_MIME_TYPES[mime_type]}"
    try:
        response = client.images.edit(
            model=model,
            image=(filename, image_bytes, mime_type),
            prompt=prompt,
        )
    except BadRequestError as e:
        # moderation refusals and prompt problems come back as 400s with a readable message
        logger.info(f"Image edit refused: {e}")
        return ImageEditResult(message=str(getattr(e, "message", "") or e))
    except OpenAIError as e:
        logger.error(f"Image edit failed: {e}")
        raise ImageEditError(str(e)) from e

    text = ""
    for item in response.data or []:
        if getattr(item, "b64_json", None):
            return ImageEditResult(image_b64=item.b64_json)
        text = text or (getattr(item, "revised_prompt", None) or "")

    return ImageEditResult(message=text)
