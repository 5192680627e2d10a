import logging
from typing import Any, Protocol

import httpx
import openai
from openai.types.chat import ChatCompletionUserMessageParam

from bento.aopenai import openai_client_factory, openai_sdk_factory
from bento.errors import ImageAnalysisError, NetworkError
from bento.images import image_data_url
from bento.models import Subject
from bento.prompts import VISION_INSTRUCTIONS
from config import Config


logger = logging.getLogger(__name__)


class GenerationClient(Protocol):
    async def generate(self, payload: str) -> str:
        ...


class VisionClient(Protocol):
    async def extract(self, image: bytes, mime_type: str, subject: Subject) -> str:
        ...


class LLMService:
    """Both backend capabilities on top of the OpenAI chat completions api.

    Generation goes through the SDK and asks for a JSON object. Vision posts
    the image inline as a data url.
    """

    def __init__(
        self,
        openai_client: openai.AsyncClient | None = None,
        http_client: httpx.AsyncClient | None = None,
        *,
        config: Config | None = None,
    ) -> None:
        self.config = Config() if config is None else config
        self.http_client = (
            openai_client_factory(self.config) if http_client is None else http_client
        )
        self.openai_client = (
            openai_sdk_factory(self.config) if openai_client is None else openai_client
        )

    async def generate(self, payload: str) -> str:
        message: ChatCompletionUserMessageParam = {"role": "user", "content": payload}
        logger.info("Requesting bento menu from %s", self.config.core_model)
        try:
            resp = await self.openai_client.chat.completions.create(
                model=self.config.core_model,
                messages=[message],
                response_format={"type": "json_object"},
                max_tokens=self.config.max_tokens,
            )
        except openai.APIError as e:
            raise NetworkError(f"Problem creating completion. {e}") from e

        if not resp.choices:
            raise NetworkError("Problem creating completion. No choices.")
        return resp.choices[0].message.content or ""

    async def extract(self, image: bytes, mime_type: str, subject: Subject) -> str:
        url = await image_data_url(image, mime_type)
        payload: dict[str, Any] = {
            "model": self.config.vision_model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": VISION_INSTRUCTIONS[subject]},
                        {"type": "image_url", "image_url": {"url": url}},
                    ],
                }
            ],
            "max_tokens": self.config.max_tokens,
        }

        logger.info("Analysing %s image (%s)", subject.value, mime_type)
        try:
            resp = await self.http_client.post("chat/completions", json=payload)
            resp.raise_for_status()
            data = resp.json()
            text = data["choices"][0]["message"]["content"]
        except httpx.HTTPError as e:
            raise ImageAnalysisError(f"Problem analysing image. {e}") from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ImageAnalysisError("Problem analysing image. Unexpected response.") from e

        if not isinstance(text, str) or not text.strip():
            raise ImageAnalysisError("Problem analysing image. No text.")
        return text

    async def close(self) -> None:
        await self.http_client.aclose()
        await self.openai_client.close()
