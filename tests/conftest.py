import asyncio
import json
from typing import Any

import pytest

from bento.errors import ImageAnalysisError, NetworkError
from bento.models import Subject


WEEK_DATA: dict[str, Any] = {
    "weekData": {
        "days": [
            {
                "day": "月曜日",
                "point": "作り置きの鶏そぼろを使う",
                "mains": [
                    {"name": "鶏そぼろ", "recipeUrl": "https://example.com/soboro"}
                ],
                "sides": [
                    {"name": "にんじんしりしり", "recipeUrl": "https://example.com/shirishiri"}
                ],
            },
            {
                "day": "火曜日",
                "point": "卵焼きは前日に",
                "mains": [],
                "sides": [
                    {"name": "卵焼き", "recipeUrl": "https://example.com/tamagoyaki"}
                ],
            },
        ],
        "shoppingList": ["鶏ひき肉", "にんじん"],
        "prepList": ["鶏そぼろを作る"],
    }
}

FIVE_DATA: dict[str, Any] = {
    "fiveData": [
        {
            "name": "にんじん弁当",
            "description": "にんじんをたっぷり使ったお弁当",
            "makeAhead": "きんぴらを作っておく",
            "point": "彩りよく詰める",
            "mains": [{"name": "豚の生姜焼き", "recipeUrl": "https://example.com/shogayaki"}],
            "sides": [{"name": "にんじんきんぴら", "recipeUrl": "https://example.com/kinpira"}],
        }
    ]
}


class FakeGeneration:
    def __init__(
        self,
        response: str | Exception,
        *,
        gate: asyncio.Event | None = None,
    ) -> None:
        self.response = response
        self.gate = gate
        self.payloads: list[str] = []

    async def generate(self, payload: str) -> str:
        self.payloads.append(payload)
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class FakeVision:
    def __init__(self, *responses: str | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[bytes, str, Subject]] = []

    async def extract(self, image: bytes, mime_type: str, subject: Subject) -> str:
        self.calls.append((image, mime_type, subject))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def week_json() -> str:
    return json.dumps(WEEK_DATA, ensure_ascii=False)


@pytest.fixture
def five_json() -> str:
    return json.dumps(FIVE_DATA, ensure_ascii=False)


@pytest.fixture
def network_error() -> NetworkError:
    return NetworkError("Problem creating completion. Connection refused.")


@pytest.fixture
def image_error() -> ImageAnalysisError:
    return ImageAnalysisError("Problem analysing image. No text.")
