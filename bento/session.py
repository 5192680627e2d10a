"""The state a front end renders, and the only way to change it.

`SessionState` is a frozen snapshot. The functions below are pure transitions
from one snapshot to the next. `Session` runs the two pipelines and swaps in
a new snapshot at each step, so a reader never sees a half-updated state.
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
import logging

from bento import merger, parser, prompts
from bento.errors import ImageAnalysisError
from bento.llm_service import GenerationClient, VisionClient
from bento.models import ApiResponse, InputField, Mode, Subject
from config import DEFAULT_USUAL_INGREDIENTS


logger = logging.getLogger(__name__)


GENERATION_FAILED = "献立の生成に失敗しました"
IMAGE_ANALYSIS_FAILED = "画像解析に失敗しました"

CAPTURE_SUBJECTS = {
    InputField.ingredients: Subject.receipt,
    InputField.grandma_vegetables: Subject.food,
}


class Status(Enum):
    idle = "idle"
    loading = "loading"
    success = "success"
    failed = "failed"


@dataclass(frozen=True)
class SessionState:
    mode: Mode = Mode.week
    ingredients: str = ""
    grandma_vegetables: str = ""
    usual_ingredients: str = DEFAULT_USUAL_INGREDIENTS
    loading: bool = False
    result: ApiResponse | None = None
    error: str | None = None

    @property
    def status(self) -> Status:
        if self.loading:
            return Status.loading
        if self.error is not None:
            return Status.failed
        if self.result is not None:
            return Status.success
        return Status.idle

    @property
    def visible_result(self) -> ApiResponse | None:
        """The result to show. An error hides any earlier result."""
        return None if self.error is not None else self.result

    def field(self, field: InputField) -> str:
        return getattr(self, field.value)


def initial_state(usual_ingredients: str = DEFAULT_USUAL_INGREDIENTS) -> SessionState:
    return SessionState(usual_ingredients=usual_ingredients)


def with_mode(state: SessionState, mode: Mode) -> SessionState:
    return dataclasses.replace(state, mode=mode)


def with_field(state: SessionState, field: InputField, value: str) -> SessionState:
    return dataclasses.replace(state, **{field.value: value})


def generation_started(state: SessionState) -> SessionState:
    return dataclasses.replace(state, loading=True, error=None)


def generation_succeeded(state: SessionState, result: ApiResponse) -> SessionState:
    return dataclasses.replace(state, loading=False, result=result, error=None)


def generation_failed(state: SessionState, message: str = GENERATION_FAILED) -> SessionState:
    return dataclasses.replace(state, loading=False, error=message)


def ingested(state: SessionState, field: InputField, text: str) -> SessionState:
    return with_field(state, field, merger.merge(state.field(field), text))


class Session:
    def __init__(
        self,
        *,
        generation: GenerationClient,
        vision: VisionClient,
        state: SessionState | None = None,
    ) -> None:
        self.generation = generation
        self.vision = vision
        self._state = initial_state() if state is None else state

    @property
    def state(self) -> SessionState:
        return self._state

    def set_mode(self, mode: Mode) -> SessionState:
        self._state = with_mode(self._state, mode)
        return self._state

    def update_field(self, field: InputField, value: str) -> SessionState:
        self._state = with_field(self._state, field, value)
        return self._state

    async def generate(self) -> SessionState:
        """Request a menu for the current inputs.

        A call while a request is in flight does nothing. The response is
        checked against the mode at dispatch, even if the mode changes while
        waiting.
        """
        if self._state.loading:
            logger.info("Generation already in flight, ignoring.")
            return self._state

        dispatched = self._state
        payload = prompts.build(
            dispatched.mode,
            dispatched.ingredients,
            dispatched.grandma_vegetables,
            dispatched.usual_ingredients,
        )
        self._state = generation_started(self._state)

        try:
            raw_text = await self.generation.generate(payload)
            result = parser.parse(raw_text, dispatched.mode)
        except Exception:
            logger.exception("Menu generation failed.")
            self._state = generation_failed(self._state)
        else:
            logger.info("Menu generated for mode %s.", dispatched.mode.value)
            self._state = generation_succeeded(self._state, result)
        finally:
            # Cancelled mid-flight.
            if self._state.loading:
                logger.info("Menu generation cancelled.")
                self._state = generation_failed(self._state)

        return self._state

    async def capture_image(
        self,
        field: InputField,
        image: bytes,
        mime_type: str,
    ) -> SessionState:
        """Append the ingredients found in `image` to `field`.

        Raises `ImageAnalysisError` and leaves the field as it was if nothing
        usable comes back.
        """
        subject = CAPTURE_SUBJECTS.get(field)
        if subject is None:
            raise ValueError(f"Image capture not supported for {field.value}.")

        try:
            text = await self.vision.extract(image, mime_type, subject)
        except ImageAnalysisError as e:
            logger.info("Image analysis for %s failed: %s", field.value, e)
            raise ImageAnalysisError(IMAGE_ANALYSIS_FAILED) from e

        # Merge into the field as it is now, other captures may have landed.
        self._state = ingested(self._state, field, text)
        return self._state
