import contextlib
import logging
from typing import AsyncIterator

from jinja2 import Environment, FileSystemLoader, select_autoescape
from starlette.applications import Starlette
from starlette.datastructures import FormData, UploadFile
from starlette.requests import Request
from starlette.responses import HTMLResponse, RedirectResponse
from starlette.routing import Route

import config
from bento.errors import ImageAnalysisError
from bento.llm_service import LLMService
from bento.models import InputField, Mode
from bento.session import CAPTURE_SUBJECTS, Session, initial_state


logger = logging.getLogger(__name__)


CONFIG = config.Config()


TEMPLATES = Environment(
    loader=FileSystemLoader(CONFIG.html_dir),
    autoescape=select_autoescape(),
)


def render_index(session: Session, message: str | None = None) -> str:
    return TEMPLATES.get_template("index.html").render(
        state=session.state,
        modes=list(Mode),
        capture_fields=list(CAPTURE_SUBJECTS),
        message=message,
    )


def apply_inputs(session: Session, form: FormData) -> None:
    mode = form.get("mode")
    if isinstance(mode, str) and mode:
        session.set_mode(Mode(mode))
    for field in InputField:
        value = form.get(field.value)
        if isinstance(value, str):
            session.update_field(field, value)


async def homepage(request: Request) -> HTMLResponse:
    return HTMLResponse(render_index(request.app.state.session))


async def inputs(request: Request) -> HTMLResponse | RedirectResponse:
    session: Session = request.app.state.session
    async with request.form() as form:
        try:
            apply_inputs(session, form)
        except ValueError:
            return HTMLResponse("Unknown mode.", status_code=400)
    return RedirectResponse("/", status_code=303)


async def generate(request: Request) -> HTMLResponse | RedirectResponse:
    session: Session = request.app.state.session
    async with request.form() as form:
        try:
            apply_inputs(session, form)
        except ValueError:
            return HTMLResponse("Unknown mode.", status_code=400)
    await session.generate()
    return RedirectResponse("/", status_code=303)


async def capture(request: Request) -> HTMLResponse | RedirectResponse:
    session: Session = request.app.state.session
    try:
        field = InputField(request.path_params["field"])
    except ValueError:
        return HTMLResponse("Unknown field.", status_code=404)
    if field not in CAPTURE_SUBJECTS:
        return HTMLResponse("Image capture not supported for this field.", status_code=400)

    async with request.form() as form:
        image = form.get("image")
        if not isinstance(image, UploadFile):
            return HTMLResponse("No image.", status_code=400)
        contents = await image.read()
        mime_type = image.content_type or "image/jpeg"

    try:
        await session.capture_image(field, contents, mime_type)
    except ImageAnalysisError as e:
        return HTMLResponse(render_index(session, message=str(e)), status_code=422)
    return RedirectResponse("/", status_code=303)


def default_session() -> Session:
    llm = LLMService(config=CONFIG)
    return Session(
        generation=llm,
        vision=llm,
        state=initial_state(CONFIG.usual_ingredients),
    )


@contextlib.asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    logging.basicConfig(level=CONFIG.log_level)
    if getattr(app.state, "session", None) is None:
        app.state.session = default_session()
        logger.info("Started session with model %s.", CONFIG.core_model)
    yield
    llm = app.state.session.generation
    if isinstance(llm, LLMService):
        await llm.close()


def build_app(session: Session | None = None) -> Starlette:
    app = Starlette(
        debug=True if CONFIG.env == config.Env.local else False,
        routes=[
            Route("/", homepage),
            Route("/inputs", inputs, methods=["POST"]),
            Route("/generate", generate, methods=["POST"]),
            Route("/capture/{field:str}", capture, methods=["POST"]),
        ],
        lifespan=lifespan,
    )
    app.state.session = session
    return app


app = build_app()
