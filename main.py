from dotenv import load_dotenv
load_dotenv()
import logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from helpers.civil_time import Clock, utc_now
from helpers.config import Settings, load_settings
from helpers.email import Notifier, build_notifier
from helpers.errors import ClinicError
from helpers.logging_config import setup_logging
from helpers.tortoise_config import lifespan
from controllers.booking_controller import booking_router
from controllers.content_controller import content_router


logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ClinicError)
    async def clinic_error_handler(request: Request, exc: ClinicError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request", "details": jsonable_errors(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        detail = exc.detail if exc.status_code != 404 else "Not found"
        return JSONResponse(status_code=exc.status_code, content={"error": detail}, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} error: {exc}")
        return JSONResponse(status_code=500, content={"error": "server error"})


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
        for err in exc.errors()
    ]


def create_app(
    settings: Optional[Settings] = None,
    notifier: Optional[Notifier] = None,
    clock: Clock = utc_now,
) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Clinic Booking API", lifespan=lifespan)
    app.state.settings = settings
    app.state.notifier = notifier or build_notifier(settings)
    app.state.clock = clock

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(booking_router, prefix='/api', tags=['Booking'])
    app.include_router(content_router, prefix='/api', tags=['Content'])

    @app.get('/')
    def greetings():
        return {
            "Message": f"{settings.clinic_name} booking API is running"
        }

    return app


app = create_app()
