from tortoise import Tortoise
from contextlib import asynccontextmanager
import logging

from helpers.config import Settings, load_settings
from helpers.email import verify_notifier


logger = logging.getLogger(__name__)

MODEL_MODULES = [
    "models.booking",
    "models.content",
]


def build_tortoise_config(settings: Settings) -> dict:
    return {
        'connections': {
            'default': settings.database_uri
        },
        "apps": {
            "models": {
                "models": MODEL_MODULES + ["aerich.models"],
                "default_connection": "default",
            }
        },
        "use_tz": True,
        "timezone": "UTC",
    }


def __getattr__(name):
    # TORTOISE_CONFIG is read by aerich, see [tool.aerich] in pyproject.toml
    if name == "TORTOISE_CONFIG":
        return build_tortoise_config(load_settings())
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


async def init_db(settings: Settings):
    await Tortoise.init(config=build_tortoise_config(settings))
    if settings.generate_schemas:
        await Tortoise.generate_schemas(safe=True)
    logger.info("Database connected")


async def close_db():
    await Tortoise.close_connections()


@asynccontextmanager
async def lifespan(app):
    await init_db(app.state.settings)
    app.state.notifier = await verify_notifier(app.state.notifier)
    try:
        yield
    finally:
        await close_db()
