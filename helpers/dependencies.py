from fastapi import Request

from helpers.civil_time import Clock
from helpers.config import Settings
from helpers.email import Notifier


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


def get_clock(request: Request) -> Clock:
    return request.app.state.clock
