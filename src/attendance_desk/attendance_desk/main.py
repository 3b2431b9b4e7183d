from __future__ import annotations

import importlib
import sys

from dotenv import load_dotenv
from flask import Flask
from loguru import logger

from config import get_settings_module

from .container import build_container
from .attendance.controller import register as register_attendance


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level,
    )


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    api_config = getattr(settings, "API_CONFIG")
    attendance_config = getattr(settings, "ATTENDANCE_CONFIG", {})
    logger.info(f"settings={settings_module} api={api_config.get('base_url')}")

    container = build_container(api_config=api_config, attendance_config=attendance_config)
    register_attendance(app, container)

    return app
