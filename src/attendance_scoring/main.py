from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import build_container
from .seed import seed_demo_data
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(settings_module: str | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    container = build_container(
        scoring_rule=getattr(settings, "SCORING_RULE", "linear"),
        submission_window_days=int(getattr(settings, "SUBMISSION_WINDOW_DAYS", 3)),
        incremental_summary=bool(getattr(settings, "INCREMENTAL_SUMMARY", True)),
    )
    if bool(getattr(settings, "SEED_DEMO_DATA", False)):
        seed_demo_data(container, minimum_minutes_per_week=getattr(settings, "DEFAULT_MINIMUM_MINUTES_PER_WEEK", 240))

    app.extensions["attendance_container"] = container
    register_attendance(app, container)
    if bool(getattr(settings, "DEV_LOGIN", False)):
        register_users(app, container)

    logger.info("attendance-scoring started settings=%s", settings_module)
    return app
