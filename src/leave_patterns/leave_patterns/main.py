from __future__ import annotations

import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module, load_settings

from .analysis.controller import register as register_leave_patterns
from .container import build_container

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = load_settings()
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    analyzer_config = dict(getattr(settings, "LEAVE_PATTERN_CONFIG", {}) or {})
    container = build_container(
        analyzer_config=analyzer_config,
        detectors=getattr(settings, "LEAVE_PATTERN_DETECTORS", None),
        max_workers=int(getattr(settings, "ANALYSIS_MAX_WORKERS", 4)),
    )
    app.extensions["leave_patterns"] = container

    if app.config["DEBUG"]:
        logger.info(
            "[leave-patterns] settings=%s overrides=%s workers=%s",
            settings_module,
            sorted(analyzer_config),
            getattr(settings, "ANALYSIS_MAX_WORKERS", 4),
        )

    register_leave_patterns(app, container)

    return app
