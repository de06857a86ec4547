from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .calendars.controller import register as register_calendars
from .container import Container, build_container
from .core.constants import DEFAULT_QUERY_CACHE_SIZE
from .database.bootstrap import SCHEMA_PATH, SEED_PATH, apply_schema, apply_seed_sql, list_tables
from .holidays.controller import register as register_holidays
from .rooms.controller import register as register_rooms
from .terms.controller import register as register_terms
from .timeslots.controller import register as register_timeslots
from .timetable.controller import register as register_timetable

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=SEED_PATH)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            query_cache_size=int(getattr(settings, "QUERY_CACHE_SIZE", DEFAULT_QUERY_CACHE_SIZE)),
        )

    app.extensions["school_timetable"] = container

    # One query memo per request; writes from other workers show up on the next request.
    @app.before_request
    def _open_query_cycle():
        container.cache_scope.begin()

    @app.teardown_request
    def _close_query_cycle(exc):
        container.cache_scope.end()

    register_calendars(app, container)
    register_terms(app, container)
    register_holidays(app, container)
    register_timeslots(app, container)
    register_rooms(app, container)
    register_timetable(app, container)

    return app
