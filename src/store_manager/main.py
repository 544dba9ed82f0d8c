from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .attendance.controller import register as register_attendance
from .deliveries.controller import register as register_deliveries
from .deliveries.driver_controller import register as register_drivers
from .employees.controller import register as register_employees
from .expenses.controller import register as register_expenses
from .expenses.vendor_controller import register as register_vendors
from .payments.controller import register as register_payments
from .reports.controller import register as register_reports
from .sales.controller import register as register_sales
from .stores.controller import register as register_stores

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass ``container`` to run against pre-built repositories (tests); otherwise
    the MySQL container is built from the active settings module.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)

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
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(db_config=db_config)

    register_stores(app, container)
    register_employees(app, container)
    register_drivers(app, container)
    register_vendors(app, container)
    register_attendance(app, container)
    register_deliveries(app, container)
    register_sales(app, container)
    register_expenses(app, container)
    register_payments(app, container)
    register_reports(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def health():
        return {"status": "ok"}

    return app
