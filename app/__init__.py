# app/__init__.py
import logging
import os

from dotenv import load_dotenv
from flask import Flask
from sqlalchemy import event

from .extensions import db  # shared instance

load_dotenv(override=True)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _configure_logging(app):
    level = app.config.get("LOG_LEVEL", "INFO")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # flask's own logger is named after the import name ("app"), so module
    # loggers under app.machines.* share this handler
    logger = logging.getLogger(app.import_name)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def _enable_sqlite_transactional_ddl(engine):
    """
    pysqlite only opens a transaction in front of DML, so DROP/CREATE would
    otherwise autocommit. Let SQLAlchemy emit BEGIN itself instead.
    """
    def _on_connect(dbapi_conn, _rec):
        dbapi_conn.isolation_level = None

    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    event.listen(engine, "connect", _on_connect)
    event.listen(engine, "begin", _on_begin)


def create_app(test_config=None):
    app = Flask(__name__, instance_relative_config=True)
    os.makedirs(app.instance_path, exist_ok=True)

    # ---- config ----
    db_url = os.getenv("DATABASE_URL", "").strip()
    if not db_url:
        db_url = "sqlite:///" + os.path.join(app.instance_path, "machines.db")

    app.config.from_mapping(
        SQLALCHEMY_DATABASE_URI=db_url,
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        UPLOAD_FOLDER=os.getenv("UPLOAD_FOLDER") or os.path.join(app.instance_path, "uploads"),
        MAX_CONTENT_LENGTH=int(os.getenv("MAX_UPLOAD_MB", "16")) * 1024 * 1024,
        GEMINI_API_KEY=os.getenv("GEMINI_API_KEY"),
        GEMINI_MODEL=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        ZAI_API_KEY=os.getenv("ZAI_API_KEY") or os.getenv("Z_API_KEY"),
        ZAI_BASE_URL=os.getenv("ZAI_BASE_URL", "https://api.z.ai/api/paas/v4/"),
        ZAI_MODEL=os.getenv("ZAI_MODEL", "GLM-4.5-Flash"),
        DEFAULT_MODEL=os.getenv("DEFAULT_MODEL", "gemini"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
    if test_config:
        app.config.update(test_config)

    _configure_logging(app)
    os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)

    # ---- completion backends (gemini / zai) ----
    from app.machines.completion import build_backends

    backends = app.config.get("COMPLETION_BACKENDS") or build_backends(app.config)
    app.extensions["completion_backends"] = backends

    # ---- DB ----
    db.init_app(app)

    with app.app_context():
        if db.engine.dialect.name == "sqlite":
            _enable_sqlite_transactional_ddl(db.engine)

        from app.machines import models  # noqa: F401  registers Machine
        db.create_all()
        app.logger.info("Database ready: %s", db.engine.url.render_as_string(hide_password=True))

    # ---- Blueprints (register ONLY inside the factory) ----
    from app.machines import machines_api_bp

    app.register_blueprint(machines_api_bp)

    from .routes_root import root_bp
    app.register_blueprint(root_bp)

    return app
