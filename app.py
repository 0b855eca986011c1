import logging
import os
from logging.handlers import RotatingFileHandler

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_migrate import Migrate
from flask_wtf.csrf import CSRFProtect
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from models import db
from utils.cache import ListViewCache
from utils.list_query import InvalidFilterValue
from version import APP_NAME, __version__

# ---------------------------------------------------------------------------
# Load environment variables from .env
# ---------------------------------------------------------------------------
load_dotenv()

logger = logging.getLogger(__name__)

csrf = CSRFProtect()


def env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# ---------------------------------------------------------------------------
# Environment configuration
# ---------------------------------------------------------------------------

def load_config():
    return {
        "SECRET_KEY": os.getenv("SECRET_KEY", "change-me"),
        "SQLALCHEMY_DATABASE_URI": os.getenv("DATABASE_URL") or os.getenv("SQLALCHEMY_DATABASE_URI"),
        "SQLALCHEMY_TRACK_MODIFICATIONS": False,
        # Serverless-safe SQLAlchemy options (NO fixed pool sizes)
        "SQLALCHEMY_ENGINE_OPTIONS": {"pool_pre_ping": True},
        "ITEM_PER_PAGE": int(os.getenv("ITEM_PER_PAGE", "10")),
        "LIST_CACHE_ENABLED": env_flag("LIST_CACHE_ENABLED", True),
        "LIST_CACHE_TTL": int(os.getenv("LIST_CACHE_TTL", "60")),
        "LIST_CACHE_MAX_ENTRIES": int(os.getenv("LIST_CACHE_MAX_ENTRIES", "1000")),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
        "LOG_FILE": os.getenv("LOG_FILE"),
        "WTF_CSRF_ENABLED": env_flag("WTF_CSRF_ENABLED", True),
    }


def setup_logging(app):
    """Stream handler always, rotating file handler when LOG_FILE is set"""
    level = getattr(logging, app.config["LOG_LEVEL"], logging.INFO)
    formatter = logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s')

    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    log_file = app.config.get("LOG_FILE")
    if log_file and not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=1024 * 1024, backupCount=10)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        root.addHandler(file_handler)


# ---------------------------------------------------------------------------
# Flask app setup
# ---------------------------------------------------------------------------

def create_app(test_config=None):
    app = Flask(__name__)
    app.config.update(load_config())
    if test_config:
        app.config.update(test_config)

    setup_logging(app)

    system_configured = bool(app.config.get("SQLALCHEMY_DATABASE_URI"))
    app.config["SYSTEM_CONFIGURED"] = system_configured

    app.extensions['list_cache'] = ListViewCache(
        ttl=app.config["LIST_CACHE_TTL"],
        enabled=app.config["LIST_CACHE_ENABLED"],
        max_entries=app.config["LIST_CACHE_MAX_ENTRIES"],
    )

    if system_configured:
        # Initialize database, migrations & CSRF
        db.init_app(app)
        Migrate(app, db)
        csrf.init_app(app)
        register_blueprints(app)
    else:
        # Don't raise - the index route reports that setup is required
        logger.warning("⚠️  System not configured - skipping database and blueprint setup")

    register_handlers(app)
    return app


def register_blueprints(app):
    from routes.admin_routes import admin_bp
    from routes.form_routes import form_bp
    from routes.list_routes import list_bp
    from routes.user_routes import user_bp

    for blueprint in (user_bp, admin_bp, list_bp, form_bp):
        app.register_blueprint(blueprint)


def register_handlers(app):
    @app.errorhandler(InvalidFilterValue)
    def invalid_filter(error):
        return jsonify({"success": False, "message": str(error), "filter": error.key}), 400

    @app.route("/")
    def index():
        return jsonify({
            "app": APP_NAME,
            "version": __version__,
            "configured": app.config["SYSTEM_CONFIGURED"],
            "message": "Ready" if app.config["SYSTEM_CONFIGURED"] else "Setup required: set DATABASE_URL",
        })

    @app.route("/db-test")
    def db_test():
        """Simple DB connectivity test"""
        if not app.config["SYSTEM_CONFIGURED"]:
            return jsonify({"db": "not_configured", "message": "Database not configured yet"}), 503

        try:
            with db.engine.connect() as conn:
                result = conn.execute(text("SELECT 1")).scalar()
            return jsonify({"db": "connected", "test_result": int(result)})
        except SQLAlchemyError as e:
            logger.exception("Database connectivity test failed")
            return jsonify({"db": "error", "error": str(e)}), 500


app = create_app()


# ---------------------------------------------------------------------------
# Local development only
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    host = "127.0.0.1"
    port = 5000
    print(f"Running on http://{host}:{port}/")
    app.run(host=host, port=port, debug=True)
