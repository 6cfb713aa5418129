import os
from flask import Flask, jsonify, request, current_app
from flask_limiter import RateLimitExceeded
from dotenv import load_dotenv
from sqlalchemy import text

from .config import DevConfig, ProdConfig, TestConfig
from .extensions import db, migrate, jwt, cors, limiter
from .common.errors import register_error_handlers
from .common.logging import setup_json_logging, register_request_logging


def create_app(auth_gate=None):
    """Application factory.

    ``auth_gate`` replaces the JWT gate (any object with ``verify(credential)``).
    """
    # .env if present (dev)
    load_dotenv()

    app = Flask(__name__)

    env = os.getenv("APP_ENV") or os.getenv("FLASK_ENV", "development")
    if env in ("test", "testing"):
        app.config.from_object(TestConfig)
    elif env == "production":
        app.config.from_object(ProdConfig)
    else:
        app.config.from_object(DevConfig)

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    setup_json_logging(app)
    register_request_logging(app)

    from .auth.gate import JwtAuthGate
    app.extensions["auth_gate"] = auth_gate or JwtAuthGate()

    def _csv(value, default_if_empty):
        """Split a CSV string into a list, else return the value or a default."""
        if value is None:
            return default_if_empty
        if isinstance(value, str) and "," in value:
            items = [x.strip() for x in value.split(",") if x.strip()]
            return items if items else default_if_empty
        return value

    # --- CORS ---
    origins = _csv(app.config.get("CORS_ORIGINS", "*"), "*")
    allow_headers = _csv(app.config.get("CORS_ALLOW_HEADERS"), ["Authorization", "Content-Type"])
    expose_headers = _csv(app.config.get("CORS_EXPOSE_HEADERS"), ["Content-Type"])

    cors.init_app(app, resources={
        r"/api/*": {
            "origins": origins,
            "allow_headers": allow_headers,
            "expose_headers": expose_headers,
            "supports_credentials": False,
        }
    })

    # Limiter reads RATELIMIT_* from app.config
    limiter.init_app(app)

    # models must be imported before create_all / migrations
    from .users import models as users_models  # noqa: F401
    from .notes import models as notes_models  # noqa: F401
    from .trash import models as trash_models  # noqa: F401

    register_error_handlers(app)

    @app.after_request
    def set_security_headers(resp):
        # JSON API only: no HTML is ever served
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'; base-uri 'none'"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "no-referrer"

        if (env == "production" or app.config.get("ENFORCE_HTTPS")) and (
            request.is_secure or request.headers.get("X-Forwarded-Proto", "") == "https"
        ):
            resp.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains; preload"

        return resp

    @app.errorhandler(RateLimitExceeded)
    def handle_rate_limit(e):
        return jsonify({"error": {"code": "rate_limited", "message": "Rate limit exceeded.", "details": {}}}), 429

    # --- Blueprints ---
    from .auth.routes import bp as auth_bp
    app.register_blueprint(auth_bp, url_prefix="/api/v1/auth")

    from .notes.routes import bp as notes_bp
    app.register_blueprint(notes_bp, url_prefix="/api/v1/notes")

    from .trash.routes import bp as trash_bp
    app.register_blueprint(trash_bp, url_prefix="/api/v1/trashed-notes")

    from .docs.routes import bp as docs_bp
    app.register_blueprint(docs_bp)

    notes_limit = lambda: current_app.config.get("RATELIMIT_NOTES", "120/minute")  # noqa: E731
    limiter.limit(notes_limit)(notes_bp)
    limiter.limit(notes_limit)(trash_bp)

    @app.get("/healthz")
    def healthz():
        db_status = "up"
        try:
            with db.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception:
            db_status = "down"
        return jsonify({
            "status": "ok",
            "service": "notebin",
            "env": env,
            "db": db_status
        })

    @app.get("/readyz")
    def readyz():
        status = {"db": "down", "redis": "n/a"}
        ok = True

        try:
            with db.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            status["db"] = "up"
        except Exception:
            ok = False

        # Redis only when the limiter stores its counters there
        try:
            uri = app.config.get("RATELIMIT_STORAGE_URI", "memory://")
            if uri.startswith(("redis://", "rediss://")):
                import redis
                redis.from_url(uri).ping()
                status["redis"] = "up"
        except Exception:
            ok = False
            status["redis"] = "down"

        status["status"] = "ok" if ok else "error"
        return jsonify(status), (200 if ok else 503)

    return app
