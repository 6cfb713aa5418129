# notebin/common/logging.py
import logging, sys, time, uuid
from pythonjsonlogger import jsonlogger
from flask import g, request

def setup_json_logging(app):
    # INFO by default, DEBUG when the app runs in debug mode
    level = logging.DEBUG if app.debug else logging.INFO
    root = logging.getLogger()
    root.handlers = []
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    fmt = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s "
        "%(request_id)s %(user_id)s %(method)s %(path)s %(status)s %(latency_ms)s"
    )
    handler.setFormatter(fmt)
    root.addHandler(handler)

def register_request_logging(app):
    @app.before_request
    def _assign_request_id_and_start_timer():
        g.request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        g._start_time = time.time()

    @app.after_request
    def _log_request(resp):
        latency = int((time.time() - getattr(g, "_start_time", time.time())) * 1000)

        resp.headers.setdefault("X-Request-Id", getattr(g, "request_id", "-"))

        user_id = getattr(g, "user_id", None)
        logging.getLogger("notebin.request").info(
            "http_request",
            extra={
                "request_id": getattr(g, "request_id", "-"),
                "user_id": str(user_id) if user_id else "-",
                "method": request.method,
                "path": request.path,
                "status": resp.status_code,
                "latency_ms": latency,
            },
        )
        return resp
