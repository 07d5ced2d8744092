import os
import logging

from dotenv import load_dotenv, find_dotenv
from flask import Flask
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from api import create_api_bp, register_error_handlers
from api.responses import RequestContext
from config import config_for


# ---------- env ----------
load_dotenv(find_dotenv())


class RequestIdFilter(logging.Filter):
    """Stamp every record with the correlation id of the current request."""

    def filter(self, record: logging.LogRecord) -> bool:
        rid = RequestContext.current().request_id()
        record.request_id = rid or "-"
        return True


def _configure_logging(app: Flask) -> None:
    root = logging.getLogger()
    root.handlers[:] = []
    root.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    handler = logging.StreamHandler()
    handler.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    fmt = "%(asctime)s %(levelname)s %(name)s [%(request_id)s]: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))


def _before_send(event, hint):
    # drop request bodies and emails
    req = event.get("request") or {}
    if "data" in req:
        req["data"] = "[filtered]"
    user = event.get("user") or {}
    if "email" in user:
        user["email"] = "[filtered]"
    event["request"] = req
    event["user"] = user
    return event


def create_app(testing: bool = False) -> tuple[Flask, str]:
    app = Flask(__name__)
    app.config["TESTING"] = testing

    env = (os.getenv("APP_ENV") or os.getenv("FLASK_ENV") or "production").lower()
    cfg = config_for(env)
    app.config.from_object(cfg)

    # Don't initialize Sentry in tests (or when explicitly disabled)
    sentry_disabled = os.getenv("SENTRY_DISABLED") == "1"
    if (not testing) and (not sentry_disabled) and os.getenv("SENTRY_DSN"):
        sentry_sdk.init(
            dsn=os.getenv("SENTRY_DSN"),
            integrations=[FlaskIntegration(), LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)],
            traces_sample_rate=app.config["SENTRY_TRACES_SAMPLE_RATE"],
            environment=app.config["ENV_NAME"],
            send_default_pii=False,
            before_send=_before_send,
            shutdown_timeout=0,
        )

    _configure_logging(app)

    app.register_blueprint(create_api_bp())
    register_error_handlers(app)

    return app, app.config["ENV_NAME"]


app, ENV = create_app()

if __name__ == "__main__":
    app.run(debug=True)
