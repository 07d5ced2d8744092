# config.py
import logging


class BaseConfig:
    LOG_LEVEL = logging.INFO
    PROPAGATE_EXCEPTIONS = False
    TRAP_HTTP_EXCEPTIONS = False
    SENTRY_TRACES_SAMPLE_RATE = 0.2  # avoid 100% in prod


class DevConfig(BaseConfig):
    DEBUG = True
    ENV_NAME = "development"
    LOG_LEVEL = logging.DEBUG
    PROPAGATE_EXCEPTIONS = True
    SENTRY_TRACES_SAMPLE_RATE = 1.0


class ProdConfig(BaseConfig):
    DEBUG = False
    ENV_NAME = "production"
    LOG_LEVEL = logging.INFO


class StagingConfig(BaseConfig):
    DEBUG = False
    ENV_NAME = "staging"
    LOG_LEVEL = logging.DEBUG


def config_for(env: str):
    """Map an APP_ENV/FLASK_ENV value to its config class."""
    env = (env or "production").lower()
    if env == "development":
        return DevConfig
    if env in ("production", "prod"):
        return ProdConfig
    if env == "staging":
        return StagingConfig
    raise RuntimeError(f"Unknown APP_ENV/FLASK_ENV value: {env!r}")
