import pytest
import os
import logging


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    # minimal env so create_app() doesn't crash
    monkeypatch.setenv("APP_ENV", "development")
    # silence Sentry during tests
    monkeypatch.setattr("sentry_sdk.init", lambda *a, **k: None, raising=True)


@pytest.fixture
def app(_env):
    # import AFTER env + Sentry patch
    import app as app_module
    flask_app, _ = app_module.create_app(testing=True)
    flask_app.config.update(TRAP_HTTP_EXCEPTIONS=False)
    logging.disable(logging.CRITICAL)  # silence everything during tests
    yield flask_app
    logging.disable(logging.NOTSET)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def frozen_now(monkeypatch):
    """Pin envelope timestamps."""
    monkeypatch.setattr("api.responses._now", lambda: 1700000000, raising=True)
    return 1700000000


@pytest.fixture(autouse=True, scope="session")
def _disable_sentry_and_quiet_logs():
    # Prevent Sentry from initializing/sending in tests
    os.environ.setdefault("SENTRY_DSN", "")
    os.environ["SENTRY_DISABLED"] = "1"

    yield

    try:
        import sentry_sdk
        sentry_sdk.flush(0)
    except Exception:
        pass
