# api/responses.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from flask import current_app, g, has_request_context, jsonify, request
from werkzeug.datastructures import Headers

from api.envelope import Envelope, ErrorDetail, Page

# Business status codes. They mirror HTTP numbering on purpose.
CODE_SUCCESS = 200
CODE_BAD_REQUEST = 400
CODE_UNAUTHORIZED = 401
CODE_FORBIDDEN = 403
CODE_NOT_FOUND = 404
CODE_INTERNAL_ERROR = 500
CODE_SERVICE_UNAVAILABLE = 503

ERROR_CODE_INVALID_PARAM = "INVALID_PARAM"
ERROR_CODE_INVALID_TOKEN = "INVALID_TOKEN"
ERROR_CODE_TOKEN_EXPIRED = "TOKEN_EXPIRED"
ERROR_CODE_USER_NOT_FOUND = "USER_NOT_FOUND"
ERROR_CODE_USER_EXISTS = "USER_EXISTS"
ERROR_CODE_PASSWORD_WRONG = "PASSWORD_WRONG"
ERROR_CODE_ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
ERROR_CODE_ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
ERROR_CODE_INSUFFICIENT_PERMISSION = "INSUFFICIENT_PERMISSION"
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"

ERROR_CODES = frozenset({
    ERROR_CODE_INVALID_PARAM,
    ERROR_CODE_INVALID_TOKEN,
    ERROR_CODE_TOKEN_EXPIRED,
    ERROR_CODE_USER_NOT_FOUND,
    ERROR_CODE_USER_EXISTS,
    ERROR_CODE_PASSWORD_WRONG,
    ERROR_CODE_ACCOUNT_LOCKED,
    ERROR_CODE_ACCOUNT_INACTIVE,
    ERROR_CODE_INSUFFICIENT_PERMISSION,
    ERROR_CODE_INTERNAL_ERROR,
})

SUCCESS_MESSAGE = "success"
ERROR_MESSAGE = "error"

REQUEST_ID_KEY = "request_id"
REQUEST_ID_HEADER = "X-Request-ID"


@dataclass
class RequestContext:
    """
    Per-request inputs the builder reads.

    `values` is the ambient key/value store (Flask's `g` in a live request)
    and `headers` the inbound request headers.
    """

    values: Any = field(default_factory=dict)
    headers: Any = field(default_factory=dict)

    def __post_init__(self):
        # header names are case-insensitive
        if not isinstance(self.headers, Headers):
            self.headers = Headers(self.headers)

    @classmethod
    def current(cls) -> "RequestContext":
        if not has_request_context():
            return cls()
        return cls(values=g, headers=request.headers)

    def request_id(self) -> str:
        # ambient value wins over the inbound header, even when empty
        if REQUEST_ID_KEY in self.values:
            value = self.values.get(REQUEST_ID_KEY)
            return "" if value is None else str(value)
        return self.headers.get(REQUEST_ID_HEADER) or ""


def _now() -> int:
    return int(time.time())


def _emit(http_status: int, envelope: Envelope):
    return jsonify(envelope.to_dict()), http_status


def _context(ctx: Optional[RequestContext]) -> RequestContext:
    return ctx if ctx is not None else RequestContext.current()


# ---------- success ----------
def success(data: Any = None, *, ctx: Optional[RequestContext] = None):
    return success_with_message(SUCCESS_MESSAGE, data, ctx=ctx)


def success_with_message(message: str, data: Any = None, *, ctx: Optional[RequestContext] = None):
    envelope = Envelope(
        code=CODE_SUCCESS,
        message=message,
        data=data,
        timestamp=_now(),
        request_id=_context(ctx).request_id(),
    )
    return _emit(200, envelope)


def success_with_page(message: str, page: Page, *, ctx: Optional[RequestContext] = None):
    return success_with_message(message, page, ctx=ctx)


# ---------- errors ----------
def error(http_status: int, business_code: int, error_code: str, message: str,
          *, ctx: Optional[RequestContext] = None):
    return error_with_details(http_status, business_code, error_code, message, None, ctx=ctx)


def error_with_details(http_status: int, business_code: int, error_code: str, message: str,
                       details: Any, *, ctx: Optional[RequestContext] = None):
    """
    Render an error envelope at `http_status`.

    The envelope-level message is always "error"; the caller's message goes
    into `error.message`. `details` is dropped from the body when None.
    """
    request_id = _context(ctx).request_id()
    current_app.logger.log(
        logging.WARNING if http_status >= 500 else logging.DEBUG,
        "error response %s %s: %s", http_status, error_code, message,
    )
    envelope = Envelope(
        code=business_code,
        message=ERROR_MESSAGE,
        error=ErrorDetail(code=error_code, message=message, details=details),
        timestamp=_now(),
        request_id=request_id,
    )
    return _emit(http_status, envelope)


def bad_request(message: str, *, ctx: Optional[RequestContext] = None):
    return error(400, CODE_BAD_REQUEST, ERROR_CODE_INVALID_PARAM, message, ctx=ctx)


def bad_request_with_details(message: str, details: Any, *, ctx: Optional[RequestContext] = None):
    return error_with_details(400, CODE_BAD_REQUEST, ERROR_CODE_INVALID_PARAM, message, details, ctx=ctx)


def unauthorized(message: str, *, ctx: Optional[RequestContext] = None):
    return error(401, CODE_UNAUTHORIZED, ERROR_CODE_INVALID_TOKEN, message, ctx=ctx)


def forbidden(message: str, *, ctx: Optional[RequestContext] = None):
    return error(403, CODE_FORBIDDEN, ERROR_CODE_INSUFFICIENT_PERMISSION, message, ctx=ctx)


def not_found(message: str, *, ctx: Optional[RequestContext] = None):
    return error(404, CODE_NOT_FOUND, ERROR_CODE_USER_NOT_FOUND, message, ctx=ctx)


def internal_error(message: str, *, ctx: Optional[RequestContext] = None):
    return error(500, CODE_INTERNAL_ERROR, ERROR_CODE_INTERNAL_ERROR, message, ctx=ctx)


def business_error(error_code: str, message: str, *, ctx: Optional[RequestContext] = None):
    """Domain failure with a caller-chosen error code, always 400/400."""
    if error_code not in ERROR_CODES:
        current_app.logger.debug("free-form business error code %s", error_code)
    return error(400, CODE_BAD_REQUEST, error_code, message, ctx=ctx)
