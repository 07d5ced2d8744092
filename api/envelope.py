# api/envelope.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, Sequence, TypeVar

T = TypeVar("T")


class PageSizeError(ValueError):
    """Raised when a page is requested with a non-positive page size."""


@dataclass
class ErrorDetail:
    code: str
    message: str
    details: Any = None

    def to_dict(self) -> Dict[str, Any]:
        body = {"code": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = _to_wire(self.details)
        return body

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ErrorDetail":
        return cls(
            code=payload["code"],
            message=payload["message"],
            details=payload.get("details"),
        )


@dataclass
class Page(Generic[T]):
    items: Sequence[T]
    total: int
    page: int
    page_size: int
    total_pages: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "list": [_to_wire(item) for item in self.items],
            "total": self.total,
            "page": self.page,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
        }


def _to_wire(value: Any) -> Any:
    """Render Pages nested anywhere in a payload with their wire names."""
    if isinstance(value, Page):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: _to_wire(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_wire(v) for v in value]
    return value


def new_page(items: Sequence[T], total: int, page: int, page_size: int) -> Page[T]:
    """
    Build a Page for a list endpoint.

    `page` is not checked against the page count; a page past the end is
    returned as-is with whatever `items` the caller passed.
    """
    if page_size <= 0:
        raise PageSizeError(f"page_size must be greater than 0, got {page_size}")
    total_pages = (total + page_size - 1) // page_size
    return Page(
        items=items,
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
    )


@dataclass
class Envelope(Generic[T]):
    """
    Standard body for every /api/v1 JSON response.

    Success envelopes carry `data` and never `error`; error envelopes carry
    `error` and never `data`. `message` is the fixed "success"/"error"
    literal (or a caller override on success), separate from `error.message`.
    """

    code: int
    message: str
    timestamp: int
    data: Optional[T] = None
    error: Optional[ErrorDetail] = None
    request_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            body["data"] = _to_wire(self.data)
        if self.error is not None:
            body["error"] = self.error.to_dict()
        body["timestamp"] = self.timestamp
        if self.request_id:
            body["request_id"] = self.request_id
        return body

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Envelope[Any]":
        raw_error = payload.get("error")
        return cls(
            code=payload["code"],
            message=payload["message"],
            timestamp=payload["timestamp"],
            data=payload.get("data"),
            error=ErrorDetail.from_dict(raw_error) if raw_error is not None else None,
            request_id=payload.get("request_id") or "",
        )
