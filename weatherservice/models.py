from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class Message(BaseModel):
    """Bare outcome envelope."""

    success: bool


class DataMessage(Message):
    data: Any = None


class ErrorMessage(Message):
    """Envelope for rejected requests; ``status`` mirrors the HTTP code."""

    success: bool = False
    status: int
    error: str
