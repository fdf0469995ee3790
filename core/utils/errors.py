"""Custom exceptions for core logic."""

from __future__ import annotations

from typing import Literal

TemplateSection = Literal["front_matter", "body", "filename"]


class UnsupportedRecordError(TypeError):
    """Raised when a parsed invite is not a meeting or appointment."""


class TemplateRenderError(Exception):
    """Raised when a template section cannot be rendered."""

    def __init__(self, message: str, *, section: TemplateSection | None = None) -> None:
        super().__init__(message)
        self.section = section


class PromptInFlightError(RuntimeError):
    """Raised when an occurrence prompt is requested while another one is pending."""
