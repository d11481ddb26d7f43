"""Exceptions raised by the pipeline.

Only :class:`InputError` and its subclasses end a run without results; their
message is shown to the user as-is. Network trouble during a harvest is never
raised, it degrades to empty data instead.
"""
from __future__ import annotations


class InputError(ValueError):
    """The caller's file or search criteria cannot be used."""


class EmptyInput(InputError):
    def __init__(self, message: str = "Please provide a non-empty CV file.") -> None:
        super().__init__(message)


class UnsupportedFormat(InputError):
    def __init__(self, extension: str = "") -> None:
        self.extension = extension
        super().__init__("Unsupported CV format. Please upload PDF, DOCX, or TXT.")


class MissingKeywords(InputError):
    def __init__(self, message: str = "Enter a search keyword to target relevant roles.") -> None:
        super().__init__(message)


class ExtractionFailure(InputError):
    """A supported format could not be decoded into text."""


class RunCancelled(RuntimeError):
    """The caller cancelled an in-flight run."""
