# -*- coding: utf-8 -*-
from typing import Optional


class GiftError(ValueError):
    """Base class for every parse/export failure. Always fatal to the call."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"{message} (question at line {line})"
        super().__init__(message)


class BraceMismatch(GiftError):
    pass


class InsufficientAlternatives(GiftError):
    pass


class MalformedNumeric(GiftError):
    pass


class MissingSeparator(GiftError):
    pass


class UnsupportedVariant(GiftError):
    pass
