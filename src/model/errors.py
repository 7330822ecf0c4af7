from __future__ import annotations


class BethYwError(Exception):
    """Base class for errors raised while importing or querying statistics."""


class NotFoundError(BethYwError, LookupError):
    """A lookup by key (area code, measure codename, language, year) missed."""


class InvalidArgumentError(BethYwError, ValueError):
    pass


class MalformedSourceError(BethYwError, RuntimeError):
    """A dataset stream could not be parsed (bad header, bad value, bad layout)."""
