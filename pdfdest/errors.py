"""Errors raised by destination handling.

Malformed descriptors are not errors; they resolve to partially or fully
empty targets. These exceptions cover defects in the caller's object graph
and unreadable input files.
"""


class DestinationError(Exception):
    """Base class for destination errors."""


class DestinationCycleError(DestinationError):
    """A destination node was asked to resolve itself while already resolving."""


class DocumentLoadError(DestinationError):
    """A document description could not be read or parsed."""
