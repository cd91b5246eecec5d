"""
Errors
======

Exceptions raised by the round and its collaborators.
"""

from __future__ import annotations


class HandBounceError(Exception):
    """Base class for game errors."""


class AcquisitionError(HandBounceError):
    """The hand tracker could not be initialized (e.g. no camera access)."""


class RoundStateError(HandBounceError, RuntimeError):
    """A command was issued in a phase that does not accept it."""
