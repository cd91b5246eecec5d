"""
Hand Tracking
=============

Seam between the round and an external hand detector. A detector is set up
once, then pushes a fresh list of hand positions on every detection cycle.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional, Sequence

from handbounce.bounce_core.entities import Hand, HandLike, to_hand
from handbounce.bounce_core.errors import AcquisitionError

HandCallback = Callable[[Sequence[HandLike]], None]


class HandTracker(ABC):
    """
    Base class for hand detectors.

    Subclasses implement `_setup` (acquire the camera, load the model, ...)
    and report failure by returning False or raising AcquisitionError.
    """

    def __init__(self):
        self._callback: Optional[HandCallback] = None
        self._ready = False
        self._detecting = False

    @property
    def is_ready(self) -> bool:
        """True once setup has succeeded."""
        return self._ready

    @property
    def is_detecting(self) -> bool:
        return self._detecting

    def setup(self, on_hands: HandCallback) -> bool:
        """
        Initialize the detector.

        Args:
            on_hands: Called with each new hand list.

        Returns:
            True on success.

        Raises:
            AcquisitionError: If the detector cannot be initialized. Other
                backend failures (camera I/O, model loading) are re-raised
                as AcquisitionError.
        """
        self._callback = on_hands
        try:
            ready = self._setup()
        except AcquisitionError:
            raise
        except Exception as e:
            raise AcquisitionError(f"{type(e).__name__}: {e}") from e
        self._ready = bool(ready)
        return self._ready

    @abstractmethod
    def _setup(self) -> bool:
        """Acquire detector resources."""

    def start_detection(self) -> None:
        self._detecting = True

    def stop_detection(self) -> None:
        self._detecting = False

    def publish(self, hands: Iterable[HandLike]) -> None:
        """Deliver a detection result to the round."""
        if self._callback is not None and self._detecting:
            self._callback(list(hands))


class StaticHandTracker(HandTracker):
    """
    Tracker that always reports the same hands.

    Useful for demos and tests; `available=False` simulates a missing
    camera.
    """

    def __init__(self, hands: Iterable[HandLike] = (), available: bool = True):
        super().__init__()
        self._hands: List[Hand] = [to_hand(h) for h in hands]
        self._available = available

    def _setup(self) -> bool:
        return self._available

    def start_detection(self) -> None:
        super().start_detection()
        self.publish(self._hands)
