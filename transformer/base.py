"""Abstract base class for occurrence exporters."""

from abc import ABC, abstractmethod
from typing import Any

from timetable.models import Occurrence


class BaseTransformer(ABC):
    """Exports projected lecture occurrences to an output format.

    Implementations keep the result of the last ``transform`` call so that
    ``save`` can write it out.
    """

    @abstractmethod
    def transform(self, occurrences: list[Occurrence]) -> Any:
        """Render occurrences, one output entry per occurrence, in the given order.

        An empty list must still produce a valid, empty document rather
        than None, so that an empty week exports cleanly.
        """

    @abstractmethod
    def save(self, output_path: str) -> None:
        """Write the last transform result to output_path.

        Raises:
            RuntimeError: If transform() has not been called.
        """
