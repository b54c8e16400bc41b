"""Base decoder interface and the decoded line container."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

# Stands in for an empty or non-participating capture
EMPTY_VALUE = "-"


@dataclass(slots=True)
class DecodedLine:
    """Parallel, equal-length label and value lists extracted from one line."""

    labels: list[str] = field(default_factory=list)
    values: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.labels) != len(self.values):
            msg = f"labels and values differ in length: {len(self.labels)} != {len(self.values)}"
            raise ValueError(msg)

    def append(self, label: str, value: str | None) -> None:
        self.labels.append(label)
        self.values.append(value if value else EMPTY_VALUE)

    def as_pairs(self) -> list[tuple[str, str]]:
        return list(zip(self.labels, self.values, strict=True))


class LineDecoder(ABC):
    """Abstract base class for line decoders.

    A decoder turns one raw line into a DecodedLine, or returns None when
    the line does not fit its format. None is an expected outcome, not an
    error: heterogeneous logs routinely mix formats.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier for this decoder (e.g., 'regex')."""

    @abstractmethod
    def decode(self, raw: str) -> DecodedLine | None:
        """Decode a raw line, or return None if it does not match."""

    def validate(self) -> None:  # noqa: B027
        """Check the decoder is ready to parse. Raises ConfigurationError if not."""
