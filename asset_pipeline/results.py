from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .config import SourceConfig
from .exceptions import ImageProcessingException


@dataclass(frozen=True)
class ProcessedImagePair:
    """The two files written for one source image."""

    source: Path
    primary: Path
    secondary: Path
    size: Tuple[int, int]


@dataclass
class SourceResult:
    source: SourceConfig
    output_dir: Optional[Path]
    processed: List[ProcessedImagePair] = field(default_factory=list)
    failures: List[ImageProcessingException] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class SerializationReport:
    """
    Aggregate outcome of one pipeline run.

    A run with failures still carries every successful pair, so callers can
    tell partial success apart from a clean run.
    """

    sources: List[SourceResult] = field(default_factory=list)
    published: bool = False

    @property
    def processed(self) -> List[ProcessedImagePair]:
        return [pair for result in self.sources for pair in result.processed]

    @property
    def failures(self) -> List[ImageProcessingException]:
        return [failure for result in self.sources for failure in result.failures]

    @property
    def failed_paths(self) -> List[Path]:
        return [failure.asset_path for failure in self.failures]

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.sources)
