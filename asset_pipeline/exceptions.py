"""
Exception types raised by the asset pipeline.

Directory-level failures (configuration, static copy, publish) are fatal and
bubble up to the caller. Image-level failures are isolated per file and are
collected by the serializer instead of aborting the run.
"""

from pathlib import Path


class AssetPipelineException(Exception):
    """Base class for all asset pipeline errors."""

    pass


class ConfigurationException(AssetPipelineException):
    """Raised when the settings file is missing, unreadable or incomplete."""

    pass


class StaticCopyException(AssetPipelineException):
    """
    Raised when copying a directory tree fails.

    Covers both the initial copy into the staging directory and the final
    publish copy. The originating `OSError` is chained as `__cause__`.
    """

    def __init__(self, source: Path, destination: Path, cause: BaseException) -> None:
        self.source = source
        self.destination = destination
        self.cause = cause
        super().__init__(f"Failed to copy {source} to {destination}: {cause}")


class ImageProcessingException(AssetPipelineException):
    """
    Raised when a single image cannot be transcoded.

    Carries the failing asset path and the underlying error so that callers
    can report every failed file after the whole batch has settled.
    """

    def __init__(self, asset_path: Path, cause: BaseException) -> None:
        self.asset_path = asset_path
        self.cause = cause
        super().__init__(f"Failed to process {asset_path.name}: {cause}")
