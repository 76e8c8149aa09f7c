"""
Asset pipeline package for the site build.

Modules:
- config: settings file loading and the configuration types
- staging: static asset copy and production publish
- assets: image discovery per content source
- render: resizing and dual-format re-encoding of a single image
- core: pipeline orchestration
- results / exceptions: run reporting and error types
- log: loguru sink setup
"""

from .config import Settings, load_settings
from .core import AssetSerializer
from .results import SerializationReport

__all__ = ["AssetSerializer", "SerializationReport", "Settings", "load_settings"]
