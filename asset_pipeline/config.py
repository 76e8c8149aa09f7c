import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .exceptions import ConfigurationException


PRODUCTION_ENV = "PRODUCTION"
DEFAULT_ENV = "DEVELOPMENT"
ENV_VARIABLE = "ASSET_PIPELINE_ENV"

MAX_WIDTH = 800
OUTPUT_QUALITY = 80
SECONDARY_FORMAT = "WEBP"

_REQUIRED_PATH_KEYS = {
    "rawAssetPath": "raw_asset_path",
    "rawContentAssetPath": "raw_content_asset_path",
    "assetPath": "asset_path",
    "rawContentPath": "raw_content_path",
    "staticAssetPath": "static_asset_path",
}


@dataclass(frozen=True)
class ImageSpec:
    # Output subdirectory under the asset path.
    name: str
    # Folder, relative to the source directory, scanned for images.
    path: str


@dataclass(frozen=True)
class SourceConfig:
    dir_name: str
    images: Optional[ImageSpec] = None


@dataclass(frozen=True)
class PathSettings:
    raw_asset_path: Path
    raw_content_asset_path: Path
    asset_path: Path
    raw_content_path: Path
    static_asset_path: Path
    static_root: Path = Path("static")

    @property
    def publish_path(self) -> Path:
        return self.static_root / self.static_asset_path

    def resolved(self, root: Path) -> "PathSettings":
        """Return a copy with every path made absolute against `root`."""
        root = root.resolve()

        def _abs(p: Path) -> Path:
            return (root / p).resolve()

        return PathSettings(
            raw_asset_path=_abs(self.raw_asset_path),
            raw_content_asset_path=_abs(self.raw_content_asset_path),
            asset_path=_abs(self.asset_path),
            raw_content_path=_abs(self.raw_content_path),
            # Kept relative so it nests under the static root.
            static_asset_path=self.static_asset_path,
            static_root=_abs(self.static_root),
        )


@dataclass(frozen=True)
class TranscodeOptions:
    max_width: int = MAX_WIDTH
    quality: int = OUTPUT_QUALITY
    secondary_format: str = SECONDARY_FORMAT

    @property
    def secondary_extension(self) -> str:
        return self.secondary_format.lower()


@dataclass
class Settings:
    paths: PathSettings
    sources: List[SourceConfig] = field(default_factory=list)
    env: str = DEFAULT_ENV
    transcode: TranscodeOptions = field(default_factory=TranscodeOptions)

    @property
    def is_production(self) -> bool:
        return self.env == PRODUCTION_ENV


def parse_source_config(data: Dict) -> SourceConfig:
    """
    Build a SourceConfig from a raw config entry.

    An `images` block missing either `name` or `path` (or with empty values)
    is treated as absent, so the source is skipped by the image stage. The
    same applies when `dirName` is missing, since there is no source folder
    to scan.
    """
    dir_name = str(data.get("dirName") or "")
    images = data.get("images") or {}
    image_spec: Optional[ImageSpec] = None
    if dir_name and isinstance(images, dict) and images.get("name") and images.get("path"):
        image_spec = ImageSpec(name=str(images["name"]), path=str(images["path"]))

    return SourceConfig(dir_name=dir_name, images=image_spec)


def parse_source_configs(data) -> List[SourceConfig]:
    """Parse the `configs` list, dropping entries that are not objects."""
    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigurationException(
            f"`configs` must be a list of source objects, got {type(data).__name__}"
        )
    return [parse_source_config(cfg) for cfg in data if isinstance(cfg, dict)]


def parse_path_settings(data: Dict) -> PathSettings:
    missing = [key for key in _REQUIRED_PATH_KEYS if not data.get(key)]
    if missing:
        raise ConfigurationException(
            f"Missing required path settings: {', '.join(sorted(missing))}"
        )

    kwargs = {attr: Path(data[key]) for key, attr in _REQUIRED_PATH_KEYS.items()}
    if data.get("staticRoot"):
        kwargs["static_root"] = Path(data["staticRoot"])
    return PathSettings(**kwargs)


def parse_transcode_options(data: Optional[Dict]) -> TranscodeOptions:
    data = data or {}
    return TranscodeOptions(
        max_width=int(data.get("maxWidth", MAX_WIDTH)),
        quality=int(data.get("quality", OUTPUT_QUALITY)),
    )


def resolve_env(explicit: Optional[str], file_value: Optional[str]) -> str:
    """
    Pick the environment mode.

    Precedence: explicit value, then the ASSET_PIPELINE_ENV variable,
    then the value from the settings file, then the default.
    """
    return explicit or os.environ.get(ENV_VARIABLE) or file_value or DEFAULT_ENV


def load_settings(
    path: Path,
    root: Optional[Path] = None,
    env: Optional[str] = None,
) -> Settings:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise ConfigurationException(f"Settings file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationException(f"Settings file {path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationException(f"Settings file {path} must contain a JSON object")

    paths = parse_path_settings(data.get("paths") or {})
    root = root if root is not None else Path.cwd()

    return Settings(
        paths=paths.resolved(root),
        sources=parse_source_configs(data.get("configs")),
        env=resolve_env(env, data.get("env")),
        transcode=parse_transcode_options(data.get("transcode")),
    )
