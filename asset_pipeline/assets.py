from pathlib import Path
from typing import Dict, List

from .config import SourceConfig

SUPPORTED_EXTENSIONS = ("jpeg", "jpg", "png", "webp", "tif", "tiff")


def source_image_dir(content_path: Path, source: SourceConfig) -> Path:
    return content_path / "sources" / source.dir_name / source.images.path


def prepare_output_dir(output_path: Path, source: SourceConfig) -> Path:
    """Ensure `output_path/<images.name>` exists and return it."""
    out_dir = output_path / source.images.name
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir


def discover_image_assets(content_path: Path, source: SourceConfig) -> List[Path]:
    """
    List the images to process for a source.

    Only files directly inside the configured image folder are considered
    (no recursion). Extensions are matched case-sensitively against
    SUPPORTED_EXTENSIONS, so `photo.PNG` is ignored just like `notes.txt`.
    Sources without an image spec, or whose folder does not exist, yield
    an empty list.
    """
    if source.images is None:
        return []

    image_dir = source_image_dir(content_path, source)
    if not image_dir.is_dir():
        return []

    assets: List[Path] = []
    for path in image_dir.iterdir():
        if not path.is_file():
            continue
        if path.suffix[1:] not in SUPPORTED_EXTENSIONS:
            continue
        assets.append(path.resolve())

    return sorted(assets)


def group_by_stem(assets: List[Path]) -> Dict[str, List[Path]]:
    """
    Group assets by filename stem.

    Assets sharing a stem (`photo.jpg` and `photo.png`) write the same
    secondary file, so each group must be processed one file at a time.
    """
    groups: Dict[str, List[Path]] = {}
    for asset in assets:
        groups.setdefault(asset.stem, []).append(asset)
    return groups
