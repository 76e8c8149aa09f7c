"""Copying static assets into the staging directory and publishing it."""

import shutil
from pathlib import Path

from .exceptions import StaticCopyException


def copy_tree(src: Path, dst: Path) -> None:
    """
    Recursively copy the contents of `src` into `dst`.

    Existing files in `dst` are overwritten and files not present in `src`
    are left alone.
    """
    try:
        if not src.is_dir():
            raise FileNotFoundError(f"Source directory does not exist: {src}")
        dst.mkdir(parents=True, exist_ok=True)
        shutil.copytree(src, dst, dirs_exist_ok=True)
    except OSError as exc:
        raise StaticCopyException(src, dst, exc) from exc


def copy_static_assets(
    raw_asset_path: Path,
    raw_content_asset_path: Path,
    output_path: Path,
) -> None:
    """
    Prepare the staging directory.

    The content assets are copied second, so they win on name collisions.
    """
    try:
        output_path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StaticCopyException(raw_asset_path, output_path, exc) from exc

    copy_tree(raw_asset_path, output_path)
    copy_tree(raw_content_asset_path, output_path)


def publish_assets(output_path: Path, publish_path: Path) -> None:
    copy_tree(output_path, publish_path)
