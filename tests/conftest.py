import json
from pathlib import Path

import pytest
from PIL import Image

from asset_pipeline.config import PathSettings, Settings, SourceConfig, ImageSpec


def make_image(path: Path, size, fmt: str, mode: str = "RGB") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    color = (200, 80, 40, 255)[: len(mode)] if mode in ("RGB", "RGBA") else 128
    Image.new(mode, size, color=color).save(path, format=fmt)
    return path


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.delenv("ASSET_PIPELINE_ENV", raising=False)


@pytest.fixture
def site(tmp_path):
    """
    A minimal site tree:

    assets/logo.txt
    content/assets/favicon.txt
    content/sources/blog/images/{photo.png 1600x900, icon.jpg 400x300, notes.txt}
    """
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "logo.txt").write_text("logo")
    (tmp_path / "content" / "assets").mkdir(parents=True)
    (tmp_path / "content" / "assets" / "favicon.txt").write_text("favicon")

    image_dir = tmp_path / "content" / "sources" / "blog" / "images"
    make_image(image_dir / "photo.png", (1600, 900), "PNG")
    make_image(image_dir / "icon.jpg", (400, 300), "JPEG")
    (image_dir / "notes.txt").write_text("not an image")
    return tmp_path


@pytest.fixture
def image_dir(site) -> Path:
    return site / "content" / "sources" / "blog" / "images"


@pytest.fixture
def path_settings(site) -> PathSettings:
    return PathSettings(
        raw_asset_path=Path("assets"),
        raw_content_asset_path=Path("content/assets"),
        asset_path=Path("out"),
        raw_content_path=Path("content"),
        static_asset_path=Path("assets"),
    ).resolved(site)


@pytest.fixture
def blog_source() -> SourceConfig:
    return SourceConfig(dir_name="blog", images=ImageSpec(name="blog", path="images"))


@pytest.fixture
def settings(path_settings, blog_source) -> Settings:
    return Settings(paths=path_settings, sources=[blog_source])


@pytest.fixture
def settings_file(site) -> Path:
    data = {
        "env": "DEVELOPMENT",
        "paths": {
            "rawAssetPath": "assets",
            "rawContentAssetPath": "content/assets",
            "assetPath": "out",
            "rawContentPath": "content",
            "staticAssetPath": "assets",
        },
        "configs": [
            {"dirName": "blog", "images": {"name": "blog", "path": "images"}},
            {"dirName": "no-images"},
        ],
    }
    path = site / "settings.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
