"""
Resizing and re-encoding of a single image.

The quality setting applies to the lossy encoders (JPEG, WebP). PNG output
is written losslessly with `optimize=True` rather than palette-quantized,
and TIFF output is written uncompressed with no quality setting.
"""

import asyncio
from pathlib import Path
from typing import Tuple

from PIL import Image

from .config import TranscodeOptions
from .exceptions import ImageProcessingException
from .results import ProcessedImagePair


Size = Tuple[int, int]

# Modes the WebP encoder accepts as-is.
_WEBP_MODES = ("RGB", "RGBA")

# Encoder options for formats that ignore or reject a quality setting.
_LOSSLESS_PARAMS = {
    "PNG": {"optimize": True},
    "TIFF": {},
}


def compute_target_size(width: int, height: int, max_width: int) -> Size:
    """
    Scale (width, height) down to at most `max_width` wide, keeping the
    aspect ratio. Images are never upscaled.
    """
    target_w = min(max_width, width)
    if target_w == width:
        return width, height
    target_h = max(1, round(height * target_w / width))
    return target_w, target_h


def resize_to_width(img: Image.Image, max_width: int) -> Image.Image:
    """
    Resize to the target width with Lanczos resampling.

    A resize is always performed, even when the size is unchanged, so the
    result is a loaded, independent image ready for re-encoding.
    """
    size = compute_target_size(img.width, img.height, max_width)
    return img.resize(size, Image.LANCZOS)


def _prepare_for_webp(img: Image.Image) -> Image.Image:
    if img.mode in _WEBP_MODES:
        return img.copy()
    has_alpha = "A" in img.getbands() or "transparency" in img.info
    return img.convert("RGBA" if has_alpha else "RGB")


def _load_resized(asset: Path, max_width: int) -> Tuple[Image.Image, str]:
    # Image.open only parses the header; pixels are decoded by resize().
    with Image.open(asset) as img:
        fmt = img.format
        if not fmt:
            raise ValueError(f"Unrecognised image format for {asset.name}")
        return resize_to_width(img, max_width), fmt


def _save(img: Image.Image, destination: Path, fmt: str, quality: int) -> Path:
    params = _LOSSLESS_PARAMS.get(fmt, {"quality": quality})
    img.save(destination, format=fmt, **params)
    return destination


def _save_secondary(img: Image.Image, destination: Path, fmt: str, quality: int) -> Path:
    return _save(_prepare_for_webp(img), destination, fmt, quality)


async def process_image_asset(
    asset: Path,
    out_dir: Path,
    options: TranscodeOptions = TranscodeOptions(),
) -> ProcessedImagePair:
    """
    Transcode one image into `out_dir`.

    Writes `<name>.<ext>` re-encoded in the detected source format and
    `<stem>.<secondary ext>` in the secondary format, both resized to at
    most `options.max_width` wide. The two encodes run concurrently in
    worker threads; the secondary one converts to its own copy first.
    Any failure raises ImageProcessingException with the original error
    attached.
    """
    primary_path = out_dir / asset.name
    secondary_path = out_dir / f"{asset.stem}.{options.secondary_extension}"

    try:
        resized, fmt = await asyncio.to_thread(_load_resized, asset, options.max_width)
        writes = [
            asyncio.to_thread(
                _save_secondary,
                resized,
                secondary_path,
                options.secondary_format,
                options.quality,
            )
        ]
        # A source already in the secondary extension maps both outputs to
        # one path; write it once, in the secondary format.
        if primary_path != secondary_path:
            writes.append(
                asyncio.to_thread(_save, resized, primary_path, fmt, options.quality)
            )
        await asyncio.gather(*writes)
    except Exception as exc:
        raise ImageProcessingException(asset, exc) from exc

    return ProcessedImagePair(
        source=asset,
        primary=primary_path,
        secondary=secondary_path,
        size=resized.size,
    )
