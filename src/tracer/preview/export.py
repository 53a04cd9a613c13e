"""Image export utilities for rendered images.

Rendered images are linear RGBA floats in [0, 1]. For output the color
channels are encoded with the sRGB transfer function and the alpha channel
is scaled linearly, both to 8 bits.

Supported formats:
    - PNG (8-bit sRGBA via Pillow)

Example:
    >>> from src.tracer.core.integrator import get_image_numpy, render_image
    >>> from src.tracer.preview.export import save_png
    >>> render_image()
    >>> save_png(get_image_numpy(), "sphere.png")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

# Linear values below this threshold use the linear segment of the sRGB curve
SRGB_LINEAR_THRESHOLD = 0.0031308


def linear_to_srgb(values: npt.ArrayLike) -> npt.NDArray[np.uint8]:
    """Encode linear color values with the sRGB transfer function.

    Args:
        values: Linear color values; clipped to [0, 1].

    Returns:
        8-bit sRGB values of the same shape.
    """
    linear = np.clip(np.asarray(values, dtype=np.float64), 0.0, 1.0)
    srgb = np.where(
        linear < SRGB_LINEAR_THRESHOLD,
        12.92 * linear,
        1.055 * np.power(linear, 1.0 / 2.4) - 0.055,
    )
    return np.round(srgb * 255.0).astype(np.uint8)


def to_srgba_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a linear RGBA image to 8-bit sRGBA.

    Args:
        image: Linear image array of shape (H, W, 4).

    Returns:
        Array of shape (H, W, 4) with gamma-encoded color and linearly
        scaled alpha.

    Raises:
        ValueError: If the image is not (H, W, 4).
    """
    if image.ndim != 3 or image.shape[2] != 4:
        raise ValueError(f"Expected an RGBA image of shape (H, W, 4), got {image.shape}")

    out = np.empty(image.shape, dtype=np.uint8)
    out[..., :3] = linear_to_srgb(image[..., :3])
    out[..., 3] = np.round(np.clip(image[..., 3], 0.0, 1.0) * 255.0).astype(np.uint8)
    return out


def save_png(image: npt.NDArray[np.floating], filepath: str) -> None:
    """Save a linear RGBA image as an 8-bit sRGBA PNG file.

    Args:
        image: Linear image array of shape (H, W, 4), top row first.
        filepath: Output file path (should end in .png).
    """
    pil_image = PILImage.fromarray(to_srgba_uint8(image))
    pil_image.save(filepath)


def read_png(filepath: str) -> npt.NDArray[np.uint8]:
    """Read a PNG file as 8-bit sRGBA data.

    Args:
        filepath: Path of the PNG file.

    Returns:
        Array of shape (H, W, 4) with dtype uint8.
    """
    with PILImage.open(filepath) as pil_image:
        return np.asarray(pil_image.convert("RGBA"), dtype=np.uint8).copy()


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
