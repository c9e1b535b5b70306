"""
Image buffer that the renderer draws into.

An image is a 2D grid of 8-bit RGBA pixels with (0, 0) at the top left
corner. Pixels are stored in a numpy array of shape (height, width, 4) so the
buffer can be handed straight to Pillow for encoding.
"""

from __future__ import annotations
from pathlib import Path
from typing import BinaryIO, Union

import numpy as np
from PIL import Image as PILImage

from .color import FRGBA, RGBA


class Image:
    """A 2D collection of RGBA pixels."""

    def __init__(self, width: int, height: int):
        """Create an empty image, filled with transparent black pixels.

        Args:
            width: Number of columns
            height: Number of rows
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._data = np.zeros((height, width, 4), dtype=np.uint8)

    def set(self, x: int, y: int, color: Union[RGBA, FRGBA]) -> None:
        """Set a single pixel.

        Args:
            x: Column, 0 is the left edge
            y: Row, 0 is the top edge
            color: The pixel color; FRGBA values are clamped and quantized

        Raises:
            IndexError: If (x, y) lies outside the image
        """
        self._check_bounds(x, y)
        if isinstance(color, FRGBA):
            color = RGBA.from_frgba(color)
        self._data[y, x] = color.as_tuple()

    def get(self, x: int, y: int) -> RGBA:
        """Read back a single pixel."""
        self._check_bounds(x, y)
        r, g, b, a = (int(c) for c in self._data[y, x])
        return RGBA(r, g, b, a)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) out of bounds for {self.width}x{self.height} image"
            )

    def to_array(self) -> np.ndarray:
        """Return the pixel data as a (height, width, 4) uint8 array (copy)."""
        return self._data.copy()

    def write_ppm(self, stream: BinaryIO) -> None:
        """Write this image in binary PPM (P6) format.

        PPM has no alpha channel, so alpha is dropped.
        """
        stream.write(b"P6\n")
        stream.write(f"{self.width} {self.height} 255\n".encode())
        stream.write(self._data[:, :, :3].tobytes())

    def to_pil(self) -> PILImage.Image:
        """Convert to a Pillow image in RGBA mode."""
        return PILImage.fromarray(self._data, 'RGBA')

    def write_png(self, target: Union[str, Path, BinaryIO]) -> None:
        """Write this image in PNG format."""
        self.to_pil().save(target, format='PNG')

    def save(self, filename: Union[str, Path]) -> None:
        """Save image to file.

        Args:
            filename: Output filename (extension determines format)
        """
        path = Path(filename)
        if path.suffix.lower() == '.ppm':
            with open(path, 'wb') as f:
                self.write_ppm(f)
        else:
            self.to_pil().save(path)

    def __repr__(self) -> str:
        return f"Image(width={self.width}, height={self.height})"
