"""Capturing the desktop."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image


class ScreenshotError(Exception):
    """The desktop could not be captured."""


@dataclass(frozen=True)
class Screenshot:
    """Decoded RGBA pixels of a captured screen."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("screenshot dimensions must not be negative")
        if len(self.pixels) != self.width * self.height * 4:
            raise ValueError(
                f"expected {self.width * self.height * 4} bytes of RGBA pixels, "
                f"got {len(self.pixels)}"
            )

    @classmethod
    def from_image(cls, image: Image.Image) -> Screenshot:
        """Build a screenshot from any Pillow image, converting to RGBA."""
        rgba = image.convert("RGBA")
        width, height = rgba.size
        return cls(width, height, rgba.tobytes())

    def to_image(self) -> Image.Image:
        """The screenshot as a Pillow RGBA image."""
        return Image.frombytes("RGBA", (self.width, self.height), self.pixels)


def take_screenshot() -> Screenshot:
    """Capture the screen and return its pixels."""
    try:
        from PIL import ImageGrab

        image = ImageGrab.grab()
    except (OSError, ImportError) as err:
        raise ScreenshotError(f"Could not take a screenshot: {err}") from err
    if image is None:
        raise ScreenshotError("Could not take a screenshot: no image was captured")
    return Screenshot.from_image(image)