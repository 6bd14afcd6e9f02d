"""Colour cycling for centred title text."""

from __future__ import annotations

from dataclasses import dataclass

WIDTH = 960
HEIGHT = 540
CENTER_TEXT = "THIS IS THE CENTER TEXT"
FONT_SIZE = 20
_CHANNEL_MAX = 255


@dataclass
class ColorFader:
    """Raises red, then green, then blue to full, then lowers them back in the same order."""

    r: int = 0
    g: int = 0
    b: int = 0
    reverse: bool = False

    def step(self) -> None:
        """Advance the fade by one frame."""
        if not self.reverse:
            if self.r != _CHANNEL_MAX:
                self.r += 1
            elif self.g != _CHANNEL_MAX:
                self.g += 1
            elif self.b != _CHANNEL_MAX:
                self.b += 1
            else:
                self.reverse = True
        else:
            if self.r != 0:
                self.r -= 1
            elif self.g != 0:
                self.g -= 1
            elif self.b != 0:
                self.b -= 1
            else:
                self.reverse = False

    def color(self) -> tuple[int, int, int, int]:
        """The current colour as an opaque RGBA tuple."""
        return self.r, self.g, self.b, _CHANNEL_MAX


def _half(value: int) -> int:
    return int(value / 2)


def centered_text_x(window_width: int, text_width: int) -> int:
    """The x coordinate that centres text of the given width in the window."""
    return _half(window_width) - _half(text_width)