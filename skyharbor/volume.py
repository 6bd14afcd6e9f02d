"""State of the volume control panel: three sliders and their labels."""

from __future__ import annotations

from dataclasses import dataclass

from skyharbor.geometry import Vector2

SLIDER_MIN = 0.0
SLIDER_MAX = 100.0

PANEL_TITLE = "Volume Controls"
GROUP_TITLES = {
    "sfx": "SFXVolume",
    "music": "MusicVolume",
    "dialogue": "DialogueVolume",
}
PING_TEXT = "Ping"


@dataclass
class VolumeControlState:
    """Slider values for sound effects, music and dialogue, each 0 to 100."""

    anchor: Vector2 = Vector2(24.0, 24.0)
    sfx: float = 0.0
    music: float = 0.0
    dialogue: float = 0.0

    def set_slider(self, name: str, value: float) -> float:
        """Set a slider by name, clamped to its range; returns the stored value."""
        if name not in GROUP_TITLES:
            raise ValueError(f"unknown slider: {name!r}")
        clamped = max(SLIDER_MIN, min(SLIDER_MAX, float(value)))
        setattr(self, name, clamped)
        return clamped

    def labels(self) -> dict[str, str]:
        """Percentage text shown beside each slider, keyed by group title."""
        return {
            title: f"{getattr(self, name):.0f}%"
            for name, title in GROUP_TITLES.items()
        }