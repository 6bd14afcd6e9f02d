"""Frame-by-frame game logic: geometry, flight, a one-button flyer, a volume panel, two entity-component stores and a tile platformer."""

__version__ = "0.1.0"

__all__ = [
    "colorfade",
    "components",
    "ecs",
    "flappy",
    "flight",
    "geometry",
    "platformer",
    "volume",
]