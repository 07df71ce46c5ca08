"""Scene-driven 2D game framework on pygame with shared textures, a scrolling camera and tile sprites."""

__version__ = "0.1.0"

__all__ = [
    "application",
    "camera",
    "graphics",
    "resources",
    "scene",
    "scene_manager",
    "sprites",
]