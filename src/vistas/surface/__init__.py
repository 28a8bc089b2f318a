from vistas.surface.grid import TAU, SurfaceGrid, SurfaceParams, surface_height
from vistas.surface.shading import floor_color, hex_to_rgb, mix, rgb_to_hex, sky_color

__all__ = [
    "TAU",
    "SurfaceGrid",
    "SurfaceParams",
    "surface_height",
    "floor_color",
    "hex_to_rgb",
    "mix",
    "rgb_to_hex",
    "sky_color",
]
