"""
Light and dark color schemes for the globe and trails.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ColorScheme:
    name: str
    sea: str
    trail: str = "white"
    fade: float = 0.05  # opacity lost by a trail per frame


LIGHT = ColorScheme(name="light", sea="#4682b4")  # rgb(70,130,180)
DARK = ColorScheme(name="dark", sea="#404040")    # rgb(64,64,64)


def scheme_for(dark_mode: bool) -> ColorScheme:
    return DARK if dark_mode else LIGHT
