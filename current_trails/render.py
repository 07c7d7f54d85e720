"""
Render sink for particle trails.

Each tick produces, per bin, a set of line segments and an opacity. The
renderer keeps the last few frames and fades older ones, which stands in for
painting translucent sea over the canvas between frames.
"""

from collections import deque
from typing import List, Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.colors import to_rgb
from matplotlib.patches import Circle

from .binning import Bin
from .config import TrailConfig
from .mask import VisibilityMask
from .projection import OrthographicProjection
from .scheme import ColorScheme, scheme_for


def bin_segments(
    bins: Sequence[Bin],
    mask: Optional[VisibilityMask] = None
) -> List[Tuple[np.ndarray, float]]:
    """
    Convert bins into drawable segments.

    Args:
        bins: Bins ordered low -> high
        mask: If given, drop segments with an endpoint off the globe

    Returns:
        List of (segments, opacity) with segments shaped (n, 2, 2)
    """
    frame = []
    for b in bins:
        segments = [
            p.segment for p in b.particles
            if mask is None or (mask.is_visible(p.x, p.y) and mask.is_visible(p.xt, p.yt))
        ]
        frame.append((np.asarray(segments, dtype=float).reshape(-1, 2, 2), b.alpha))
    return frame


class TrailRenderer:
    """
    Draw fading particle trails over an orthographic globe with matplotlib.
    """

    def __init__(
        self,
        projection: OrthographicProjection,
        config: Optional[TrailConfig] = None,
        scheme: Optional[ColorScheme] = None,
        ax=None,
        dpi: int = 100
    ):
        self.config = config or TrailConfig()
        self.projection = projection
        self.scheme = scheme or scheme_for(self.config.dark_mode)
        self.width = self.config.width
        self.height = self.config.height
        self.history = deque(maxlen=self.config.trail_length)

        self.mask = None
        if self.config.cull_hidden:
            self.mask = VisibilityMask(projection, self.width, self.height)
            self.mask.build()

        if ax is None:
            self.fig, self.ax = plt.subplots(
                figsize=(self.width / dpi, self.height / dpi), dpi=dpi
            )
        else:
            self.fig, self.ax = ax.figure, ax

        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)  # screen y grows downward
        self.ax.set_aspect("equal")
        self.ax.set_axis_off()
        self.fig.subplots_adjust(left=0, right=1, bottom=0, top=1)

        self.globe = Circle(
            self.projection.translate, self.projection.scale, zorder=0
        )
        self.ax.add_patch(self.globe)

        self.lines = LineCollection(
            [], linewidths=self.config.line_width, zorder=2
        )
        self.ax.add_collection(self.lines)
        self.apply_scheme(self.scheme)

    def apply_scheme(self, scheme: ColorScheme):
        """Switch between light and dark colors."""
        self.scheme = scheme
        self.fig.set_facecolor(scheme.sea)
        self.ax.set_facecolor(scheme.sea)
        self.globe.set_facecolor(scheme.sea)
        self.globe.set_edgecolor("none")

    def clear(self):
        """Forget all trails."""
        self.history.clear()
        self.lines.set_segments([])

    def draw(self, bins: Sequence[Bin]):
        """
        Add this tick's bins and refresh the trail collection.

        Returns:
            The artists changed, for FuncAnimation
        """
        self.history.append(bin_segments(bins, self.mask))

        trail_rgb = to_rgb(self.scheme.trail)
        keep = 1.0 - self.scheme.fade
        n_frames = len(self.history)

        all_segments = []
        colors = []
        # oldest frame first, low -> high bins within a frame
        for index, frame in enumerate(self.history):
            age = n_frames - 1 - index
            for segments, alpha in frame:
                if len(segments) == 0:
                    continue
                all_segments.append(segments)
                rgba = (*trail_rgb, alpha * keep ** age)
                colors.append(np.tile(rgba, (len(segments), 1)))

        if all_segments:
            self.lines.set_segments(np.concatenate(all_segments))
            self.lines.set_color(np.concatenate(colors))
        else:
            self.lines.set_segments([])
        return [self.lines]

    def save_frame(self, filename: str):
        """Save the current frame as PNG."""
        self.fig.savefig(filename, dpi=self.fig.dpi, facecolor=self.fig.get_facecolor())

    def close(self):
        plt.close(self.fig)
