"""Matplotlib rendering of turtle paths."""

from __future__ import annotations

# Standard library
from pathlib import Path as FilePath

# Third-party libraries
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection

# Local libraries
from lsystems.geometry.primitives import Path

# Global constants
DPI = 300


def draw_path(
    path: Path,
    title: str = "L-System Turtle Path",
    save_file: FilePath | str | None = None,
    color: str = "black",
    linewidth: float = 0.5,
) -> None:
    """Draw the path with equal axis scaling.

    Saved at ``DPI`` when ``save_file`` is given, shown interactively
    otherwise.
    """
    fig, ax = plt.subplots()
    segments = path.to_array()
    ax.add_collection(LineCollection(segments, colors=color, linewidths=linewidth))

    bounds = path.bounds()
    if bounds is not None:
        pad = 0.05 * max(bounds.width, bounds.height, 1.0)
        ax.set_xlim(bounds.min_x - pad, bounds.max_x + pad)
        ax.set_ylim(bounds.min_y - pad, bounds.max_y + pad)
    ax.set_aspect("equal")
    ax.set_axis_off()
    ax.set_title(title)

    if save_file is not None:
        fig.savefig(save_file, dpi=DPI, bbox_inches="tight")
    else:
        plt.show()
    plt.close(fig)
