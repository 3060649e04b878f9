from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

FIGURE_DPI = 100


def figure_size(width: int, height: int, min_height: int = 0) -> tuple[float, float]:
    """Convert a pixel box to matplotlib inches at ``FIGURE_DPI``."""
    return (width / FIGURE_DPI, max(height, min_height) / FIGURE_DPI)


def save_figure(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(path, dpi=FIGURE_DPI)
    plt.close()
    return path
