"""
Force timeline visualization.

Static plot of both force-plate channels over time with the current cut
point marked, so an analyst can check where a trim will start before
exporting.

Engineering approach:
- Matplotlib for static plots
- Fixed force axis range so trials are visually comparable
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import matplotlib.pyplot as plt
import seaborn as sns

from series_io.parser import Series

logger = logging.getLogger(__name__)

# Set style
sns.set_style("whitegrid")
plt.rcParams['font.size'] = 10


def plot_force_timeline(
    series: Series,
    cursor_time: Optional[float],
    output_path: str,
    y_limits: Tuple[float, float] = (-500.0, 2000.0),
    title: str = "Force Data Analysis"
) -> str:
    """
    Plot both force channels with a cut-point marker.

    Args:
        series: Parsed force series
        cursor_time: Time of the cut marker (None = no marker)
        output_path: Path to save plot (PNG)
        y_limits: Force axis range in N
        title: Plot title

    Returns:
        Path to saved plot file
    """
    logger.info(f"Generating force timeline plot: {output_path}")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(16, 6))

    ax.plot(series.time, series.channel_a, color='blue', linewidth=0.5,
            label='Force Plate 1 (Fz)')
    ax.plot(series.time, series.channel_b, color='green', linewidth=0.5,
            label='Force Plate 2 (Fz)')

    if cursor_time is not None:
        ax.axvline(cursor_time, color='red', linewidth=2, label='Cut point')

    ax.set_ylim(*y_limits)
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Force (N)")
    ax.set_title(title, fontweight='bold', fontsize=12)
    ax.legend(loc='upper right', fontsize=8)
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)

    logger.info(f"✓ Force timeline saved: {output_path}")

    return str(output_path)
