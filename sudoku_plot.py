# sudoku_plot.py
"""Visualization helper: render a grid to PNG, clues in bold black, solved digits in blue."""
from typing import Optional

import matplotlib.pyplot as plt

from sudoku import GRID_SIZE, BOX_SIZE, Grid, get_logger

# ----------------------------
# Config
# ----------------------------
DEFAULT_PNG_PATH = "sudoku_solved.png"
CLUE_COLOR = "black"
SOLVED_COLOR = "#1f78b4"
FIGURE_SIZE = (6, 6)
DPI = 150

logger = get_logger()


def plot_grid(grid: Grid, out_png: str = DEFAULT_PNG_PATH, clues: Optional[Grid] = None, title: Optional[str] = None) -> str:
    """
    Draw `grid` and save it to `out_png`. Cells non-zero in `clues` are drawn
    as givens; everything else filled in counts as solved. Returns the path.
    """
    fig, ax = plt.subplots(1, 1, figsize=FIGURE_SIZE)

    # thin cell lines, thick box lines
    for line_index in range(GRID_SIZE + 1):
        line_width = 2.5 if line_index % BOX_SIZE == 0 else 0.6
        ax.plot([line_index, line_index], [0, GRID_SIZE], color="black", linewidth=line_width)
        ax.plot([0, GRID_SIZE], [line_index, line_index], color="black", linewidth=line_width)

    for row_index in range(GRID_SIZE):
        for column_index in range(GRID_SIZE):
            value = grid[row_index][column_index]
            if not value:
                continue
            is_clue = clues is not None and clues[row_index][column_index] != 0
            ax.text(
                column_index + 0.5,
                GRID_SIZE - row_index - 0.5,
                str(value),
                ha="center",
                va="center",
                fontsize=18,
                fontweight="bold" if is_clue else "normal",
                color=CLUE_COLOR if is_clue else SOLVED_COLOR,
            )

    ax.set_xlim(0, GRID_SIZE)
    ax.set_ylim(0, GRID_SIZE)
    ax.set_aspect("equal")
    ax.set_axis_off()
    if title:
        plt.title(title)
    plt.tight_layout()
    fig.savefig(out_png, dpi=DPI)
    plt.close(fig)
    logger.info("Saved grid to %s", out_png)
    return out_png
