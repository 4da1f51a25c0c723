# sudoku_io.py
"""Text in, text out: a permissive puzzle reader and the grid printer."""
from typing import Iterable

import typer

from sudoku import GRID_SIZE, BOX_SIZE, Grid, SudokuSolver

# ----------------------------
# Config
# ----------------------------
# Characters that are layout only; anything else on a line is a cell.
SKIP_CHARACTERS = " -|+/\\\n\r\t"
EMPTY_CELL = "."
ROW_DIVIDER = "+---+---+---+"
COLUMN_DIVIDER = "|"


class MalformedPuzzleError(ValueError):
    """A clue contradicts clues already read (same digit twice in a row, column or box)."""

    def __init__(self, row: int, column: int, value: int):
        super().__init__(f"Clue {value} at row {row + 1}, column {column + 1} conflicts with earlier clues")
        self.row = row
        self.column = column
        self.value = value


# ----------------------------
# Reader
# ----------------------------
def read_puzzle(lines: Iterable[str]) -> SudokuSolver:
    """
    Build a solver from free-form text.

    Each line with at least one cell character is one row; digits 1-9 are
    clues, any other non-skipped character is an empty cell. At most nine
    cells per row and nine rows are read; the rest is ignored.
    """
    solver = SudokuSolver()
    row = 0
    for line in lines:
        column = 0
        for character in line:
            if character in SKIP_CHARACTERS:
                continue
            if "1" <= character <= "9":
                value = int(character)
                if not solver.force((row, column), value):
                    raise MalformedPuzzleError(row, column, value)
            column += 1
            if column == GRID_SIZE:
                break

        # A line specifies a row only if it holds data
        if column:
            row += 1
        if row == GRID_SIZE:
            break
    return solver


def parse_puzzle(text: str) -> SudokuSolver:
    return read_puzzle(text.splitlines())


def load_grid(grid: Grid) -> SudokuSolver:
    """Seed a solver from a 9x9 list grid (0 = empty)."""
    solver = SudokuSolver()
    for row, values in enumerate(grid[:GRID_SIZE]):
        for column, value in enumerate(values[:GRID_SIZE]):
            if value and not solver.force((row, column), value):
                raise MalformedPuzzleError(row, column, value)
    return solver


# ----------------------------
# Printer
# ----------------------------
def format_grid(solver: SudokuSolver) -> str:
    lines = []
    for row_index in range(GRID_SIZE):
        if row_index % BOX_SIZE == 0:
            lines.append(ROW_DIVIDER)
        row_str = ""
        for column_index in range(GRID_SIZE):
            if column_index % BOX_SIZE == 0:
                row_str += COLUMN_DIVIDER
            value = solver.value_at((row_index, column_index))
            row_str += str(value) if value else EMPTY_CELL
        lines.append(row_str + COLUMN_DIVIDER)
    lines.append(ROW_DIVIDER)
    return "\n".join(lines)


def print_grid(solver: SudokuSolver):
    typer.echo(format_grid(solver))
    typer.echo()


def serialize_grid(solver: SudokuSolver) -> str:
    """Return the grid as one 81-character string, 0 for empty cells."""
    return "".join(str(value) for row in solver.to_grid() for value in row)
