#!/usr/bin/env python3
"""Read a Sudoku from a file or stdin, solve it, and print the result."""
import logging
import time
from pathlib import Path
from typing import Optional

import typer

from sudoku import get_logger, is_valid_solution
from sudoku_io import MalformedPuzzleError, print_grid, read_puzzle
from sudoku_plot import plot_grid

app = typer.Typer(help="Solve a 9x9 Sudoku with forward checking and MRV backtracking.")

logger = get_logger()


@app.command()
def solve(
    puzzle: typer.FileText = typer.Argument("-", help="Puzzle text file; '-' reads stdin."),
    png: Optional[Path] = typer.Option(None, "--png", help="Also save the solved grid as a PNG."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every search step."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors."),
) -> None:
    if verbose:
        logger.setLevel(logging.DEBUG)
    elif quiet:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.INFO)

    try:
        solver = read_puzzle(puzzle)
    except MalformedPuzzleError as exc:
        typer.echo(f"Malformed puzzle: {exc}", err=True)
        raise typer.Exit(code=2)

    clues = solver.to_grid()
    typer.echo("Read sudoku")
    print_grid(solver)
    logger.info("Starting search with %d free cells", solver.free_cells)

    start_time = time.perf_counter()
    solved = solver.solve()
    elapsed_time = time.perf_counter() - start_time

    if not solved:
        typer.echo("Sudoku has no valid solution")
        typer.echo(f"Iterations: {solver.iterations}, Time: {elapsed_time:.4f}s")
        raise typer.Exit(code=1)

    solution = solver.to_grid()
    if not is_valid_solution(solution):
        logger.error("Search reported success but the grid is not a valid solution")
        raise typer.Exit(code=1)

    typer.echo(f"Sudoku solved in {solver.iterations} iterations")
    typer.echo()
    print_grid(solver)
    typer.echo(f"Iterations: {solver.iterations}, Time: {elapsed_time:.4f}s")

    if png is not None:
        try:
            plot_grid(solution, str(png), clues=clues, title="Sudoku (MRV + forward checking)")
        except Exception as plot_exc:
            typer.echo(f"Plotting failed: {plot_exc}", err=True)


if __name__ == "__main__":
    app()
