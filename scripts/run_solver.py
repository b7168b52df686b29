#!/usr/bin/env python3
"""
Script to solve a single Loopy puzzle.

Usage:
    python scripts/run_solver.py puzzle.json --save-solution solved.json
    python scripts/run_solver.py --hints "3.2|.1.|2.3" --config configs/solver_config.yaml
"""

import click
import sys
from pathlib import Path
import json

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from loopysolver import config as defaults
from loopysolver.core.grid import LoopyGrid, EdgeState
from loopysolver.core.errors import GridStructureError
from loopysolver.core.utils import setup_logger, calculate_solution_stats
from loopysolver.generators.square_grid import SquareGridGenerator
from loopysolver.solvers import get_solver, SolverConfig


@click.command()
@click.argument('puzzle_file', required=False, type=click.Path())
@click.option('--hints', type=str,
              help="Square grid hints, rows separated by '|' ('.' for no hint)")
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True),
              help='Solver configuration (YAML)')
@click.option('--algorithm', '-a', type=click.Choice(['backtracking']),
              default=defaults.DEFAULT_SOLVER, help='Solving algorithm to use')
@click.option('--save-solution', '-s', type=click.Path(),
              help='Save solution to file')
@click.option('--verbose', is_flag=True, help='Enable verbose output')
def main(puzzle_file, hints, config_file, algorithm, save_solution, verbose):
    """Solve a Loopy puzzle given as a JSON file or a hint string."""

    logger = setup_logger("LoopySolver", level="DEBUG" if verbose else "INFO")

    # Load puzzle
    if hints:
        try:
            grid = SquareGridGenerator.from_string(hints)
        except GridStructureError as e:
            click.echo(f"Error parsing hints: {e}")
            sys.exit(1)
        logger.info("Built square grid from hint string")

    elif puzzle_file:
        puzzle_path = Path(puzzle_file)
        if not puzzle_path.exists():
            click.echo(f"Error: Puzzle file '{puzzle_file}' not found")
            sys.exit(1)

        try:
            grid = LoopyGrid.load(puzzle_path)
            logger.info(f"Loaded puzzle from {puzzle_path}")
        except (OSError, ValueError, KeyError) as e:
            click.echo(f"Error loading puzzle: {e}")
            sys.exit(1)
    else:
        click.echo("Error: Either provide a puzzle file or use --hints")
        sys.exit(1)

    # Configure solver
    if config_file:
        config = SolverConfig.from_yaml(config_file)
        logger.info(f"Loaded solver configuration from {config_file}")
    else:
        config = SolverConfig()
    if verbose:
        config.verbose = True

    solver = get_solver(algorithm, config)

    if verbose:
        def progress_callback(guesses, grid, stats):
            if guesses % 100 == 0:
                logger.debug(f"Guess {guesses}: {stats}")

        solver.add_progress_callback(progress_callback)

    result = solver.solve(grid)

    # Display results
    click.echo("\n" + "="*50)
    click.echo(f"Algorithm: {algorithm}")
    click.echo(f"Status: {result.status.value.upper()}")
    click.echo(f"Time: {result.solve_time:.3f} seconds")
    click.echo(f"Guesses: {result.guesses}")
    click.echo(f"Memory: {result.memory_used:.1f} MB")

    if result.message:
        click.echo(f"Message: {result.message}")

    if result.stats:
        click.echo(f"Additional stats: {json.dumps(result.stats, indent=2)}")

    click.echo("="*50 + "\n")

    if result.success and result.solution:
        marked = result.solution.edge_ids_with_state(EdgeState.MARKED)
        click.echo(f"Marked edges: {[int(e) for e in marked]}")

        if verbose:
            click.echo(f"Solution stats: {calculate_solution_stats(result.solution)}")

        if save_solution:
            save_path = Path(save_solution)
            result.solution.save(save_path)
            click.echo(f"\nSolution saved to {save_path}")
    else:
        click.echo("No valid solution found.")
        sys.exit(1)


if __name__ == '__main__':
    main()
