import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'maze_finder' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_finder.core.grid import Grid, ConfigurationError

# One character per Grid.STATE_* code
STATE_CHARS = {
    Grid.STATE_OPEN: ".",
    Grid.STATE_WALL: "#",
    Grid.STATE_VISITED: "o",
    Grid.STATE_PATH: "*",
    Grid.STATE_START: "S",
    Grid.STATE_END: "E",
}

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def format_grid(grid: Grid) -> str:
    states = grid.snapshot()
    return "\n".join("".join(STATE_CHARS[int(v)] for v in row) for row in states)

def parse_coord(text: str):
    try:
        row, col = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ROW,COL, got '{text}'")
    return row, col

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Finder: grid pathfinding sandbox")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_grid_args(p):
        p.add_argument("--size", type=int, default=20, help="Grid size (N x N)")
        p.add_argument("--seed", type=int, default=None, help="Random Seed")
        p.add_argument("--start", type=parse_coord, help="Start cell as ROW,COL")
        p.add_argument("--end", type=parse_coord, help="End cell as ROW,COL")
        p.add_argument("--quiet", "-q", action="store_true", help="Do not print the grid")
        p.add_argument("--events", action="store_true", help="Print step event counts")

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Run a search on a grid")
    add_grid_args(solve_parser)
    solve_parser.add_argument("--algo", type=str, default="bfs", choices=["bfs", "dfs", "astar"], help="Search algorithm")
    solve_parser.add_argument("--maze", action="store_true", help="Generate a maze before searching")
    solve_parser.add_argument("--wall", type=parse_coord, action="append", default=[], help="Wall cell as ROW,COL (repeatable)")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a recursive-division maze")
    add_grid_args(gen_parser)

    # Script Command
    script_parser = subparsers.add_parser("script", help="Replay a file of grid commands")
    add_grid_args(script_parser)
    script_parser.add_argument("script_file", help="Command file ('-' for stdin)")

    return parser

def make_grid(args, parser, observer=None) -> Grid:
    try:
        grid = Grid(args.size, observer=observer, seed=args.seed)
    except ConfigurationError as e:
        parser.error(str(e))

    # end, start, end: a request that hits the other randomized endpoint is retried once it has moved
    if args.end:
        grid.designate_end(*args.end)
    if args.start:
        grid.designate_start(*args.start)
    if args.end:
        grid.designate_end(*args.end)
    return grid

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_finder")

    if args.command is None:
        parser.print_help()
        return

    logger.info(f"Running command: {args.command}")

    from maze_finder.core.events import EventRecorder
    recorder = EventRecorder() if args.events else None
    grid = make_grid(args, parser, observer=recorder)

    if args.command == "solve":
        from maze_finder.algo.division import RecursiveDivision
        from maze_finder.algo.solvers import SearchEngine

        if args.maze:
            RecursiveDivision(grid, seed=args.seed).generate()
        for row, col in args.wall:
            grid.set_passable(row, col, False)

        logger.info(f"Searching with {args.algo.upper()} from {grid.start} to {grid.end}...")
        result = SearchEngine(grid).run(args.algo)

        if not args.quiet:
            print(format_grid(grid))
        if result.found:
            print(f"Found. Path Length: {result.path_length}")
        else:
            print(f"{result.status.value.replace('_', ' ').capitalize()}.")

    elif args.command == "generate":
        from maze_finder.algo.division import RecursiveDivision

        logger.info(f"Generating {grid.size}x{grid.size} maze...")
        divisions = RecursiveDivision(grid, seed=args.seed).generate()
        if not args.quiet:
            print(format_grid(grid))
        print(f"Done. Divisions: {len(divisions)}")

    elif args.command == "script":
        from maze_finder.core.commands import CommandProcessor

        if args.script_file == "-":
            lines = sys.stdin.read().splitlines()
        else:
            with open(args.script_file) as f:
                lines = f.read().splitlines()

        processor = CommandProcessor(grid, seed=args.seed)
        processor.execute_all(lines)

        if not args.quiet:
            print(format_grid(grid))
        if processor.last_result is not None:
            print(f"Last search: {processor.last_result.status.value}, "
                  f"path length {processor.last_result.path_length}")

    if recorder is not None:
        print(f"Events: {recorder.counts()}")

if __name__ == "__main__":
    main()
