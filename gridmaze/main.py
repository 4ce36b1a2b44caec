import argparse
import sys
import os
import logging

# Ensure project root is in path so we can import 'gridmaze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridmaze.core.errors import MazeError

logger = logging.getLogger("gridmaze")

def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

def add_maze_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--cells-wide", type=int, default=20, help="The width of the maze, in grid cells")
    parser.add_argument("--cells-high", type=int, default=20, help="The height of the maze, in grid cells")
    parser.add_argument("--seed", type=int, default=-1, help="If positive, specifies the random seed to use")
    parser.add_argument("--template", type=str, default=None,
                        help="Optional PNG layout template. Ignores --cells-wide and --cells-high if used")
    parser.add_argument("--meta-maze", type=int, default=0,
                        help="If positive, builds a \"meta\" maze of this many levels. Ignores width and height. Keep it low")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="gridmaze: spanning-tree maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a maze and write it as a PNG")
    add_maze_arguments(gen_parser)
    gen_parser.add_argument("--out", type=str, required=True, help="The .png file the maze will be saved to")
    gen_parser.add_argument("--cell-width", type=int, default=11, help="The width of each maze cell, in pixels")
    gen_parser.add_argument("--erode", type=int, default=0, help="Number of wall erosion passes")
    gen_parser.add_argument("--solve", action="store_true", help="Highlight the solution")
    gen_parser.add_argument("--visual", action="store_true", help="Show the finished maze in a window")

    # Info Command
    info_parser = subparsers.add_parser("info", help="Generate a maze and print its summary")
    add_maze_arguments(info_parser)

    return parser

def build_grid(args):
    from gridmaze.core.grid import Grid

    if args.template:
        from gridmaze.io.template import load_template, classify_pixels
        from gridmaze.core.template import grid_from_template
        logger.info(f"Loading template {args.template}...")
        return grid_from_template(classify_pixels(load_template(args.template)), args.seed)
    if args.meta_maze > 0:
        from gridmaze.algo.meta import generate_meta_maze
        logger.info(f"Generating meta-maze with {args.meta_maze} levels...")
        return generate_meta_maze(args.meta_maze, args.seed)

    from gridmaze.algo.kruskal import generate
    from gridmaze.algo.base import resolve_seed
    logger.info(f"Generating {args.cells_wide}x{args.cells_high} maze...")
    return generate(Grid(args.cells_wide, args.cells_high), resolve_seed(args.seed))

def run_generate(args) -> int:
    grid = build_grid(args)
    logger.info(f"Generated {grid.summary()} OK.")

    if args.erode > 0:
        from gridmaze.core.complexity import MazePostProcessor
        logger.info(f"Eroding maze walls {args.erode} steps...")
        removed = sum(MazePostProcessor.erode(grid) for _ in range(args.erode))
        logger.info(f"Removed {removed} wall stubs.")
        logger.info(f"Stats: {MazePostProcessor.calculate_stats(grid)}")

    if args.solve:
        from gridmaze.algo.solvers import solve
        logger.info("Finding solution to the maze...")
        path = solve(grid, True)
        logger.info(f"Solution length: {len(path) - 1}")

    from gridmaze.viz.decorations import decorate
    from gridmaze.io.image import save_png
    image, _ = decorate(grid, cell_pixels=args.cell_width)
    save_png(image, args.out)
    logger.info(f"Image {args.out} written OK.")

    if args.visual:
        from gridmaze.viz.renderer import Renderer
        logger.info("Visual mode enabled - Opening window...")
        renderer = Renderer(grid)
        renderer.init_window()
        renderer.run_loop()
    return 0

def run_info(args) -> int:
    from gridmaze.core.info import get_info
    from gridmaze.core.grid import Grid

    grid = build_grid(args)
    info = get_info(grid)
    print(info.debug_info)
    print(f"Start: {info.start} heading {Grid.DIRECTION_NAMES[info.start_direction]}")
    print(f"End: {info.end} entered heading {Grid.DIRECTION_NAMES[info.end_direction]}")
    print(f"Path length: {info.path_length}")
    return 0

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 1

    logger.debug(f"Running command: {args.command}")
    try:
        if args.command == "generate":
            return run_generate(args)
        return run_info(args)
    except MazeError as e:
        logger.error(f"Failed generating maze: {e}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
