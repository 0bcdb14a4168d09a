"""Main entry point: generate segments, intersect them and render the result."""
from typing import List, Optional
import argparse
import logging
import sys
import time

from .config import settings
from .core.generators import GENERATORS, generate_segments
from .core.intersector import Strategy, report_intersections
from .core.report import compare_reports


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="sweepline",
                                     description="Find all crossings among random line segments.")
    parser.add_argument("-n", "--count", type=int, default=settings.generator.COUNT,
                        help="number of segments (default: %(default)s)")
    parser.add_argument("-g", "--generator", choices=sorted(GENERATORS), default=settings.generator.ALGORITHM,
                        help="segment generator (default: %(default)s)")
    parser.add_argument("-s", "--strategy", choices=[s.value for s in Strategy],
                        default=Strategy.STATUS_ORDERED.value, help="intersection strategy (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=settings.generator.SEED, help="random seed")
    parser.add_argument("-o", "--output", default=settings.render.OUTPUT,
                        help="PNG output path, empty to skip (default: %(default)s)")
    parser.add_argument("--show", action="store_true", help="display the result in a window")
    parser.add_argument("--verify", action="store_true", help="check the result against brute force")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run one intersection benchmark."""
    args = parse_args(argv)
    logging.getLogger().setLevel(args.log_level)

    try:
        segments = generate_segments(args.count, args.generator, args.seed)
    except ValueError as e:
        logging.error(str(e))
        return 2

    start = time.perf_counter()
    report = report_intersections(segments, args.strategy)
    elapsed = time.perf_counter() - start
    logging.info(f"#Intersections found: {len(report)} with {report.num_tests} tests "
                 f"(took {elapsed * 1000:.2f}ms)")

    status = 0
    if args.verify:
        oracle = report_intersections(segments, Strategy.BRUTE_FORCE)
        diff = compare_reports(oracle, report)
        if diff.matches:
            logging.info("Result matches brute force")
        else:
            logging.warning(f"Result differs from brute force: {diff}")
            status = 1

    if args.output or args.show:
        # Keep pygame out of the import path unless something is drawn
        from . import render
        surface = render.draw_scene(segments, report.intersections)
        if args.output:
            render.save_png(surface, args.output)
        if args.show:
            render.show(surface)

    return status


if __name__ == '__main__':
    sys.exit(main())
