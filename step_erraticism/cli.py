"""
Command-line entry points for step log erraticism scoring.

Usage:
    erraticism-neighbor [STEPLOG] [-o OUT] [--window-size N] [--threshold M]
    erraticism-kalman   [STEPLOG] [-o OUT] [--process-noise Q] [--backend numpy|filterpy]
    python -m step_erraticism {neighbor,kalman} ...

When STEPLOG is omitted the path is asked for interactively; pressing Enter
uses the default log name.
"""

import argparse
import logging
import sys

from .config import (
    DEFAULT_DISTANCE_THRESHOLD, DEFAULT_PROCESS_NOISE, DEFAULT_WINDOW_SIZE, ScoringConfig,
)
from .export import write_scores_csv
from .scorers import SCORER_NAMES, get_scorer
from .scorers.kalman import BACKENDS
from .steplog import SteplogNotFoundError, read_steplog

logger = logging.getLogger(__name__)

DEFAULT_STEPLOG = '2017-01-20Z14-30-05.steplog'
DEFAULT_OUTPUTS = {
    'neighbor': 'nearest_neighbour_output.csv',
    'kalman': 'kalman_output.csv',
}
DESCRIPTIONS = {
    'neighbor': 'Score step log erraticism with the windowed nearest-neighbor heuristic',
    'kalman': 'Score step log erraticism with the Kalman filter smoothing-lag heuristic',
}


def prompt_steplog_path(input_fn=input):
    """Ask for a step log path, falling back to DEFAULT_STEPLOG on empty input."""
    try:
        path = input_fn("Enter the steplog file path (or press Enter to use the default): ").strip()
    except EOFError:
        path = ''

    if not path:
        path = DEFAULT_STEPLOG
        print(f"Using the default steplog file: {path}")
    return path


def add_scorer_arguments(parser, scorer_type):
    parser.add_argument('steplog', nargs='?',
                        help='Step log to score (prompted for when omitted)')
    parser.add_argument('-o', '--output', default=DEFAULT_OUTPUTS[scorer_type],
                        help=f'CSV output path (default: {DEFAULT_OUTPUTS[scorer_type]})')
    parser.add_argument('--plot', metavar='PNG',
                        help='Also save a trajectory/score figure to this path')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Debug logging (lists skipped lines)')

    if scorer_type == 'neighbor':
        parser.add_argument('--window-size', type=int, default=DEFAULT_WINDOW_SIZE,
                            help=f'Trailing window length in steps (default: {DEFAULT_WINDOW_SIZE})')
        parser.add_argument('--threshold', type=float, default=DEFAULT_DISTANCE_THRESHOLD,
                            help=f'Distance in meters that scores 0 (default: {DEFAULT_DISTANCE_THRESHOLD})')
    else:
        parser.add_argument('--process-noise', type=float, default=DEFAULT_PROCESS_NOISE,
                            help=f'Kalman process noise (default: {DEFAULT_PROCESS_NOISE})')
        parser.add_argument('--backend', choices=BACKENDS, default='numpy',
                            help='Kalman recursion backend (default: numpy)')

    parser.set_defaults(scorer_type=scorer_type)
    return parser


def build_parser(scorer_type):
    parser = argparse.ArgumentParser(description=DESCRIPTIONS[scorer_type])
    return add_scorer_arguments(parser, scorer_type)


def build_config(args):
    """ScoringConfig from parsed arguments; raises ValueError on bad values."""
    return ScoringConfig(
        window_size=getattr(args, 'window_size', DEFAULT_WINDOW_SIZE),
        distance_threshold=getattr(args, 'threshold', DEFAULT_DISTANCE_THRESHOLD),
        process_noise=getattr(args, 'process_noise', DEFAULT_PROCESS_NOISE),
    )


def configure_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )


def run(args, input_fn=input):
    """
    Score one step log and write the CSV.

    Returns:
        int: Process exit status (0 ok, 1 on I/O failure)
    """
    config = build_config(args)
    if args.scorer_type == 'kalman':
        scorer = get_scorer('kalman', backend=args.backend)
    else:
        scorer = get_scorer(args.scorer_type)

    path = args.steplog or prompt_steplog_path(input_fn)

    try:
        steps = read_steplog(path)
    except SteplogNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    scored = scorer.score(steps, config)

    try:
        write_scores_csv(scored, args.output)
    except OSError as e:
        logger.debug(f"Write failed: {e}")
        print(f"Error: Unable to create the output file: {args.output}", file=sys.stderr)
        return 1

    if scored:
        mean_score = sum(s.score for s in scored) / len(scored)
        logger.info(f"{scorer.name}: {len(scored)} step(s) scored, mean erraticism {mean_score:.3f}")

    if args.plot:
        from .plotting import plot_erraticism
        try:
            plot_erraticism(steps, scored, args.plot, title=f'Step Erraticism ({scorer.name}): {path}')
        except OSError as e:
            logger.debug(f"Plot failed: {e}")
            print(f"Error: Unable to create the plot file: {args.plot}", file=sys.stderr)
            return 1
        print(f"Plot saved to {args.plot}")

    print(f"Output written to {args.output}")
    return 0


def _main(parser, argv):
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    try:
        build_config(args)
    except ValueError as e:
        parser.error(str(e))
    return run(args)


def neighbor_main(argv=None):
    return _main(build_parser('neighbor'), argv)


def kalman_main(argv=None):
    return _main(build_parser('kalman'), argv)


def main(argv=None):
    parser = argparse.ArgumentParser(prog='step_erraticism',
                                     description='Per-step erraticism scoring for PDR step logs')
    subparsers = parser.add_subparsers(dest='command', required=True)
    for name in SCORER_NAMES:
        add_scorer_arguments(subparsers.add_parser(name, help=DESCRIPTIONS[name]), name)
    return _main(parser, argv)


if __name__ == '__main__':
    sys.exit(main())
