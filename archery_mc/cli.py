"""
CLI entry point — argparse setup and dispatch.
"""

from __future__ import annotations

import argparse
import logging
import sys

import yaml

from .commands import cmd_run, cmd_write_setup
from .constants import DEFAULT_PRECISION, DEFAULT_RADIUS
from .parameters import parse_positive, load_setup, build_config

log = logging.getLogger(__name__)

_PROG = "archery-mc"


class _UsageParser(argparse.ArgumentParser):
    """Print the full help, not just the usage line, on bad input."""

    def error(self, message):
        self.print_help()
        self.exit(2, f"\n{self.prog}: error: {message}\n")


def _positive_float(text: str) -> float:
    try:
        return parse_positive(text)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected a positive number, got '{text}'"
        ) from None


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        value = 0
    if value < 1:
        raise argparse.ArgumentTypeError(
            f"expected a positive integer, got '{text}'"
        )
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(
        prog=_PROG,
        description="Simulates an archer shooting at a target "
                    "with bivariate normal error model.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
precision models shooter accuracy, e.g.:
    1.0 for accuracy of magic fireball
    1.5 for an archer with basic-level training
    7.5 for an archer with grand-master skill
radius is the radius of the target in feet, e.g.:
    1.5 for a man-sized figure
    2.0 for standard archery target
   12.0 for long-distance clout competition

Default display is a short table of doubling ranges;
  -L uses a long/linear table in 10 yard increments
  -E prints the error of every shot instead
""",
    )
    parser.add_argument("precision", nargs="?", type=_positive_float,
                        default=DEFAULT_PRECISION,
                        help=f"shooter precision (default: {DEFAULT_PRECISION})")
    parser.add_argument("radius", nargs="?", type=_positive_float,
                        default=DEFAULT_RADIUS,
                        help=f"target radius in feet (default: {DEFAULT_RADIUS})")
    parser.add_argument("-L", "-l", "--linear", action="store_true",
                        help="linear range table instead of doubling ranges")
    parser.add_argument("-E", "-e", "--errors", action="store_true",
                        help="print raw per-shot errors instead of hit percentages")

    run = parser.add_argument_group("run settings (override the setup file)")
    run.add_argument("--trials", type=_positive_int, default=None,
                     help="shots per course (default: 100000)")
    run.add_argument("--seed", type=int, default=None,
                     help="random seed for reproducible runs")
    run.add_argument("--max-range", type=_positive_float, default=None,
                     help="longest range tabulated in yards (default: 200)")
    run.add_argument("--step", type=_positive_float, default=None,
                     dest="linear_step",
                     help="linear table increment in yards (default: 10)")
    run.add_argument("-j", "--workers", default=None, dest="max_workers",
                     help="processes for the hit table, integer or 'auto' "
                          "(default: 1)")
    run.add_argument("-c", "--config", default=None, dest="setup",
                     help="setup YAML file")
    run.add_argument("--write-config", default=None, metavar="FILE",
                     help="write a setup YAML with the defaults and exit")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true",
                           help="log per-course details")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="only log warnings and errors")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger().setLevel(logging.WARNING)

    if args.write_config:
        cmd_write_setup(args.write_config)
        return

    setup = None
    if args.setup:
        try:
            setup = load_setup(args.setup)
        except (OSError, yaml.YAMLError, ValueError) as exc:
            log.error("Cannot load setup file '%s': %s", args.setup, exc)
            sys.exit(1)

    try:
        config = build_config(
            args.precision,
            args.radius,
            linear=args.linear,
            errors=args.errors,
            setup=setup,
            trials=args.trials,
            seed=args.seed,
            max_range=args.max_range,
            linear_step=args.linear_step,
            max_workers=args.max_workers,
        )
    except ValueError as exc:
        log.error("Invalid configuration: %s", exc)
        sys.exit(1)

    cmd_run(config)
