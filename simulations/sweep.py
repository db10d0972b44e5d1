# simulations/sweep.py

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from memory_contention.models import Distribution

from .common import (
    DEFAULT_MAX_MODULES,
    DEFAULT_MIN_MODULES,
    DEFAULT_PROCESSOR_COUNTS,
    SweepSpec,
    format_row_line,
)
from .run import run_sweep
from .sinks import CsvResultsSink


DEFAULT_OUT = "output.csv"


def _distributions(name: str) -> tuple:
    name = name.strip().lower()
    if name == "both":
        return (Distribution.UNIFORM, Distribution.GAUSSIAN)
    return (Distribution.parse(name),)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Estimate the mean cycles a processor waits for a shared memory "
            "module, sweeping processor and module counts."
        )
    )
    parser.add_argument(
        "--processors", type=int, nargs="+", default=list(DEFAULT_PROCESSOR_COUNTS),
        help="processor counts to simulate (default: 2 4 8 16 32 64)",
    )
    parser.add_argument("--min-modules", type=int, default=DEFAULT_MIN_MODULES, help="smallest module count")
    parser.add_argument("--max-modules", type=int, default=DEFAULT_MAX_MODULES, help="largest module count")
    parser.add_argument(
        "--distribution", default="both", help="uniform | gaussian | both (default: both)",
    )
    parser.add_argument("--seed", type=int, default=None, help="base RNG seed (default: unseeded)")
    parser.add_argument("--out", default=DEFAULT_OUT, help=f"results CSV path (default: {DEFAULT_OUT})")
    parser.add_argument("--overwrite", action="store_true", help="truncate --out instead of appending")
    parser.add_argument(
        "--clamp", action="store_true",
        help="keep gaussian addresses below the module count instead of letting them run past it",
    )
    parser.add_argument("--plot", action="store_true", help="show a chart when done")
    parser.add_argument("--save-plot", default=None, metavar="PATH", help="write the chart to PATH")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        spec = SweepSpec(
            processor_counts=tuple(args.processors),
            min_modules=args.min_modules,
            max_modules=args.max_modules,
            distributions=_distributions(args.distribution),
            clamp=args.clamp,
        )
    except ValueError as e:
        parser.error(str(e))

    with CsvResultsSink(args.out, append=not args.overwrite) as sink:
        rows = run_sweep(
            spec,
            sink=sink,
            seed=args.seed,
            on_row=lambda r: print(format_row_line(r)),
        )

    if args.plot or args.save_plot:
        # Imported here so plain sweeps never load a plotting backend.
        import matplotlib.pyplot as plt
        from .plot import plot_rows

        fig = plot_rows(
            rows,
            title=f"Mean wait (modules {spec.min_modules}..{spec.max_modules})",
        )
        if args.save_plot:
            fig.savefig(args.save_plot)
        if args.plot:
            plt.show()
        plt.close(fig)

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
