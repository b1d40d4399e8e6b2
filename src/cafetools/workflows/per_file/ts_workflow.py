"""
Time-series (.ts) workflow for cafetools.

This workflow provides utilities for reading CafeMol ``.ts`` files, which
record temperature, radius of gyration, energies, Q-score and RMSD per step.

It supports:
- Converting whole-system rows to CSV.
- Concatenating the time series of restarted runs.
- Plotting or exporting one quantity versus step.
"""


import argparse
import sys

from cafetools.io.handlers.time_series_handler import COLUMNS, TimeSeriesHandler
from cafetools.io.generators.time_series_generator import (
    concatenate_time_series,
    write_time_series_csv,
)
from cafetools.analysis.per_file.time_series_analyzer import get_time_series_data
from cafetools.utils.media.plotter import single_plot
from cafetools.utils.path import resolve_output_path


def _ts_csv_task(args: argparse.Namespace) -> int:
    """
    Handle 'cafetools ts csv ...'
    to rewrite the whole-system rows of a time series as CSV.
    """
    handler = TimeSeriesHandler(args.file)
    out = resolve_output_path(args.out, args.kind)
    write_time_series_csv(handler, out)
    print(f'Successfully exported data to {out}.')
    return 0


def _ts_cat_task(args: argparse.Namespace) -> int:
    """
    Handle 'cafetools ts cat FILE...'
    to concatenate time series to standard output.
    """
    concatenate_time_series(args.files, sys.stdout)
    return 0


def _ts_get_task(args: argparse.Namespace) -> int:
    """
    Handle 'cafetools ts get ...'
    to plot, export, or save one quantity vs step.
    """
    handler = TimeSeriesHandler(args.file)
    df = get_time_series_data(handler, args.y, unit=args.unit)

    workflow_name = args.kind
    if args.export:
        out = resolve_output_path(args.export, workflow_name)
        df.to_csv(out, index=False)
        print(f'Successfully exported data to {out}.')

    if args.plot or args.save:
        save = resolve_output_path(args.save, workflow_name) if args.save else None
        single_plot(
            df["step"],
            df[args.y],
            title=f"{args.y} vs step",
            xlabel="Step",
            ylabel=args.y,
            save=None if args.plot else save,
        )

    if not (args.plot or args.save or args.export):
        print("ℹ️ Nothing to do. Use --plot, --save <path>, --export <csv>.")
    return 0


def register_tasks(subparsers: argparse._SubParsersAction) -> None:
    """
    CLI registration for:
        cafetools ts csv ...
        cafetools ts cat ...
        cafetools ts get ...
    """
    p = subparsers.add_parser(
        "csv",
        help="Convert whole-system rows of a .ts file to CSV.\n",
        description=(
            "Examples:\n"
            "  cafetools ts csv --file md.ts --out md.csv\n"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--file", default="md.ts", help="Path to .ts file")
    p.add_argument("--out", required=True, help="Output CSV path")
    p.set_defaults(_run=_ts_csv_task)

    p = subparsers.add_parser(
        "cat",
        help="Concatenate .ts files to standard output.\n",
        description=(
            "Examples:\n"
            "  cafetools ts cat run1.ts run2.ts > all.ts\n"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("files", nargs="+", help="Time-series files, in order")
    p.set_defaults(_run=_ts_cat_task)

    p = subparsers.add_parser(
        "get",
        help="Plot, export, or save one quantity vs step.\n",
        description=(
            "Examples:\n"
            "  cafetools ts get --file md.ts --y qscore --save qscore_vs_step.png\n"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--file", default="md.ts", help="Path to .ts file")
    p.add_argument("--y", default="qscore", choices=COLUMNS[2:], help="Quantity to extract")
    p.add_argument("--unit", default=None, help="Unit label (default: whole system)")
    p.add_argument("--plot", action="store_true", help="Plot quantity vs step")
    p.add_argument("--save", default=None, help="Save plot image to path")
    p.add_argument("--export", default=None, help="Export data to CSV file")
    p.set_defaults(_run=_ts_get_task)
