"""
Native-info (.ninfo) workflow for cafetools.

This workflow provides utilities for reading CafeMol native-info files,
which describe the reference topology (bonds, angles, dihedrals) and native
contacts of a Go-like model.

It supports:
- Reporting record counts and exporting any record kind to CSV.
- Restricting native contacts to a particle-index range and writing the
  resulting ``native contact`` block.
- Drawing the native contact map.
"""


import argparse
import sys

from cafetools.io.handlers.native_info_handler import NativeInfoHandler
from cafetools.io.generators.native_info_generator import format_native_info, write_native_info
from cafetools.io.records import LAYOUTS_BY_KIND
from cafetools.analysis.per_file.native_info_analyzer import (
    filter_contacts_by_index,
    get_record_table,
    sort_contacts,
)
from cafetools.utils.media.plotter import contact_map_plot
from cafetools.utils.path import resolve_output_path


def _ninfo_get_task(args: argparse.Namespace) -> int:
    """
    Handle 'cafetools ninfo get ...'
    to report record counts and optionally export one record kind.
    """
    handler = NativeInfoHandler(args.file, strict=args.strict)
    for key, n in handler.metadata().items():
        print(f"{key[2:]:>22}: {n}")

    if args.export:
        df = get_record_table(handler, args.record_kind, ty=args.ty)
        out = resolve_output_path(args.export, args.kind)
        df.to_csv(out, index=False)
        print(f'Successfully exported {len(df)} {args.record_kind} record(s) to {out}.')
    return 0


def _ninfo_filter_task(args: argparse.Namespace) -> int:
    """
    Handle 'cafetools ninfo filter ...'
    to keep contacts whose particles lie within [--min, --max].
    """
    handler = NativeInfoHandler(args.file, strict=args.strict)
    ninfo = filter_contacts_by_index(handler.native_info(), args.min, args.max)
    if args.sort:
        sort_contacts(ninfo)

    if args.out:
        out = resolve_output_path(args.out, args.kind)
        write_native_info(out, ninfo)
        print(f'Successfully wrote {len(ninfo.contacts)} contact(s) to {out}.')
    else:
        sys.stdout.write(format_native_info(ninfo))
    return 0


def _ninfo_map_task(args: argparse.Namespace) -> int:
    """
    Handle 'cafetools ninfo map ...'
    to plot or save the native contact map.
    """
    handler = NativeInfoHandler(args.file, strict=args.strict)
    df = handler.dataframe()

    if args.plot:
        contact_map_plot(df["index_1"], df["index_2"], save=None)
    elif args.save:
        out = resolve_output_path(args.save, args.kind)
        contact_map_plot(df["index_1"], df["index_2"], save=out)
    else:
        print("ℹ️ Nothing to do. Use --plot or --save <path>.")
    return 0


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--file", default="native.ninfo", help="Path to native-info file")
    p.add_argument("--strict", action="store_true",
                   help="Fail on the first unparseable record line instead of skipping it")


def register_tasks(subparsers: argparse._SubParsersAction) -> None:
    """
    CLI registration for:
        cafetools ninfo get ...
        cafetools ninfo filter ...
        cafetools ninfo map ...
    """
    p = subparsers.add_parser(
        "get",
        help="Report record counts and export a record table.\n",
        description=(
            "Examples:\n"
            "  cafetools ninfo get --file protein.ninfo\n"
            "  cafetools ninfo get --file protein.ninfo --kind bond --export bonds.csv\n"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    _add_common_args(p)
    p.add_argument("--kind", dest="record_kind", default="contact",
                   choices=sorted(LAYOUTS_BY_KIND),
                   help="Record kind to export")
    p.add_argument("--ty", default=None, help="Keep only records with this type tag")
    p.add_argument("--export", default=None, help="Export the record table to CSV file")
    p.set_defaults(_run=_ninfo_get_task)

    p = subparsers.add_parser(
        "filter",
        help="Keep native contacts within a particle-index range.\n",
        description=(
            "Examples:\n"
            "  cafetools ninfo filter --file protein.ninfo --min 114 --max 174\n"
            "  cafetools ninfo filter --file protein.ninfo --min 1 --max 60 --out domain1.ninfo\n"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    _add_common_args(p)
    p.add_argument("--min", type=int, required=True, help="Lowest particle index kept")
    p.add_argument("--max", type=int, required=True, help="Highest particle index kept")
    p.add_argument("--sort", action="store_true", help="Sort contacts by record index")
    p.add_argument("--out", default=None, help="Write the block to this path (default: stdout)")
    p.set_defaults(_run=_ninfo_filter_task)

    p = subparsers.add_parser(
        "map",
        help="Plot or save the native contact map.\n",
        description=(
            "Examples:\n"
            "  cafetools ninfo map --file protein.ninfo --save contact_map.png\n"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    _add_common_args(p)
    p.add_argument("--plot", action="store_true", help="Show the contact map")
    p.add_argument("--save", default=None, help="Save contact map image to path")
    p.set_defaults(_run=_ninfo_map_task)
