#!/usr/bin/env python3
"""
varchar_column.py

CLI for converting a CSV column <-> VarChar column file, and inspecting one.

Usage:
  python varchar_column.py csv_to_column  in.csv  out.vchr --col NAME [--null-marker M]
  python varchar_column.py column_to_csv  in.vchr out.csv [--null-marker M]
  python varchar_column.py inspect        in.vchr [--no-verify]

Exit codes:
  0 = success
  1 = runtime error (IO, format error, etc.)
  2 = incorrect usage (arg parsing)
"""
import sys
import csv
import logging
import argparse
from typing import List, Optional

from writer import write_column
from reader import read_column, read_column_to_csv

DEFAULT_NULL_MARKER = '\\N'


def csv_to_column_cli(in_csv: str, out_path: str, col: str,
                      null_marker: str = DEFAULT_NULL_MARKER) -> None:
    """
    Read one column of a CSV (small/medium size) into memory and write it as a column file.
    Cells equal to null_marker become NULL.
    """
    with open(in_csv, newline='', encoding='utf-8') as f:
        reader = csv.reader(f)
        try:
            header = next(reader)
        except StopIteration:
            raise ValueError(f"CSV {in_csv} is empty; no header row")
        if col not in header:
            raise ValueError(f"Requested column '{col}' not found in CSV header")
        idx = header.index(col)
        values = []
        for r in reader:
            if len(r) != len(header):
                raise ValueError(f"CSV row has {len(r)} columns but header has {len(header)}")
            values.append(None if r[idx] == null_marker else r[idx])

    write_column(out_path, col, values)
    print(f"Wrote {out_path} with {len(values)} rows ({values.count(None)} null)")


def column_to_csv_cli(in_path: str, out_csv: str, null_marker: str = DEFAULT_NULL_MARKER) -> None:
    read_column_to_csv(in_path, out_csv, null_marker=null_marker)
    print(f"Wrote CSV {out_csv}")


def inspect_cli(in_path: str, verify: bool = True) -> None:
    """
    Print the column summary and, per row, the raw offset, length and value.
    """
    name, view = read_column(in_path, verify=verify)
    print(f"column: {name}")
    print(f"rows: {len(view)}  nulls: {view.null_count()}  data bytes: {len(view.data)}")
    for row, offset in enumerate(view.offsets):
        if offset < 0:
            print(f"{row:>6}  offset={offset:<10} NULL")
        else:
            s = view.get(row)
            print(f"{row:>6}  offset={offset:<10} len={len(s):<6} {s.as_str()!r}")


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(prog='varchar_column.py',
                                     description='CSV <-> VarChar column file converter')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    sub = parser.add_subparsers(dest='cmd', required=True)

    p1 = sub.add_parser('csv_to_column', help='Convert one CSV column to a column file')
    p1.add_argument('in_csv', help='Input CSV path')
    p1.add_argument('out_path', help='Output column file path')
    p1.add_argument('--col', required=True, help='Name of the CSV column to convert')
    p1.add_argument('--null-marker', default=DEFAULT_NULL_MARKER,
                    help='Cell text that stands for NULL (default: \\N)')

    p2 = sub.add_parser('column_to_csv', help='Convert a column file back to CSV')
    p2.add_argument('in_path', help='Input column file path')
    p2.add_argument('out_csv', help='Output CSV file path')
    p2.add_argument('--null-marker', default=DEFAULT_NULL_MARKER,
                    help='Text written for NULL rows (default: \\N)')

    p3 = sub.add_parser('inspect', help='Print the rows of a column file')
    p3.add_argument('in_path', help='Input column file path')
    p3.add_argument('--no-verify', dest='verify', action='store_false',
                    help='Skip the up-front validation of every row')

    try:
        args = parser.parse_args(argv)
    except SystemExit:
        return 2

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        if args.cmd == 'csv_to_column':
            csv_to_column_cli(args.in_csv, args.out_path, args.col, args.null_marker)
        elif args.cmd == 'column_to_csv':
            column_to_csv_cli(args.in_path, args.out_csv, args.null_marker)
        elif args.cmd == 'inspect':
            inspect_cli(args.in_path, verify=args.verify)
        else:
            print("Unknown command", file=sys.stderr)
            return 2
        return 0
    except Exception as e:
        print("Error:", e, file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
