"""
scan - list the dictionaries a directory would serve.
"""

import sys

from dictfleet.core.bundle import scan
from dictfleet.core.errors import DiscoveryError
from dictfleet.core.settings import DEFAULT_BASE_PORT


def add_subparser(subparsers):
    parser = subparsers.add_parser("scan", help="List dictionaries found in a directory")
    parser.add_argument("dir", help="Dictionary directory")
    parser.add_argument("--base-port", type=int, default=DEFAULT_BASE_PORT, help="First dictionary port")
    parser.set_defaults(func=scan_cmd)


def scan_cmd(args):
    try:
        bundles = scan(args.dir)
    except DiscoveryError as e:
        print(f"✗ {e.message}")
        sys.exit(e.exit_code)

    if not bundles:
        print(f"✗ No .mdx files found under {args.dir}")
        sys.exit(DiscoveryError.exit_code)

    for i, bundle in enumerate(bundles):
        print(f"{args.base_port + i}  {bundle.name}")
        print(f"  dir: {bundle.root_path}")
        print(f"  mdx: {bundle.main_file}")
        for mdd in bundle.aux_files:
            print(f"  mdd: {mdd}")
