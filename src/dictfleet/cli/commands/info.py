"""
info - dictionary descriptors from a running front door.
"""

import sys
from rich import print_json
from dictfleet.cli import client


def add_subparser(subparsers):
    parser = subparsers.add_parser("info", help="Show dictionaries served by a running front door")
    parser.add_argument("--url", default=client.BASE_URL, help=f"API base URL (default: {client.BASE_URL})")
    parser.set_defaults(func=info_cmd)


def info_cmd(args):
    try:
        data = client.get_info(args.url)
        print_json(data=data)
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
