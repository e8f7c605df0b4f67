"""
wq - word autocomplete against a running front door.
"""

import sys
from dictfleet.cli import client


def add_subparser(subparsers):
    parser = subparsers.add_parser("wq", help="Autocomplete a word")
    parser.add_argument("term", help="Substring to look for")
    parser.add_argument("--url", default=client.BASE_URL, help=f"API base URL (default: {client.BASE_URL})")
    parser.set_defaults(func=wq_cmd)


def wq_cmd(args):
    try:
        suggestions = client.word_query(args.term, args.url)
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)

    if not suggestions:
        print("No suggestions.")
        return
    for word in suggestions:
        print(word)
