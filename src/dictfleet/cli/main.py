"""
dictfleet CLI.
"""

import argparse
from dictfleet import __version__
from dictfleet.cli.commands import serve, scan, info, wq


def main(argv=None):
    parser = argparse.ArgumentParser(prog="dictfleet", description="Serve a directory of MDict dictionaries")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    serve.add_subparser(subparsers)
    scan.add_subparser(subparsers)
    info.add_subparser(subparsers)
    wq.add_subparser(subparsers)

    args = parser.parse_args(argv)

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
