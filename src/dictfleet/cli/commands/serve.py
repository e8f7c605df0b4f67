"""
serve - start the fleet and the front door.
"""

import argparse
import asyncio
import logging
import sys

from dictfleet.core.errors import StartupError
from dictfleet.core.settings import DEFAULT_BASE_PORT, DEFAULT_PORT, ENV_DIR, ENV_PORT, Settings
from dictfleet.server.main import serve


LAYOUT_HELP = f"""
--dir must be an absolute path:

  1. One .mdx file: the path of its *parent* directory.
     └── parent
         └── oaldpe.mdx

  2. Several .mdx files: the path of their *grandparent* directory,
     one dictionary per subdirectory.
     └── grandparent
         ├── oxford
         │   ├── oaldpe.mdx
         │   ├── oaldpe.mdd
         │   └── oaldpe.1.mdd
         └── collins
             └── collins.mdx

Dictionaries listen on --base-port, --base-port+1, ... in name order.
Word autocomplete reads <dir>/ecdict_wfd.db when present.

Environment: {ENV_DIR}, {ENV_PORT}.
"""


def add_subparser(subparsers):
    parser = subparsers.add_parser(
        "serve",
        help="Serve dictionaries",
        epilog=LAYOUT_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-d", "--dir", help="Dictionary directory (absolute path)")
    parser.add_argument("-p", "--port", help=f"Front door port (default: {DEFAULT_PORT})")
    parser.add_argument("--base-port", type=int, help=f"First dictionary port (default: {DEFAULT_BASE_PORT})")
    parser.add_argument("--static", help="Directory with the web UI")
    parser.add_argument("--index-file", help="Word index file name inside --dir")
    parser.add_argument("--close-timeout", type=float, help="Seconds to wait for each listener on shutdown")
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"])
    parser.set_defaults(func=serve_cmd)


def serve_cmd(args):
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    try:
        settings = Settings.from_args(args)
        code = asyncio.run(serve(settings))
    except StartupError as e:
        print(f"✗ {e.message}")
        sys.exit(e.exit_code)

    sys.exit(code)
