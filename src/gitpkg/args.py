"""Argument parsing functionality for gitpkg."""

import argparse
from typing import List, Optional

from gitpkg import __version__


def parse_args(argv: Optional[List[str]] = None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="gitpkg",
        description="gitpkg - install dependencies from verified git tags",
        add_help=True,
    )
    parser.add_argument("--version",
                        action="version",
                        version=f"%(prog)s {__version__}")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

    subparsers = parser.add_subparsers(dest="action", metavar="command")
    subparsers.required = True

    install = subparsers.add_parser("install",
                                    help="Install dependencies of a package")
    install.add_argument("DIRECTORY",
                         nargs="?",
                         default=".",
                         help="Package directory (default: current directory)")
    install.add_argument("--production",
                         dest="PRODUCTION",
                         help="Do not install devDependencies",
                         action="store_true")

    run = subparsers.add_parser("run", help="Run a script declared in the manifest")
    run.add_argument("SCRIPT", help="Script name")
    run.add_argument("DIRECTORY",
                     nargs="?",
                     default=".",
                     help="Directory to start the manifest lookup from")

    test = subparsers.add_parser("test", help="Run the 'test' script")
    test.add_argument("DIRECTORY", nargs="?", default=".")

    rebuild = subparsers.add_parser("rebuild", help="Rebuild the native addon")
    rebuild.add_argument("DIRECTORY", nargs="?", default=".")

    return parser.parse_args(argv)
