"""gitpkg command line entry point."""
import asyncio
import logging
import sys
from typing import List, Optional

from gitpkg.args import parse_args
from gitpkg.common.logging_utils import configure_logging, is_debug_enabled
from gitpkg.config import apply_config_overrides, load_config
from gitpkg.constants import Constants, ExitCodes
from gitpkg.errors import (
    GitCommandError,
    GitPkgError,
    InvalidRemotesError,
    NativeBuildError,
    TagNotFoundError,
    UnknownPackageError,
    UnknownRemoteError,
    UnresolvableRemotesError,
    VerificationError,
)
from gitpkg.installer import Installer
from gitpkg.manifest import locate_manifest
from gitpkg.scripts import rebuild, run_script

logger = logging.getLogger(__name__)

_RESOLUTION_ERRORS = (
    UnknownRemoteError,
    InvalidRemotesError,
    UnresolvableRemotesError,
    TagNotFoundError,
)


def exit_code_for(err: BaseException) -> int:
    """Map an error raised by a command onto an ExitCodes value."""
    if isinstance(err, (VerificationError, NativeBuildError)):
        return ExitCodes.VERIFICATION_ERROR.value
    if isinstance(err, GitCommandError):
        return ExitCodes.CONNECTION_ERROR.value
    if isinstance(err, _RESOLUTION_ERRORS):
        return ExitCodes.RESOLUTION_ERROR.value
    return ExitCodes.FILE_ERROR.value


async def _rebuild_command(directory: str) -> int:
    root, manifest = locate_manifest(directory)
    if manifest is None or root is None:
        raise UnknownPackageError(directory)
    output = await rebuild(root)
    if output:
        sys.stdout.write(output)
    return ExitCodes.SUCCESS.value


async def dispatch(args) -> int:
    """Run the parsed command and return its exit code."""
    if args.action == "install":
        installed = await Installer().install(args.DIRECTORY, production=args.PRODUCTION)
        logger.info("Installed %d package(s).", len(installed))
        return ExitCodes.SUCCESS.value
    if args.action == "run":
        return await run_script(args.DIRECTORY, args.SCRIPT)
    if args.action == "test":
        return await run_script(args.DIRECTORY, Constants.TEST_SCRIPT)
    if args.action == "rebuild":
        return await _rebuild_command(args.DIRECTORY)
    raise ValueError(f"Unsupported command: {args.action}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE)

    try:
        apply_config_overrides(load_config(args.CONFIG))
        return asyncio.run(dispatch(args))
    except (GitPkgError, OSError, ValueError) as err:
        if is_debug_enabled(logger):
            logger.exception("%s failed", args.action)
        else:
            logger.error("%s", err)
        return exit_code_for(err)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


def run() -> None:
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    run()
