"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    RESOLUTION_ERROR = 3
    VERIFICATION_ERROR = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    MANIFEST_FILE = "package.json"
    INSTALL_DIR = "node_modules"
    NATIVE_BUILD_FILE = "binding.gyp"
    NATIVE_BUILD_COMMAND = ["node-gyp", "rebuild"]
    GIT_BINARY = "git"
    TAG_PREFIX = "v"
    SEMVER_FRAGMENT_PREFIX = "semver:"
    LOCAL_REMOTE_PREFIX = "file:"
    DEFAULT_RANGE = "*"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    TEST_SCRIPT = "test"
