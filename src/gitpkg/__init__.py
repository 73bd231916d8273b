"""gitpkg - dependency resolver and installer for git-hosted packages."""

__version__ = "0.1.0"

from gitpkg.installer import Installer, install  # noqa: E402
from gitpkg.manifest import locate_manifest  # noqa: E402
from gitpkg.scripts import rebuild, run_script  # noqa: E402
from gitpkg.versioning.specifier import expand_specifier  # noqa: E402
from gitpkg.versioning.tag_match import match_tag  # noqa: E402

__all__ = [
    "Installer",
    "expand_specifier",
    "install",
    "locate_manifest",
    "match_tag",
    "rebuild",
    "run_script",
]
