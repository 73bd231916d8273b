"""Error taxonomy raised by resolution, installation and script running."""

from __future__ import annotations

from typing import Optional, Sequence


class GitPkgError(Exception):
    """Base class for all gitpkg errors."""


class UnknownRemoteError(GitPkgError):
    """A specifier references a remote alias absent from the remotes table."""

    def __init__(self, remote: str):
        self.remote = remote
        super().__init__(f"Unknown remote '{remote}'.")


class InvalidRemotesError(GitPkgError):
    """A remotes table entry is not an ordered list of hosts."""

    def __init__(self, remote: str):
        self.remote = remote
        super().__init__(f"Remotes expected to be an array (remote '{remote}').")


class UnknownPackageError(GitPkgError):
    """No manifest was found where one was required."""

    def __init__(self, directory: str):
        self.directory = directory
        super().__init__(f"Unknown package at '{directory}'.")


class UnresolvableRemotesError(GitPkgError):
    """A dependency expanded to an empty candidate host list."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown remotes for '{name}'.")


class TagNotFoundError(GitPkgError):
    """No candidate host offered a tag satisfying the requested range."""

    def __init__(self, name: str, version_range: Optional[str]):
        self.name = name
        self.version_range = version_range
        super().__init__(f"No tag satisfies '{version_range}' for '{name}'.")


class VerificationError(GitPkgError):
    """A clone succeeded but its tag or commit could not be verified."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not verify {path}, reason: {reason}.")


class UnknownScriptError(GitPkgError):
    """A manifest does not declare the requested script."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown script '{name}'.")


class GitCommandError(GitPkgError):
    """A git child process exited with a non-zero status."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = ""):
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(
            f"'{' '.join(self.argv)}' exited with status {returncode}{detail}"
        )


class NativeBuildError(GitPkgError):
    """The native build tool exited with a non-zero status."""

    def __init__(self, directory: str, returncode: int, stderr: str = ""):
        self.directory = directory
        self.returncode = returncode
        self.stderr = stderr.strip()
        super().__init__(
            f"Native build failed in {directory} with status {returncode}"
        )


class ConfigError(GitPkgError):
    """A configuration file could not be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid config file {path}: {reason}")
