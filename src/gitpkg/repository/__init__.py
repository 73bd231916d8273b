"""Git transport collaborators."""

from .git import GitCli, GitTransport, parse_ls_remote

__all__ = ["GitCli", "GitTransport", "parse_ls_remote"]
