"""Git queries used to record toolchain provenance."""

from .repository import GitError, Repository

__all__ = ["GitError", "Repository"]
