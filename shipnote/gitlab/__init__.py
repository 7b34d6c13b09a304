"""GitLab API access."""

from .client import GitLabClient

__all__ = ["GitLabClient"]
