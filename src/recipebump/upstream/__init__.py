"""
Upstream collaborators: the GitHub REST API and plain HTTPS downloads.
"""

from recipebump.upstream.fetch import sha256_of_chunks, sha256_of_url
from recipebump.upstream.github import GitHubClient

__all__ = ["GitHubClient", "sha256_of_chunks", "sha256_of_url"]
