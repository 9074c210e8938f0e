"""ghc — clone GitHub repositories with per-organization SSH keys.

Each organization is bound to one SSH key; at clone time the key is
picked from the repository URL and handed to git through a throwaway
SSH client configuration.
"""

from ghc.version import __version__

__all__: list[str] = ["__version__"]
