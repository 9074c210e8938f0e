"""Pure rendering of SSH client config fragments and clone commands.

No filesystem access happens here; writing the fragment to disk is the
job of :class:`~ghc.infra.ssh_config_writer.FileSSHConfigEmitter`.
"""

from __future__ import annotations

import shlex

from ghc.core.models import CloneCommand


def render_ssh_config(host_alias: str, ssh_key_path: str) -> str:
    """Return a fragment binding *host_alias* to *ssh_key_path*.

    A key path ending in ``.pub`` additionally gets
    ``IdentitiesOnly yes`` so ssh does not offer agent identities first.
    """
    lines = [
        f"Host {host_alias}",
        "\tUser git",
        f"\tIdentityFile {ssh_key_path}",
    ]
    if ssh_key_path.endswith(".pub"):
        lines.append("\tIdentitiesOnly yes")
    return "\n".join(lines) + "\n"


def build_clone_command(ssh_config_path: str, repo_url: str) -> CloneCommand:
    """Build ``git clone`` forcing ssh to read only *ssh_config_path*.

    git runs ``core.sshCommand`` through a shell, so the path is quoted.
    """
    ssh_command = f"ssh -F {shlex.quote(ssh_config_path)}"
    return CloneCommand(
        argv=(
            "git",
            "clone",
            "--config",
            f"core.sshCommand={ssh_command}",
            repo_url,
        ),
        ssh_config_path=ssh_config_path,
        repo_url=repo_url,
    )
