"""Project configuration settings.

Everything the key store, runner and CLI need to agree on lives here.
The SSH directory is resolved on each call so tests can redirect HOME.
"""

from pathlib import Path

# Key naming
KEY_TYPE = "ed25519"
KEY_PREFIX = f"id_{KEY_TYPE}_"
PUBLIC_SUFFIX = ".pub"

# Store
SSH_DIR_NAME = ".ssh"
DIR_MODE = 0o700  # owner rwx only

def default_ssh_dir() -> Path:
	return Path.home() / SSH_DIR_NAME

# External programs
SSH_KEYGEN_BIN = "ssh-keygen"
SSH_BIN = "ssh"
GIT_BIN = "git"

# Defaults for handlers
DEFAULT_SSH_PORT = "22"
DEFAULT_GIT_DIR = "."
GIT_META_DIR = ".git"
GIT_SSH_COMMAND_KEY = "core.sshCommand"

# Logging
LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

__all__ = [
	'KEY_TYPE','KEY_PREFIX','PUBLIC_SUFFIX','SSH_DIR_NAME','DIR_MODE','default_ssh_dir',
	'SSH_KEYGEN_BIN','SSH_BIN','GIT_BIN','DEFAULT_SSH_PORT','DEFAULT_GIT_DIR','GIT_META_DIR',
	'GIT_SSH_COMMAND_KEY','LOG_LEVEL','LOG_FORMAT'
]
