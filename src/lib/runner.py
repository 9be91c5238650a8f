"""External command runner and argv builders for ssh-keygen, ssh and git."""
from __future__ import annotations
import shlex, logging, subprocess
from pathlib import Path
from typing import List, Optional, Sequence
from config.settings import (
	KEY_TYPE, SSH_KEYGEN_BIN, SSH_BIN, GIT_BIN, GIT_SSH_COMMAND_KEY
)
from .keystore import KeyIdentity

log = logging.getLogger(__name__)

class RunnerError(Exception):
	pass

class CommandRunner:
	"""Runs a program attached to the current terminal and returns its exit status.

	stdin/stdout/stderr are inherited, so interactive programs (ssh sessions,
	ssh-keygen passphrase prompts) take over the terminal until they exit.
	Ctrl-C does not abandon the child: its own exit status is returned,
	128+N when signal N killed it.
	"""

	def run(self, argv: Sequence[str]) -> int:
		argv = [str(a) for a in argv]
		log.debug('exec: %s', shlex.join(argv))
		try:
			proc = subprocess.Popen(argv)
		except FileNotFoundError as e:
			raise RunnerError(f'{argv[0]} not found') from e
		try:
			rc = proc.wait()
		except KeyboardInterrupt:
			# the terminal delivered SIGINT to the child too; let it finish
			log.debug('interrupted, waiting for %s', argv[0])
			rc = proc.wait()
		if rc < 0:
			# killed by signal N: report 128+N like a shell
			rc = 128 - rc
		log.debug('%s exited with %d', argv[0], rc)
		return rc


def keygen_argv(key: KeyIdentity, comment: Optional[str] = None) -> List[str]:
	return [SSH_KEYGEN_BIN, '-t', KEY_TYPE, '-f', str(key.private_path), '-C', comment or key.name]

def ssh_argv(key: KeyIdentity, host: str, port: str) -> List[str]:
	return [SSH_BIN, '-i', str(key.private_path), '-p', port, host]

def git_ssh_command(key: KeyIdentity) -> str:
	return f"{SSH_BIN} -i {shlex.quote(str(key.private_path))} -o IdentitiesOnly=yes"

def git_config_argv(repo: Path | str, key: KeyIdentity) -> List[str]:
	# -C scopes the write to the repository's own config
	return [GIT_BIN, '-C', str(repo), 'config', GIT_SSH_COMMAND_KEY, git_ssh_command(key)]
