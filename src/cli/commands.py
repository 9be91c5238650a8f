"""CLI commands implemented with click.

The dispatcher keeps the exit-status contract of the shell tool it grew out
of: usage errors and failed preconditions exit 1, external programs'
statuses pass through unchanged.
"""
from __future__ import annotations
import logging, click
from pathlib import Path
from config import settings
from src.lib.crypto import sha256_fingerprint, FingerprintError
from src.lib.keystore import KeyStore, KeyStoreError, require_repository
from src.lib.runner import (
	CommandRunner, RunnerError, keygen_argv, ssh_argv, git_config_argv
)

USAGE = """\
esk - Easy SSH Key Management

Usage:
  esk ls                                        List all SSH keys in ~/.ssh
  esk gen -n NAME [-e EMAIL] [-f PATH]          Generate a new SSH key
  esk view -n NAME                              Print a public key
  esk fp -n NAME                                Print a public key fingerprint
  esk rm -n NAME                                Remove a key pair
  esk ssh -n NAME -h USER@HOST [-p PORT]        SSH into a host using a key
  esk git -n NAME [-d DIR]                      Configure a git repo to use a key

Options:
  -n NAME       Key name (stored as id_ed25519_NAME)
  -e EMAIL      Key comment (default: NAME)
  -f PATH       Directory to create the key in (default: ~/.ssh)
  -h USER@HOST  Remote host to connect to
  -p PORT       SSH port (default: 22)
  -d DIR        Git repository directory (default: .)
  --verbose     Log external commands and file changes"""


def usage():
	click.echo(USAGE)

def fail(message: str):
	click.echo(f'Error: {message}')
	raise SystemExit(1)

def propagate(rc: int):
	if rc != 0:
		raise SystemExit(rc)


class _UsageContract:
	"""Map click's parse errors onto `Unknown option` / `Error:` with exit 1."""

	def parse_args(self, ctx, args):
		try:
			return super().parse_args(ctx, args)
		except click.NoSuchOption as e:
			click.echo(f'Unknown option: {e.option_name}')
			usage()
			ctx.exit(1)
		except click.UsageError as e:
			click.echo(f'Error: {e.format_message()}')
			ctx.exit(1)


class EskCommand(_UsageContract, click.Command):
	pass


class EskGroup(_UsageContract, click.Group):
	command_class = EskCommand

	def resolve_command(self, ctx, args):
		name = args[0]
		if self.get_command(ctx, name) is None:
			click.echo(f'Unknown command: {name}')
			usage()
			ctx.exit(1)
		return super().resolve_command(ctx, args)


@click.group(cls=EskGroup, invoke_without_command=True)
@click.option('--verbose', is_flag=True, help='Log external commands and file changes.')
@click.pass_context
def cli(ctx, verbose):
	"""esk - Easy SSH Key Management"""
	logging.basicConfig(format=settings.LOG_FORMAT)
	# basicConfig only configures once per process
	logging.getLogger().setLevel(logging.DEBUG if verbose else settings.LOG_LEVEL)
	obj = ctx.ensure_object(dict)
	obj.setdefault('store', KeyStore())
	obj.setdefault('runner', CommandRunner())
	if ctx.invoked_subcommand is None:
		usage()
		ctx.exit(0)


def _run(runner, argv) -> int:
	try:
		return runner.run(argv)
	except RunnerError as e:
		fail(str(e))


@cli.command('ls')
@click.pass_obj
def list_keys(obj):
	"""List all SSH keys in the key directory."""
	store: KeyStore = obj['store']
	if not store.exists():
		click.echo(f'No {store.base_dir} directory found')
		return
	keys = store.list()
	if not keys:
		click.echo(f'No SSH keys found in {store.base_dir}')
		return
	width = max(len(k.name) for k in keys)
	for k in keys:
		click.echo(f'{k.name:<{width}}  {k.private_path}')


@cli.command()
@click.option('-n', 'name', default='', metavar='NAME')
@click.option('-e', 'email', default=None, metavar='EMAIL')
@click.option('-f', 'path', default=None, metavar='PATH', type=click.Path(path_type=Path))
@click.pass_obj
def gen(obj, name, email, path):
	"""Generate a new ed25519 key pair with ssh-keygen."""
	store: KeyStore = KeyStore(path) if path is not None else obj['store']
	try:
		key = store.require_absent(name)
		store.ensure_dir(tighten=path is None)
	except (KeyStoreError, OSError) as e:
		fail(str(e))
	propagate(_run(obj['runner'], keygen_argv(key, email)))
	click.echo(f"Key '{name}' created at {key.private_path}")


@cli.command()
@click.option('-n', 'name', default='', metavar='NAME')
@click.pass_obj
def view(obj, name):
	"""Print the public key verbatim."""
	try:
		data = obj['store'].read_public(name)
	except KeyStoreError as e:
		fail(str(e))
	click.echo(data, nl=False)


@cli.command()
@click.option('-n', 'name', default='', metavar='NAME')
@click.pass_obj
def fp(obj, name):
	"""Print the SHA256 fingerprint of a public key."""
	try:
		fingerprint = sha256_fingerprint(obj['store'].read_public(name))
	except (KeyStoreError, FingerprintError) as e:
		fail(str(e))
	click.echo(f'{fingerprint} {name}')


@cli.command('rm')
@click.option('-n', 'name', default='', metavar='NAME')
@click.pass_obj
def remove(obj, name):
	"""Delete a key pair."""
	try:
		obj['store'].remove(name)
	except (KeyStoreError, OSError) as e:
		fail(str(e))
	click.echo(f"Key '{name}' removed")


@cli.command()
@click.option('-n', 'name', default='', metavar='NAME')
@click.option('-h', 'host', default='', metavar='USER@HOST')
@click.option('-p', 'port', default=settings.DEFAULT_SSH_PORT, metavar='PORT')
@click.pass_obj
def ssh(obj, name, host, port):
	"""Open an SSH session using only the named key."""
	if not name:
		fail('-n NAME is required')
	if not host:
		fail('-h USER@HOST is required')
	try:
		key = obj['store'].require_private(name)
	except KeyStoreError as e:
		fail(str(e))
	propagate(_run(obj['runner'], ssh_argv(key, host, port)))


@cli.command()
@click.option('-n', 'name', default='', metavar='NAME')
@click.option('-d', 'directory', default=settings.DEFAULT_GIT_DIR, metavar='DIR')
@click.pass_obj
def git(obj, name, directory):
	"""Point a repository's core.sshCommand at the named key."""
	try:
		key = obj['store'].require_private(name)
		repo = require_repository(directory)
	except KeyStoreError as e:
		fail(str(e))
	propagate(_run(obj['runner'], git_config_argv(repo, key)))
	click.echo(f"Configured '{directory}' to use key '{name}'")
