"""Key store: the naming convention for key pairs inside an SSH directory.

The directory is the database. Nothing is cached between calls; every
operation re-checks the filesystem.
"""
from __future__ import annotations
import os, logging
from dataclasses import dataclass
from pathlib import Path
from typing import List
from config import settings

log = logging.getLogger(__name__)

class KeyStoreError(Exception): ...
class InvalidKeyNameError(KeyStoreError): ...
class KeyNotFoundError(KeyStoreError): ...
class KeyExistsError(KeyStoreError): ...
class NotARepositoryError(KeyStoreError): ...


@dataclass(frozen=True)
class KeyIdentity:
	name: str
	private_path: Path

	@property
	def public_path(self) -> Path:
		return self.private_path.with_name(self.private_path.name + settings.PUBLIC_SUFFIX)

	def exists(self) -> bool:
		return self.private_path.is_file()

	def complete(self) -> bool:
		return self.private_path.is_file() and self.public_path.is_file()


class KeyStore:
	def __init__(self, base_dir: Path | str | None = None):
		# Resolve lazily so a changed HOME is honoured
		self.base_dir = Path(base_dir) if base_dir is not None else settings.default_ssh_dir()

	def exists(self) -> bool:
		return self.base_dir.is_dir()

	def identity(self, name: str) -> KeyIdentity:
		"""Map a key name to its file pair. Rejects empty names and path separators."""
		if not name:
			raise InvalidKeyNameError('-n NAME is required')
		seps = {'/', os.sep, os.altsep} - {None}
		if any(s in name for s in seps) or name in ('.', '..'):
			raise InvalidKeyNameError(f"Invalid key name '{name}'")
		return KeyIdentity(name, self.base_dir / f"{settings.KEY_PREFIX}{name}")

	def list(self) -> List[KeyIdentity]:
		if not self.exists(): return []
		found = []
		for pub in self.base_dir.glob(f"{settings.KEY_PREFIX}*{settings.PUBLIC_SUFFIX}"):
			stem = pub.name[:-len(settings.PUBLIC_SUFFIX)]
			name = stem[len(settings.KEY_PREFIX):]
			if not name: continue
			found.append(KeyIdentity(name, pub.with_name(stem)))
		return sorted(found, key=lambda k: k.name)

	def ensure_dir(self, tighten: bool = False) -> Path:
		"""Create the directory owner-only. An existing one is chmodded only with `tighten`."""
		created = not self.base_dir.is_dir()
		self.base_dir.mkdir(parents=True, exist_ok=True)
		# mkdir's mode is subject to umask
		if created or tighten:
			os.chmod(self.base_dir, settings.DIR_MODE)
			log.info('Set mode %o on %s', settings.DIR_MODE, self.base_dir)
		return self.base_dir

	def require_absent(self, name: str) -> KeyIdentity:
		key = self.identity(name)
		if key.private_path.exists():
			raise KeyExistsError(f"Key '{name}' already exists at {key.private_path}")
		return key

	def require_private(self, name: str) -> KeyIdentity:
		key = self.identity(name)
		if not key.exists():
			raise KeyNotFoundError(f"Key '{name}' not found at {key.private_path}")
		return key

	def require_public(self, name: str) -> KeyIdentity:
		key = self.identity(name)
		if not key.public_path.is_file():
			raise KeyNotFoundError(f"Public key for '{name}' not found at {key.public_path}")
		return key

	def read_public(self, name: str) -> bytes:
		self.require_private(name)
		return self.require_public(name).public_path.read_bytes()

	def remove(self, name: str) -> KeyIdentity:
		"""Delete both halves of a key pair. The public half may already be gone."""
		key = self.require_private(name)
		key.private_path.unlink()
		log.info('Removed %s', key.private_path)
		if key.public_path.exists():
			key.public_path.unlink()
			log.info('Removed %s', key.public_path)
		else:
			log.info('No public key at %s', key.public_path)
		return key


def require_repository(directory: Path | str) -> Path:
	"""Check for a `.git` entry directly inside `directory` (no parent search)."""
	path = Path(directory)
	if not (path / settings.GIT_META_DIR).exists():
		raise NotARepositoryError(f"'{directory}' is not a git repository")
	return path
