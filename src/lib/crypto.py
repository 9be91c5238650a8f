"""Public key fingerprints (OpenSSH SHA256 format)."""
from __future__ import annotations
import base64, hashlib
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

class FingerprintError(Exception):
	pass

def public_key_blob(data: bytes) -> bytes:
	"""Return the wire-format key blob of an OpenSSH public key line."""
	try:
		key = serialization.load_ssh_public_key(data.strip())
	except (ValueError, TypeError) as e:
		raise FingerprintError(f"Not a valid OpenSSH public key: {e}") from e
	except UnsupportedAlgorithm as e:
		raise FingerprintError(f"Unsupported key type: {e}") from e
	line = key.public_bytes(serialization.Encoding.OpenSSH, serialization.PublicFormat.OpenSSH)
	return base64.b64decode(line.split()[1])

def sha256_fingerprint(data: bytes) -> str:
	digest = hashlib.sha256(public_key_blob(data)).digest()
	return 'SHA256:' + base64.b64encode(digest).decode('ascii').rstrip('=')
