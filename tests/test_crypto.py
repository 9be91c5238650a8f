import base64
import hashlib
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519
from src.lib.crypto import sha256_fingerprint, public_key_blob, FingerprintError

def openssh_public_line(comment=b'alice@example.com'):
	key = ed25519.Ed25519PrivateKey.generate().public_key()
	line = key.public_bytes(serialization.Encoding.OpenSSH, serialization.PublicFormat.OpenSSH)
	return line + b' ' + comment + b'\n'

def test_fingerprint_matches_openssh_format():
	line = openssh_public_line()
	blob = base64.b64decode(line.split()[1])
	expected = 'SHA256:' + base64.b64encode(hashlib.sha256(blob).digest()).decode().rstrip('=')
	assert sha256_fingerprint(line) == expected
	assert public_key_blob(line) == blob

def test_fingerprint_ignores_comment():
	key_part = openssh_public_line().split()[:2]
	a = b' '.join(key_part + [b'one'])
	b = b' '.join(key_part + [b'two'])
	assert sha256_fingerprint(a) == sha256_fingerprint(b)

@pytest.mark.parametrize('data', [b'', b'not a key', b'ssh-ed25519 !!!!'])
def test_fingerprint_rejects_garbage(data):
	with pytest.raises(FingerprintError):
		sha256_fingerprint(data)

def test_cli_fp(esk, ssh_dir):
	ssh_dir.mkdir()
	(ssh_dir / 'id_ed25519_alice').write_bytes(b'PRIVATE\n')
	line = openssh_public_line()
	(ssh_dir / 'id_ed25519_alice.pub').write_bytes(line)
	r = esk('fp', '-n', 'alice')
	assert r.exit_code == 0
	assert r.output == f'{sha256_fingerprint(line)} alice\n'

def test_cli_fp_invalid_key(esk, ssh_dir):
	ssh_dir.mkdir()
	(ssh_dir / 'id_ed25519_bad').write_bytes(b'PRIVATE\n')
	(ssh_dir / 'id_ed25519_bad.pub').write_bytes(b'garbage')
	r = esk('fp', '-n', 'bad')
	assert r.exit_code == 1
	assert r.output.startswith('Error: Not a valid OpenSSH public key')

def test_cli_fp_missing(esk):
	r = esk('fp', '-n', 'ghost')
	assert r.exit_code == 1
