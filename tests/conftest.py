import pytest
from pathlib import Path
from click.testing import CliRunner
from src.cli.commands import cli
from src.lib.keystore import KeyStore

class FakeRunner:
    """Records argv instead of spawning; fakes ssh-keygen by writing the pair."""

    def __init__(self, rc=0):
        self.rc = rc
        self.calls = []

    def run(self, argv):
        argv = [str(a) for a in argv]
        self.calls.append(argv)
        if self.rc == 0 and argv[0] == 'ssh-keygen':
            priv = Path(argv[argv.index('-f') + 1])
            comment = argv[argv.index('-C') + 1]
            priv.write_text('PRIVATE\n')
            Path(str(priv) + '.pub').write_text(f'ssh-ed25519 AAAAfake {comment}\n')
        return self.rc

@pytest.fixture
def ssh_dir(tmp_path):
    return tmp_path / 'ssh'

@pytest.fixture
def fake_runner():
    return FakeRunner()

@pytest.fixture
def esk(ssh_dir, fake_runner):
    """Invoke the CLI against a temporary key directory and the fake runner."""
    def invoke(*args):
        obj = {'store': KeyStore(ssh_dir), 'runner': fake_runner}
        return CliRunner().invoke(cli, list(args), obj=obj)
    return invoke
