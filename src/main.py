"""Program entry point (CLI dispatcher).

All routing lives in `src.cli.commands`; main remains a thin wrapper.
"""
from __future__ import annotations
from src.cli.commands import cli

def main():  # pragma: no cover - thin wrapper
	cli(prog_name='esk')

if __name__ == '__main__':  # pragma: no cover
	main()
