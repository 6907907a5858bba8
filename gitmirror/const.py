from __future__ import annotations

from pathlib import Path

mydir = Path('~/.gitmirror').expanduser()
CONFIG_FILE = mydir / 'config.toml'
