from pathlib import Path

import pytest

from gitmirror import tools
from gitmirror.tools import read_config, load_mirrors
from gitmirror.typing import Mirror

CONFIG = '''\
[gitmirror]
timeout = 600
check_remote = true

[[mirror]]
url = "https://example.com/repo.git"
path = "~/mirrors/repo"

[[mirror]]
url = "git@example.com:other.git"
path = "/srv/other"
'''

def test_read_config(tmp_path):
  f = tmp_path / 'config.toml'
  f.write_text(CONFIG)
  config = read_config(f)
  assert config['gitmirror'] == {'timeout': 600, 'check_remote': True}
  assert len(config['mirror']) == 2

def test_read_config_default_location(tmp_path, monkeypatch):
  f = tmp_path / 'config.toml'
  f.write_text(CONFIG)
  monkeypatch.setattr(tools, 'CONFIG_FILE', f)
  assert read_config()['gitmirror']['timeout'] == 600

def test_read_config_missing(tmp_path):
  with pytest.raises(FileNotFoundError):
    read_config(tmp_path / 'nope.toml')

def test_load_mirrors(tmp_path):
  f = tmp_path / 'config.toml'
  f.write_text(CONFIG)
  mirrors = load_mirrors(read_config(f))
  assert mirrors == [
    Mirror('https://example.com/repo.git',
           Path('~/mirrors/repo').expanduser()),
    Mirror('git@example.com:other.git', Path('/srv/other')),
  ]

def test_load_mirrors_empty():
  assert load_mirrors({}) == []

@pytest.mark.parametrize('config, msg', [
  ({'mirror': {'url': 'x', 'path': 'y'}}, 'array of tables'),
  ({'mirror': ['x']}, 'mirror #0: not a table'),
  ({'mirror': [{'path': 'y'}]}, 'mirror #0: missing or invalid "url"'),
  ({'mirror': [{'url': 'x', 'path': 'y'}, {'url': 'x'}]},
   'mirror #1: missing or invalid "path"'),
  ({'mirror': [{'url': 'x', 'path': 3}]}, 'mirror #0: missing or invalid "path"'),
])
def test_load_mirrors_invalid(config, msg):
  with pytest.raises(ValueError, match=msg):
    load_mirrors(config)
