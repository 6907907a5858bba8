import logging
import pathlib
import shutil
import subprocess
import sys

import pytest
import structlog

# sys.path does not support `Path`s yet
this_dir = pathlib.Path(__file__).resolve()
sys.path.insert(0, str(this_dir.parents[1]))

requires_git = pytest.mark.skipif(
  shutil.which('git') is None, reason='git is not installed')

GIT_ENV = {
  'GIT_AUTHOR_NAME': 'gitmirror test',
  'GIT_AUTHOR_EMAIL': 'test@example.com',
  'GIT_COMMITTER_NAME': 'gitmirror test',
  'GIT_COMMITTER_EMAIL': 'test@example.com',
  'GIT_CONFIG_NOSYSTEM': '1',
}

@pytest.fixture(autouse=True)
def git_env(monkeypatch, tmp_path_factory):
  home = tmp_path_factory.mktemp('home')
  monkeypatch.setenv('HOME', str(home))
  monkeypatch.delenv('XDG_CONFIG_HOME', raising=False)
  for k, v in GIT_ENV.items():
    monkeypatch.setenv(k, v)

def git(cwd, *args):
  return subprocess.check_output(
    ['git', *args], cwd=cwd, universal_newlines=True,
    stderr=subprocess.STDOUT,
  ).strip()

def commit_file(repo, name, content, msg=None):
  p = pathlib.Path(repo) / name
  p.parent.mkdir(parents=True, exist_ok=True)
  p.write_text(content)
  git(repo, 'add', '--', name)
  git(repo, 'commit', '-q', '-m', msg or f'update {name}')
  return git(repo, 'rev-parse', 'HEAD')

@pytest.fixture
def upstream(tmp_path):
  '''a repository with two commits on "main", one of them a .gitignore'''
  repo = tmp_path / 'upstream'
  repo.mkdir()
  git(repo, 'init', '-q')
  git(repo, 'symbolic-ref', 'HEAD', 'refs/heads/main')
  commit_file(repo, '.gitignore', '*.log\nbuild/\n')
  commit_file(repo, 'README', 'hello\n', 'initial import')
  return repo

@pytest.fixture
def dest(tmp_path):
  return tmp_path / 'mirror'

@pytest.fixture
def events():
  return []

@pytest.fixture
def restore_logging():
  root = logging.getLogger()
  handlers, level = root.handlers[:], root.level
  yield
  root.handlers[:] = handlers
  root.setLevel(level)
  structlog.reset_defaults()
