'''
Keep a local directory mirroring a remote git repository.

The destination is treated as a disposable cache: updating it discards local
modifications and removes untracked and ignored files. No locking is done;
callers must not sync the same path from several places at once.
'''

from __future__ import annotations

import logging
import os
import stat
import subprocess
from contextlib import contextmanager
from typing import Optional, Iterator, List

from .cmd import git, git_head
from .errors import (
  GitSyncError, CloneError, FetchError, ResetError, CleanError,
  RemoteError, NotClonedError, MissingRemoteError, EmptyRemoteURLError,
  RemoteMismatchError,
)
from .events import log_event
from .typing import PathLike, Observer, SyncEvent

logger = logging.getLogger(__name__)

def is_cloned(path: PathLike) -> bool:
  '''whether ``path/.git`` exists and is a directory'''
  try:
    st = os.stat(os.path.join(path, '.git'))
  except (FileNotFoundError, NotADirectoryError):
    return False
  return stat.S_ISDIR(st.st_mode)

@contextmanager
def _step(
  op: str, path: PathLike, error: type[GitSyncError],
  observer: Observer, detail: Optional[str] = None,
) -> Iterator[None]:
  path = str(path)
  observer(SyncEvent(op, 'started', path, detail))
  try:
    yield
  except (subprocess.SubprocessError, OSError) as e:
    observer(SyncEvent(op, 'failed', path, str(e)))
    raise error(path, output=getattr(e, 'output', None)) from e
  except GitSyncError as e:
    observer(SyncEvent(op, 'failed', path, str(e)))
    raise

def ensure_cloned(
  uri: str, path: PathLike, *,
  observer: Optional[Observer] = None,
  timeout: Optional[float] = None,
  check_remote: bool = False,
) -> None:
  '''clone ``uri`` into ``path`` unless it is a working copy already

  An existing clone is left alone. Its origin is only compared with ``uri``
  when ``check_remote`` is set, raising :class:`RemoteMismatchError` on a
  difference.
  '''
  if observer is None:
    observer = log_event

  if is_cloned(path):
    logger.debug('%s is already cloned', path)
    if check_remote:
      actual = get_remote_url(path, observer=observer, timeout=timeout)
      if actual != uri:
        err = RemoteMismatchError(path, uri, actual)
        observer(SyncEvent('remote-url', 'failed', str(path), str(err)))
        raise err
    return

  with _step('clone', path, CloneError, observer,
             f'git clone --recursive {uri} {path}'):
    git(None, 'clone', '--recursive', '--', uri, str(path),
        silent=True, timeout=timeout)
    head = git_head(path, timeout=timeout)

  observer(SyncEvent('clone', 'succeeded', str(path), head))

def _update_and_clean_untracked(
  path: PathLike, *,
  observer: Observer,
  timeout: Optional[float] = None,
) -> None:
  '''fetch origin, reset to the upstream branch and remove untracked files'''
  steps: List[tuple[str, type[GitSyncError], list[str]]] = [
    ('fetch', FetchError, ['fetch', '-v']),
    ('reset', ResetError, ['reset', '--hard', '@{upstream}']),
    ('clean', CleanError, ['clean', '-xfd']),
  ]
  for op, error, args in steps:
    with _step(op, path, error, observer, 'git ' + ' '.join(args)):
      out = git(path, *args, silent=True, timeout=timeout)
    observer(SyncEvent(op, 'succeeded', str(path), out.strip() or None))

def ensure_updated(
  uri: str, path: PathLike, *,
  observer: Optional[Observer] = None,
  timeout: Optional[float] = None,
  check_remote: bool = False,
) -> None:
  '''make ``path`` an up-to-date, pristine clone of ``uri``'''
  if observer is None:
    observer = log_event

  ensure_cloned(uri, path, observer=observer, timeout=timeout,
                check_remote=check_remote)
  _update_and_clean_untracked(path, observer=observer, timeout=timeout)

def get_remote_url(
  path: PathLike, *,
  observer: Optional[Observer] = None,
  timeout: Optional[float] = None,
  remote: str = 'origin',
) -> str:
  '''return the first configured url of the ``origin`` remote'''
  if observer is None:
    observer = log_event

  if not is_cloned(path):
    raise NotClonedError(path)

  key_prefix = f'remote.{remote}.'
  args = ['config', '--local', '--null', '--get-regexp',
          '^' + key_prefix.replace('.', r'\.')]
  with _step('remote-url', path, RemoteError, observer,
             'git ' + ' '.join(args)):
    try:
      out = git(path, *args, silent=True, timeout=timeout)
    except subprocess.CalledProcessError as e:
      # exit status 1: no matching key
      if e.returncode != 1:
        raise
      raise MissingRemoteError(path, remote) from None

    urls = []
    for entry in out.split('\0'):
      if not entry:
        continue
      key, _, value = entry.partition('\n')
      if key.lower() == key_prefix.lower() + 'url':
        urls.append(value)

    if not urls:
      raise EmptyRemoteURLError(path, remote)

  observer(SyncEvent('remote-url', 'succeeded', str(path), urls[0]))
  return urls[0]
