from __future__ import annotations

from typing import Optional

from .typing import PathLike

class GitSyncError(Exception):
  step = 'sync'

  def __init__(
    self, path: PathLike, msg: Optional[str] = None,
    output: Optional[str] = None,
  ) -> None:
    self.path = str(path)
    self.output = output
    if msg is None:
      msg = f'{self.step} at {self.path!r} failed'
    super().__init__(msg)

class CloneError(GitSyncError):
  step = 'clone'

class UpdateError(GitSyncError):
  pass

class FetchError(UpdateError):
  step = 'fetch'

class ResetError(UpdateError):
  step = 'reset'

class CleanError(UpdateError):
  step = 'clean'

class RemoteError(GitSyncError):
  step = 'remote-url'

class NotClonedError(RemoteError):
  def __init__(self, path: PathLike) -> None:
    super().__init__(path, f'{str(path)!r} is not a git working copy')

class MissingRemoteError(RemoteError):
  def __init__(self, path: PathLike, remote: str = 'origin') -> None:
    self.remote = remote
    super().__init__(path, f'no remote {remote!r} configured at {str(path)!r}')

class EmptyRemoteURLError(RemoteError):
  def __init__(self, path: PathLike, remote: str = 'origin') -> None:
    self.remote = remote
    super().__init__(
      path, f'remote {remote!r} at {str(path)!r} has no url configured')

class RemoteMismatchError(RemoteError):
  def __init__(self, path: PathLike, expected: str, actual: str) -> None:
    self.expected = expected
    self.actual = actual
    super().__init__(
      path,
      f'{str(path)!r} is a clone of {actual!r}, not {expected!r}',
    )
