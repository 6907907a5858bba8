from .gitutil import (
  is_cloned, ensure_cloned, ensure_updated, get_remote_url,
)
from .errors import (
  GitSyncError, CloneError, UpdateError, FetchError, ResetError,
  CleanError, RemoteError, NotClonedError, MissingRemoteError,
  EmptyRemoteURLError, RemoteMismatchError,
)

__all__ = [
  'is_cloned', 'ensure_cloned', 'ensure_updated', 'get_remote_url',
  'GitSyncError', 'CloneError', 'UpdateError', 'FetchError', 'ResetError',
  'CleanError', 'RemoteError', 'NotClonedError', 'MissingRemoteError',
  'EmptyRemoteURLError', 'RemoteMismatchError',
]
