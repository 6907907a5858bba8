from __future__ import annotations

from typing import (
  Union, Sequence, NamedTuple, Optional, Callable,
)
from pathlib import Path
import dataclasses

Cmd = Sequence[Union[str, Path]]
PathLike = Union[str, Path]

class SyncEvent(NamedTuple):
  op: str
  status: str
  path: str
  detail: Optional[str] = None

  def __str__(self) -> str:
    s = f'{self.op} {self.status}: {self.path}'
    if self.detail:
      s += f' ({self.detail})'
    return s

Observer = Callable[[SyncEvent], None]

@dataclasses.dataclass
class Mirror:
  url: str
  path: Path
