from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Any, List, Optional

import tomllib

from .const import CONFIG_FILE
from .typing import Mirror, PathLike

logger = logging.getLogger(__name__)

def read_config(file: Optional[PathLike] = None) -> Dict[str, Any]:
  config_file = Path(file) if file is not None else CONFIG_FILE
  logger.debug('reading config from %s', config_file)
  with open(config_file, 'rb') as f:
    return tomllib.load(f)

def load_mirrors(config: Dict[str, Any]) -> List[Mirror]:
  entries = config.get('mirror', [])
  if not isinstance(entries, list):
    raise ValueError('"mirror" should be an array of tables')

  ret = []
  for i, entry in enumerate(entries):
    if not isinstance(entry, dict):
      raise ValueError(f'mirror #{i}: not a table')
    url = entry.get('url')
    path = entry.get('path')
    if not isinstance(url, str) or not url:
      raise ValueError(f'mirror #{i}: missing or invalid "url"')
    if not isinstance(path, str) or not path:
      raise ValueError(f'mirror #{i}: missing or invalid "path"')
    ret.append(Mirror(url, Path(path).expanduser()))

  return ret
