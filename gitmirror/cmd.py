from __future__ import annotations

import os
import logging
import subprocess
import sys
import re
from typing import Optional, Dict

from .typing import Cmd, PathLike

logger = logging.getLogger(__name__)

def run_cmd(
  cmd: Cmd, *,
  silent: bool = False,
  cwd: Optional[PathLike] = None,
  env: Optional[Dict[str, str]] = None,
  timeout: Optional[float] = None,
) -> str:
  logger.debug('running %r in %s,%s showing output%s', cmd,
               cwd or os.getcwd(),
               ' not' if silent else '',
               f', timeout {timeout}s' if timeout else '')

  p = subprocess.Popen(
    cmd, stdin = subprocess.DEVNULL,
    stdout = subprocess.PIPE, stderr = subprocess.STDOUT,
    cwd = cwd, env = env,
  )
  try:
    outb, _ = p.communicate(timeout=timeout)
  except subprocess.TimeoutExpired as e:
    p.kill()
    outb, _ = p.communicate()
    # killed: keep what it printed so far
    raise subprocess.TimeoutExpired(
      cmd, e.timeout, output=_decode(outb)) from None

  outs = _decode(outb)
  if not silent and outs:
    sys.stderr.write(outs)
    sys.stderr.flush()
  if p.returncode != 0:
    # set output by keyword to avoid being included in repr()
    raise subprocess.CalledProcessError(p.returncode, cmd, output=outs)
  return outs

def _decode(outb: Optional[bytes]) -> str:
  if not outb:
    return ''
  outs = outb.decode('utf-8', errors='replace')
  outs = outs.replace('\r\n', '\n')
  # progress meters rewrite the same line
  outs = re.sub(r'.*\r', '', outs)
  return outs

def _git_cmd(path: Optional[PathLike], args: tuple[str, ...]) -> list[str]:
  if path is None:
    return ['git', *args]
  # no repository discovery: a broken .git must not reach an enclosing repo
  top = os.path.abspath(path)
  return [
    'git', '--git-dir=' + os.path.join(top, '.git'),
    '--work-tree=' + top, *args,
  ]

def git(path: Optional[PathLike], *args: str, **kwargs) -> str:
  return run_cmd(_git_cmd(path, args), cwd=path, **kwargs)

def git_head(path: PathLike, timeout: Optional[float] = None) -> Optional[str]:
  '''describe HEAD as "<sha> <subject>", None if there are no commits yet'''
  p = subprocess.run(
    _git_cmd(path, ('log', '-1', '--format=%H %s')),
    cwd = path, stdin = subprocess.DEVNULL,
    stdout = subprocess.PIPE, stderr = subprocess.DEVNULL,
    universal_newlines = True, timeout = timeout,
  )
  if p.returncode != 0:
    return None
  return p.stdout.strip() or None
