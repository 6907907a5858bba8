from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from pathlib import Path
from typing import Optional, List, Dict, Any

from . import gitutil
from .errors import GitSyncError
from .events import log_event, print_event, tee
from .slogconf import setup_logging
from .tools import read_config, load_mirrors
from .typing import Mirror, Observer

logger = logging.getLogger(__name__)

def sync_mirrors(
  mirrors: List[Mirror], *,
  observer: Optional[Observer] = None,
  timeout: Optional[float] = None,
  check_remote: bool = False,
) -> List[Mirror]:
  '''update every mirror in turn; return the ones that failed'''
  failed = []
  for m in mirrors:
    logger.info('syncing %s into %s', m.url, m.path)
    try:
      gitutil.ensure_updated(
        m.url, m.path, observer=observer,
        timeout=timeout, check_remote=check_remote,
      )
    except GitSyncError:
      logger.exception('failed to sync %s into %s', m.url, m.path)
      failed.append(m)
  return failed

def _settings(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
  section = config.get('gitmirror', {})
  return {
    'timeout': args.timeout if args.timeout is not None else section.get('timeout'),
    'check_remote': args.check_remote or section.get('check_remote', False),
    'json': args.json or section.get('logformat') == 'json',
  }

def main(argv: Optional[List[str]] = None) -> int:
  parser = argparse.ArgumentParser(
    description='keep local directories mirroring remote git repositories',
  )
  parser.add_argument('-c', '--config',
                      help='config file (default: ~/.gitmirror/config.toml)')
  parser.add_argument('--json', action='store_true',
                      help='log in JSON')
  parser.add_argument('-v', '--verbose', action='store_true',
                      help='debug logging and print each git step')
  parser.add_argument('--check-remote', action='store_true',
                      help='fail when an existing clone points at another url')
  parser.add_argument('--timeout', type=float,
                      help='seconds to wait for each git command')
  parser.add_argument('--remote-url', metavar='PATH',
                      help='print the origin url of a working copy and exit')
  parser.add_argument('url', nargs='?', help='repository to mirror')
  parser.add_argument('path', nargs='?', help='where to mirror it')
  args = parser.parse_args(argv)

  if (args.url is None) != (args.path is None):
    parser.error('url and path should be given together')
  if args.remote_url is not None and args.url is not None:
    parser.error('--remote-url does not take url and path')

  config: Dict[str, Any] = {}
  mirrors: List[Mirror] = []
  try:
    if args.config is not None or (args.url is None and args.remote_url is None):
      config = read_config(args.config)
    if args.url is None and args.remote_url is None:
      mirrors = load_mirrors(config)
  except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    logger.error('bad config: %s', e)
    return 1
  settings = _settings(config, args)

  setup_logging(
    logging.DEBUG if args.verbose else logging.INFO,
    json = settings['json'],
  )
  observer = tee(log_event, print_event) if args.verbose else log_event

  if args.remote_url is not None:
    try:
      print(gitutil.get_remote_url(
        args.remote_url, observer=observer, timeout=settings['timeout']))
    except GitSyncError as e:
      logger.error('%s', e)
      return 1
    return 0

  if args.url is not None:
    mirrors = [Mirror(args.url, Path(args.path))]

  failed = sync_mirrors(
    mirrors, observer=observer,
    timeout=settings['timeout'], check_remote=settings['check_remote'],
  )
  if failed:
    logger.error('%d of %d mirror(s) failed: %s', len(failed), len(mirrors),
                 ', '.join(str(m.path) for m in failed))
    return 1
  return 0

if __name__ == '__main__':
  sys.exit(main())
