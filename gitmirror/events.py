from __future__ import annotations

from typing import List

import structlog

from .typing import SyncEvent, Observer

sync_logger = structlog.get_logger(logger_name='gitmirror')

def log_event(event: SyncEvent) -> None:
  kw = {'op': event.op, 'status': event.status, 'path': event.path}
  if event.detail:
    kw['detail'] = event.detail
  if event.status == 'failed':
    sync_logger.error('sync step failed', **kw)
  else:
    sync_logger.info(f'sync step {event.status}', **kw)

def print_event(event: SyncEvent) -> None:
  print(f'\x1b[34;1m{event}\x1b[0m', flush=True)

def collect_events(events: List[SyncEvent]) -> Observer:
  return events.append

def tee(*observers: Observer) -> Observer:
  def observer(event: SyncEvent) -> None:
    for o in observers:
      o(event)
  return observer
