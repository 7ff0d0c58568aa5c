"""
Fault-injection directives embedded in todo item text.

Load tests drive error paths through the API by writing instructions into the
``item`` field:

- ``!exception <message>`` fails the request with an injected fault
- ``!error <status>`` answers with that HTTP status (400 and above only)
- ``!slow <milliseconds>`` delays the response
"""

import re
import time
from typing import Optional

from todo_service.handlers.utils.errors import ErrorContext, InjectedFaultError
from todo_service.handlers.utils.observability import logger

_EXCEPTION_DIRECTIVE = re.compile(r'!exception (.+)')
_SLOW_DIRECTIVE = re.compile(r'!slow (\d+)')
_ERROR_DIRECTIVE = re.compile(r'!error (\d{3})')


def raise_if_exception_requested(item: str, context: Optional[ErrorContext] = None) -> None:
    match = _EXCEPTION_DIRECTIVE.search(item)
    if match:
        logger.info(f"throwing exception '{match.group(1)}' as instructed")
        raise InjectedFaultError(match.group(1), context=context)


def requested_delay_ms(item: str) -> Optional[int]:
    match = _SLOW_DIRECTIVE.search(item)
    return int(match.group(1)) if match else None


def requested_error_status(item: str) -> Optional[int]:
    """Return the status asked for by ``!error``; codes below 400 are ignored."""
    match = _ERROR_DIRECTIVE.search(item)
    if not match:
        return None
    status = int(match.group(1))
    return status if status >= 400 else None


def delay(delay_ms: int, max_delay_ms: int) -> int:
    """Sleep for ``delay_ms`` capped at ``max_delay_ms``; returns the applied delay."""
    applied = max(0, min(delay_ms, max_delay_ms))
    logger.info(f'delaying response for {applied}ms as instructed', extra={'requested_delay_ms': delay_ms})
    time.sleep(applied / 1000)
    return applied
