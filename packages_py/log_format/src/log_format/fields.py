"""
Helpers for reading custom fields off log records.
"""
import logging
from typing import Any, Dict

# attributes every LogRecord carries; anything else came in through `extra=`
RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the fields passed via `extra=` to the logging call."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in RESERVED_ATTRS and not key.startswith("_")
    }
