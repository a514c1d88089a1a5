"""
JSON log formatting that won't break the Elasticsearch parser.

Plain JSON logs tend to collide with fields Elasticsearch (and Filebeat)
already define, e.g. "error", "host" or "message". ElasticFormatter prepends a
prefix to every custom field so the entries always index cleanly:

    logger = create_elastic_logger("myapp", prefix="myapp.")
    logger.info("saved", extra={"error": err, "body": "ladida"})
    # {"@timestamp": "...", "@message": "saved", "level": "info",
    #  "myapp.file": "views.py:12", "func": "save",
    #  "myapp.error": "...", "myapp.body": "ladida"}

For the list of built-in fields in your cluster run
`GET filebeat-*/_mapping` in the Kibana console.

A custom field that still collides with a built-in key (easy with an empty
prefix, e.g. extra={"level": ...}) is kept as "fields.<key>" instead of
overwriting it.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from .fields import extra_fields

TIMESTAMP_KEY = "@timestamp"
MESSAGE_KEY = "@message"
LEVEL_KEY = "level"
FUNC_KEY = "func"
CLASH_PREFIX = "fields."
"""Custom fields that collide with a built-in key are moved under this prefix."""


class ElasticFormatter(logging.Formatter):
    """Formats records as JSON, prefixing every non-default field with `prefix`."""

    def __init__(self, prefix: str = "") -> None:
        super().__init__()
        self.prefix = prefix

    def to_dict(self, record: logging.LogRecord) -> Dict[str, Any]:
        entry: Dict[str, Any] = {}
        entry[TIMESTAMP_KEY] = datetime.fromtimestamp(
            record.created, tz=timezone.utc
        ).isoformat()
        entry[MESSAGE_KEY] = record.getMessage()
        entry[LEVEL_KEY] = record.levelname.lower()
        entry[self.prefix + "file"] = f"{os.path.basename(record.pathname)}:{record.lineno}"
        entry[FUNC_KEY] = record.funcName

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            entry[self.prefix + "exception"] = record.exc_text

        for name, value in extra_fields(record).items():
            key = self.prefix + name
            if key in entry:
                key = CLASH_PREFIX + key
            entry[key] = value
        return entry

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self.to_dict(record), default=str, ensure_ascii=False)


def create_elastic_logger(
    name: str, prefix: str = "", level: int = logging.INFO
) -> logging.Logger:
    """Return a logger writing Elasticsearch-compatible JSON lines to stderr."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ElasticFormatter(prefix))
    logger.handlers = [handler]
    logger.propagate = False
    return logger
