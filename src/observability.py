import logging
import json
from typing import Dict, Any

from prometheus_client import Counter, Histogram


# ─── Structured Logging ───
class JsonFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings for structured logging systems (ELK, Splunk, etc).
    """
    def format(self, record):
        log_obj: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "process_id": record.process,
        }
        # Merge extra properties if present
        if hasattr(record, "props") and isinstance(record.props, dict):  # type: ignore
            log_obj.update(record.props)  # type: ignore

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


def configure_logging(level=logging.INFO, json_output: bool = True):
    """Configures the root logger to output to stdout, JSON by default."""
    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))

    root_logger = logging.getLogger()
    # Remove existing handlers to prevent duplicate logs
    if root_logger.handlers:
        root_logger.handlers = []

    root_logger.addHandler(handler)
    root_logger.setLevel(level)


# ─── Prometheus Metrics ───
QUERY_DURATION = Histogram(
    'data_query_duration_seconds',
    'Time spent running repository queries',
    ['operation'],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0)
)

QUERY_ERRORS = Counter(
    'data_query_errors_total',
    'Total number of failed repository queries',
    ['operation']
)

SEEDED_ROWS = Counter(
    'seeded_rows_total',
    'Total number of sample rows written by the seed step'
)
