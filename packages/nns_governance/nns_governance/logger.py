import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "command",
    "limit",
    "topic_filter",
    "status_filter",
    "proposal_id",
    "result_count",
    "duration_ms",
)

class JSONFormatter(logging.Formatter):
    def format(self, record):
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": getattr(record, "module_name", record.name),
            "message": record.getMessage()
        }

        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ModuleLoggerAdapter(logging.LoggerAdapter):
    """Adds module_name to every record while keeping the caller's extra fields."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**kwargs.get("extra", {}), **self.extra}
        return msg, kwargs


def get_logger(module_name: str):
    logger = logging.getLogger(module_name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return ModuleLoggerAdapter(logger, {"module_name": module_name})
