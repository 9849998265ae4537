import json
import logging

LOGGER_NAME = "spoedpakket.tracking"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "delivery_id": getattr(record, "delivery_id", None),
            "sequence": getattr(record, "sequence", None),
            "status": getattr(record, "status", None),
        }
        return json.dumps(payload)


def configure_logging() -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.INFO)


def log_event(
    message: str,
    *,
    delivery_id: int | None = None,
    sequence: int | None = None,
    status: str | None = None,
    level: int = logging.INFO,
) -> None:
    logging.getLogger(LOGGER_NAME).log(
        level,
        message,
        extra={"delivery_id": delivery_id, "sequence": sequence, "status": status},
    )
