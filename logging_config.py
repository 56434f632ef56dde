# logging_config.py
import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Optional

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
     return request_id_ctx.get()


class JsonFormatter(logging.Formatter):
     """
     One JSON object per line: ts, level, logger, message, request_id,
     exception text and any structured extras set on the record.
     """

     extra_keys = ("user_id", "agreement_id", "payment_id", "ticket_id", "public_id", "document_id",
                   "method", "path", "status_code", "latency_ms")

     def format(self, record: logging.LogRecord) -> str:
          payload: dict[str, Any] = {
               "ts": datetime.now(timezone.utc).isoformat(),
               "level": record.levelname,
               "logger": record.name,
               "message": record.getMessage(),
          }

          rid = get_request_id()
          if rid:
               payload["request_id"] = rid

          if record.exc_info:
               payload["exc_info"] = self.formatException(record.exc_info)

          for k in self.extra_keys:
               if hasattr(record, k):
                    payload[k] = getattr(record, k)

          return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO") -> None:
     root = logging.getLogger()
     root.setLevel(level)

     # Clear existing handlers (uvicorn reload re-runs this)
     for h in list(root.handlers):
          root.removeHandler(h)

     handler = logging.StreamHandler(sys.stdout)
     handler.setLevel(level)
     handler.setFormatter(JsonFormatter())
     root.addHandler(handler)

     logging.getLogger("uvicorn.access").setLevel(level)
     logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
     logging.getLogger("azure").setLevel(logging.WARNING)
