import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Optional

LOG_EXTRA_FIELDS = (
    "method",
    "url",
    "status",
    "duration_ms",
    "project",
    "tool",
)

# httpx/httpcore log every request line at INFO; pt.request already covers it.
NOISY_LOGGERS = ("httpx", "httpcore")


class LogfmtFormatter(logging.Formatter):
    """logfmt lines: ts, level, logger, event, then any known extras."""

    def __init__(self, *, include_time: bool = True):
        super().__init__()
        self.include_time = include_time

    def format(self, record: logging.LogRecord) -> str:
        kv: list[str] = []
        if self.include_time:
            ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
            kv.append(f"ts={ts.isoformat(timespec='milliseconds')}")
        kv += [f"level={record.levelname.lower()}", f"logger={record.name}"]

        msg = record.getMessage()
        if msg:
            kv.append(f"event={self._fmt_val(msg)}")

        kv.extend(
            f"{key}={self._fmt_val(getattr(record, key))}"
            for key in LOG_EXTRA_FIELDS
            if getattr(record, key, None) is not None
        )

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            kv.append(f"exc_type={type(exc).__name__}")
            kv.append(f"exc={self._fmt_val(exc)}")

        return " ".join(kv)

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, (int, float, bool)):
            return str(val)
        s = str(val).replace("\n", "\\n")
        if not s or any(c in s for c in ' ="'):
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(level: str = "INFO", stream: Optional[IO[str]] = None) -> None:
    """
    Route root logging to stream (stderr by default) as logfmt.
    stdout stays free for the MCP stdio protocol.
    """
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(LogfmtFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root.level, logging.WARNING))


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS", "NOISY_LOGGERS"]
