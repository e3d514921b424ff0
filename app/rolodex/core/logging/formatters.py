import traceback
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

BASE_FIELDS = "%(asctime)s %(name)s %(levelname)s %(message)s"
SOURCE_FIELDS = "%(pathname)s %(lineno)d %(funcName)s"

FIELD_NAMES = {
    "asctime": "timestamp",
    "name": "logger",
    "levelname": "level",
    "pathname": "file_path",
    "lineno": "line_number",
    "funcName": "function_name",
}


class RolodexJsonFormatter(JsonFormatter):
    """
    JSON log lines with stable field names.

    With ``with_source`` the emitting file, line and function are included.
    Exceptions are rendered as an ``exception`` object holding the type, the
    message and the formatted traceback lines.
    """

    def __init__(self, with_source: bool = False, datefmt: str = "%Y-%m-%dT%H:%M:%S", **kwargs: Any) -> None:
        fmt = kwargs.pop("format", None) or (f"{BASE_FIELDS} {SOURCE_FIELDS}" if with_source else BASE_FIELDS)
        super().__init__(fmt=fmt, datefmt=datefmt, rename_fields=dict(FIELD_NAMES), **kwargs)

    def add_fields(self, log_record: Dict[str, Any], record: Any, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        if not record.exc_info:
            return

        exc_type, exc_value, exc_tb = record.exc_info
        log_record["exception"] = {
            "type": exc_type.__name__ if exc_type else None,
            "message": str(exc_value) if exc_value else None,
            "traceback": traceback.format_exception(exc_type, exc_value, exc_tb) if exc_tb else None,
        }
        log_record.pop("exc_info", None)
        log_record.pop("exc_text", None)
