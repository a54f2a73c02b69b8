import sys
import traceback
from typing import Any

from uvicorn.server import logger

from util.config import config
from util.functions import mask_secret

__LEVELS = {"trace": 0, "debug": 1, "info": 2, "warn": 3, "warning": 3, "error": 4}


def _should_log(level: str) -> bool:
    if config.log_level == "local":
        return True  # everything goes out in local runs
    current_level = __LEVELS.get(config.log_level, 2)
    request_level = __LEVELS.get(level.lower(), 2)
    return request_level >= current_level


def _format_args(*args: Any) -> tuple[str, list[Exception]]:
    exceptions = []
    formatted_parts = []

    for arg in args:
        if isinstance(arg, Exception):
            exceptions.append(arg)
            formatted_parts.append(f"! {type(arg).__name__} (see below)")
        elif hasattr(arg, "model_dump_json"):
            formatted_parts.append(f"{type(arg).__name__}: {arg.model_dump_json()}")
        else:
            formatted_parts.append(str(arg))

    if not formatted_parts:
        return "", exceptions
    if len(formatted_parts) == 1:
        return formatted_parts[0], exceptions

    # several parts without exceptions render as a tree with a closing branch
    if not exceptions:
        head_lines = "\n ├─ ".join(formatted_parts[:-1])
        return f"{head_lines}\n └─ {formatted_parts[-1]}", exceptions
    return "\n ├─ ".join(formatted_parts), exceptions


def _scrub(text: str) -> str:
    for secret in config.all_secrets():
        value = secret.get_secret_value()
        if value:
            text = text.replace(value, mask_secret(value))
    return text


def _trace_of(exception: Exception) -> str | None:
    trace = exception.__traceback__
    if not trace:
        return None
    return "".join(traceback.format_tb(trace)).strip()


def _print_locally(level: str, message: str, exceptions: list[Exception]):
    if _should_log(level):
        print(f"[{level[0]}] {message}")
    for exception in exceptions:
        print(f" ‼  Message: {_scrub(str(exception))}", file = sys.stderr)
        if trace := _trace_of(exception):
            print(trace, file = sys.stderr)


def _log_message(level: str, message: str, exceptions: list[Exception]) -> str:
    message = _scrub(message)
    if not _should_log(level) and not exceptions:
        return message

    if config.log_level == "local":
        _print_locally(level, message, exceptions)
        return message

    try:
        if _should_log(level):
            match level:
                case "TRACE" | "DEBUG":
                    logger.debug(message)
                case "INFO":
                    logger.info(message)
                case "WARN":
                    logger.warning(message)
                case "ERROR":
                    logger.error(message)
        for exception in exceptions:
            logger.error(f"Message: {_scrub(str(exception))}")
            if trace := _trace_of(exception):
                logger.error(f"Details:\n └─ {trace}")
    except Exception:
        _print_locally(level, message, exceptions)
    return message


def t(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("TRACE", message, exceptions)


def d(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("DEBUG", message, exceptions)


def i(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("INFO", message, exceptions)


def w(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("WARN", message, exceptions)


def e(*args: Any) -> str:
    message, exceptions = _format_args(*args)
    return _log_message("ERROR", message, exceptions)
