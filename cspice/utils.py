"""Generic utilities (not specific to the SPICE library).
"""

import datetime
import logging
import logging.config
import os
import subprocess
import typing
from pathlib import Path

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    """Interpret an environment variable as a boolean flag.

    Parameters
    ----------
    name : str
        Environment variable name.
    default : bool, optional
        Value to use when the variable is unset or empty.

    Returns
    -------
    bool

    """
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    return value.lower() in _TRUTHY


def capture_subprocess(cmd, timeout=3600, capture_output=False, cwd=None):
    """Execute commands in a subprocess.

    Parameters
    ----------
    cmd : list of str
        Command arguments to execute.
    timeout : int, optional
        Number of seconds to wait before timing out. Default=3600 (1hr)
    capture_output : bool, optional
        Option to return the stdout text. Default=False
    cwd : str or Path, optional
        Working directory of the subprocess.

    Returns
    -------
    None or str
        The stdout text is returned if `capture_output`=True.

    """

    def log_pipe_output(obj, lgr, level, msg=""):
        """Check if pipe output can be logged, and do it."""
        if obj is not None and obj != b"":
            lgr.log(level, "%s:\n%s", msg, obj.decode(errors="replace").rstrip())

    cmd = [str(arg) for arg in cmd]
    logger.debug("Executing subprocess command: %r", " ".join(cmd))
    try:
        proc = subprocess.run(  # noqa: S603
            cmd,
            timeout=timeout,
            check=True,
            cwd=cwd,
            stdout=subprocess.PIPE if logger.isEnabledFor(logging.DEBUG) or capture_output else None,
            stderr=subprocess.PIPE if logger.isEnabledFor(logging.ERROR) else None,
        )
    except subprocess.CalledProcessError as e:
        logger.error("Error code returned: %i", e.returncode)
        log_pipe_output(e.output, logger, logging.WARNING, msg="Stdout")
        log_pipe_output(e.stderr, logger, logging.ERROR, msg="Stderr")
        logger.exception("Exception:")
        raise
    else:
        if not capture_output:
            log_pipe_output(proc.stdout, logger, logging.DEBUG, msg="Stdout")
        log_pipe_output(proc.stderr, logger, logging.WARNING, msg="Stderr")
        logger.debug("Subprocess completed. Return code: %i", proc.returncode)

    if capture_output:
        return proc.stdout.decode()
    return


def enable_logging(
    log_level=logging.DEBUG, log_file: typing.Union[bool, str, Path] = False, extra_loggers: list[str] = None
):
    """Enable logging to the console and optionally to a file.

    Parameters
    ----------
    log_level : int
        A logging log level.
    log_file : bool or str or Path, optional
        Option to enable logging to a file. If true or a directory the filename
        will be auto-generated. If true, the file will be saved to the current
        working directory. Otherwise, the supplied file will be used.
    extra_loggers : List[str], optional
        Collection of additional loggers to enable at DEBUG level.

    """
    root_level = "DEBUG" if log_file else logging.getLevelName(log_level)
    extra_loggers = {} if not extra_loggers else {name: {"level": root_level} for name in extra_loggers}

    log_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "class": "logging.Formatter",
                "format": "[%(asctime)s.%(msecs)03d] %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S",
            },
            "detailed": {
                "class": "logging.Formatter",
                "format": "[%(asctime)s.%(msecs)03d %(name)s.%(funcName)s:%(lineno)i %(levelname)5.5s] %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "level": log_level,
                "class": "logging.StreamHandler",
                "formatter": "simple",
                "stream": "ext://sys.stdout",
            },
            "file": {"class": "logging.NullHandler"},
        },
        "loggers": dict(
            **{
                "cspice": {"level": root_level},
                "urllib3": {"level": "WARNING"},
            },
            **extra_loggers,
        ),
        "root": {"level": root_level, "handlers": ["console", "file"]},
    }

    # Optionally, add logging to a file.
    if log_file:
        default_log_name = f"cspice.{datetime.datetime.now(datetime.timezone.utc).strftime('%Y%m%dT%H%M%S')}.log"
        if log_file is True:
            log_file = Path.cwd() / default_log_name
        else:
            log_file = Path(log_file)
            if log_file.is_dir():
                log_file = log_file / default_log_name

        log_config["handlers"]["file"] = {
            "level": root_level,
            "class": "logging.FileHandler",
            "formatter": "detailed",
            "filename": str(log_file),
            "mode": "a",
        }

    logging.config.dictConfig(log_config)

    if log_file:
        logger.debug("Logging to file: %s", log_file)
    return
