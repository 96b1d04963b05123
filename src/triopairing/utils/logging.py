"""Logging utilities."""

# Trio Pairing
# Copyright (C) 2025  Trio Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.


import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from PyQt6 import QtCore

# the logger format used
LOG_FMT = "LVL: %(levelname)s | FILE PATH: %(pathname)s | FUN: %(funcName)s | msg: %(message)s | ln#:%(lineno)d"

LOG_FILE_NAME = "trio-pairing.log"
# Overrides the console level, e.g. TRIO_PAIRING_LOG_LEVEL=DEBUG
LOG_LEVEL_ENV = "TRIO_PAIRING_LOG_LEVEL"

# one rotating handler shared by every module logger
_file_handler: Optional[RotatingFileHandler] = None
_file_handler_resolved = False


def _resolve_log_folder() -> Optional[str]:
    """Find a writable folder for the log file.

    Returns
    -------
    str or None
        Absolute path to the ``logs`` folder, or None if nothing is writable.
    """
    # Preferred Windows location: %APPDATA%\Trio Pairing
    if sys.platform == "win32" and os.environ.get("APPDATA"):
        base_folder = os.path.join(os.environ["APPDATA"], "Trio Pairing")
    else:
        base_folder = QtCore.QStandardPaths.writableLocation(
            QtCore.QStandardPaths.StandardLocation.AppDataLocation
        )
        if base_folder:
            base_folder = os.path.join(base_folder, "trio-pairing")

    candidates = [base_folder]
    temp_folder = QtCore.QStandardPaths.writableLocation(
        QtCore.QStandardPaths.StandardLocation.TempLocation
    )
    if temp_folder:
        candidates.append(os.path.join(temp_folder, "trio-pairing"))

    for candidate in candidates:
        if not candidate:
            continue
        log_folder = os.path.join(candidate, "logs")
        try:
            os.makedirs(log_folder, exist_ok=True)
        except OSError:
            continue
        return log_folder
    return None


def _get_file_handler(formatter: logging.Formatter) -> Optional[RotatingFileHandler]:
    """Create the shared file handler on first use."""
    global _file_handler, _file_handler_resolved
    if _file_handler_resolved:
        return _file_handler
    _file_handler_resolved = True

    log_folder = _resolve_log_folder()
    if log_folder is None:
        return None
    log_path = os.path.join(log_folder, LOG_FILE_NAME)
    try:
        # Use RotatingFileHandler to prevent unbounded log growth
        _file_handler = RotatingFileHandler(
            log_path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
    except OSError:
        _file_handler = None
        return None
    _file_handler.setFormatter(formatter)
    _file_handler.setLevel(logging.DEBUG)
    return _file_handler


# --- Logging Setup ---
def setup_logger(logger_name: str) -> logging.Logger:
    """Set up logger for a python module.

    Sets up file handler and console handler

    Parameters
    ----------
    logger_name : str
        The name for the logger, __name__ is idiomatic

    Returns
    -------
    logging.Logger
        the created logger
    """
    lgr = logging.getLogger(name=logger_name)
    lgr.setLevel(logging.DEBUG)
    # Remove any existing handlers on this logger to avoid duplicates
    for _h in list(lgr.handlers):
        lgr.removeHandler(_h)
    lgr.propagate = False
    log_formatter = logging.Formatter(LOG_FMT)

    console_level = logging.getLevelName(
        os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    )
    if not isinstance(console_level, int):
        console_level = logging.WARNING

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(console_level)
    lgr.addHandler(console_handler)

    file_handler = _get_file_handler(log_formatter)
    if file_handler:
        lgr.addHandler(file_handler)
    lgr.debug("logger %s initialized", logger_name)
    return lgr
