'''
Console and file logging for skewpf with verbosity control.

A thin wrapper over the standard ``logging`` module that adds indentation
levels, optional ANSI colours, boxed titles and small tabular summaries
(argument tables, timing tables) used by the CLI and the benchmarks.

@note File logging is enabled only when the environment variable PYLOGFILE is set to a non-zero value.
@note Coloured output is disabled when PYLOGCOLORS is set to '0'.

-------------------------------------------------------
file        :   skewpf/common/flog.py
description :   Logger class and the process-wide logger accessor.
-------------------------------------------------------
'''

__all__         = [
    "Logger",
    "Colors",
    "print_arguments",
    "log_timing_summary",
    "get_global_logger"
]

import os
import re
import sys
import logging
import threading
from datetime import datetime
from typing import Optional, Dict, List

######################################################
#! COLOURS
######################################################

class Colors:
    """
    ANSI colour codes for console output.
    """

    black   = "\033[30m"
    red     = "\033[31m"
    green   = "\033[32m"
    yellow  = "\033[33m"
    blue    = "\033[34m"
    white   = "\033[0m"  # reset

    _MAPPING = {
        "black" : black,
        "red"   : red,
        "green" : green,
        "yellow": yellow,
        "blue"  : blue,
        "white" : white
    }

    def __init__(self, color : str):
        self.color = color

    def __str__(self) -> str:
        return Colors._MAPPING.get(self.color, Colors.white)

    def __call__(self, text: str) -> str:
        return f"{self}{text}{Colors.white}"

# CSI sequences: ESC [ ... m
_ansi_escape = re.compile(r'\x1b\[[0-9;]*m')

class StripAnsiFormatter(logging.Formatter):
    '''Formatter for log files: removes colour codes from the rendered record.'''
    def format(self, record):
        return _ansi_escape.sub('', super().format(record))

######################################################
#! LOGGER
######################################################

ENV_LOGGER_FILE     = 'PYLOGFILE'
ENV_LOGGER_COLORS   = 'PYLOGCOLORS'

_CONSOLE_FMT        = '[%(levelname)s] %(message)s'
_CONSOLE_FMT_TS     = '%(asctime)s [%(levelname)s] %(message)s'
_DATE_FMT           = "%d_%m_%Y_%H-%M_%S"

class Logger:
    """
    Logger class for handling console and file logging with verbosity control.
    """

    LEVELS = {
        logging.DEBUG   : 'debug',
        logging.INFO    : 'info',
        logging.WARNING : 'warning',
        logging.ERROR   : 'error'
    }

    LEVELS_R = {v: k for k, v in LEVELS.items()}

    def __init__(self,
                name            : str           = "skewpf",
                logfile         : Optional[str] = None,
                lvl             : int           = logging.INFO,
                append_ts       : bool          = False,
                use_ts_in_cmd   : bool          = False):
        """
        Args:
            name (str):
                Name of the underlying ``logging`` logger.
            logfile (str):
                Base name of the log file; honoured only when PYLOGFILE is set.
            lvl (int | str):
                Logging level, either a ``logging`` constant or 'debug'/'info'/...
            append_ts (bool):
                Append a timestamp to the log file name.
            use_ts_in_cmd (bool):
                Prefix console records with a timestamp.
        """
        self.now_str            = datetime.now().strftime(_DATE_FMT)
        self.lvl                = Logger.LEVELS_R.get(lvl, logging.INFO) if isinstance(lvl, str) else lvl
        self.handler_added      = False
        self.has_colors         = sys.stdout.isatty() and os.environ.get(ENV_LOGGER_COLORS, '1') != '0'

        self.logger             = logging.getLogger(name)
        self.logger.setLevel(self.lvl)
        self.logger.propagate   = False

        # a re-created Logger with the same name replaces the old handlers
        for h in list(self.logger.handlers):
            self.logger.removeHandler(h)
            h.close()

        ch = logging.StreamHandler(sys.stdout)
        ch.setLevel(self.lvl)
        ch.setFormatter(logging.Formatter(_CONSOLE_FMT_TS if use_ts_in_cmd else _CONSOLE_FMT, datefmt=_DATE_FMT))
        self.logger.addHandler(ch)

        if logfile is not None and os.environ.get(ENV_LOGGER_FILE, '0') != '0':
            self.logfile = logfile[:-len('.log')] if logfile.endswith('.log') else logfile
            if not self.logfile:
                self.logfile = self.now_str
            if append_ts:
                self.logfile += f'_{self.now_str}'
            self.configure("./log")
        else:
            self.logfile = None

    # --------------------------------------------------------------

    def set_level(self, lvl):
        '''Change the level of the logger and all of its handlers.'''
        self.lvl = Logger.LEVELS_R.get(lvl, logging.INFO) if isinstance(lvl, str) else lvl
        self.logger.setLevel(self.lvl)
        for h in self.logger.handlers:
            h.setLevel(self.lvl)

    # --------------------------------------------------------------

    @staticmethod
    def colorize(txt: str, color: str):
        """
        Wrap ``txt`` in the ANSI code of ``color`` (no-op for 'white' or empty).
        """
        if not color or color.lower() == 'white':
            return str(txt)
        return Colors(color)(txt)

    # --------------------------------------------------------------

    def configure(self, directory: str):
        """
        Attach a file handler writing to ``directory/<logfile>.log``.

        Args:
            directory (str): Directory where the log file is stored (created if missing).
        """
        os.makedirs(directory, exist_ok=True)
        self.logfile = os.path.join(directory, f'{self.logfile}.log')

        if not self.handler_added:
            self._f_handler = logging.FileHandler(self.logfile, mode='w', encoding='utf-8')
            self._f_handler.setLevel(self.lvl)
            self._f_handler.setFormatter(StripAnsiFormatter(_CONSOLE_FMT_TS, datefmt=_DATE_FMT))
            self.logger.addHandler(self._f_handler)
            self.handler_added = True
            self._log_message(logging.INFO, f"Log file created: {self.logfile}")

    # --------------------------------------------------------------

    @staticmethod
    def print_tab(lvl=0):
        """
        Indentation prefix for a message at nesting level ``lvl``.
        """
        return '\t' * lvl + ('->' if lvl > 0 else '')

    @staticmethod
    def print(msg: str, lvl=0):
        return f"{Logger.print_tab(lvl)}{msg}"

    # --------------------------------------------------------------

    def _log_message(self, log_level, msg, lvl = 0):
        log_function = getattr(self.logger, self.LEVELS.get(log_level, 'info'))
        log_function(Logger.print(msg, lvl))

    def info(self, msg: str, lvl=0, verbose=True, color=None):
        if not verbose:
            return
        if color is not None and self.has_colors:
            msg = self.colorize(msg, color)
        self.logger.info(Logger.print(msg, lvl))

    def debug(self, msg: str, lvl=0, verbose=True, color=None):
        if not verbose:
            return
        if color is not None and self.has_colors:
            msg = self.colorize(msg, color)
        self.logger.debug(Logger.print(msg, lvl))

    def warning(self, msg: str, lvl=0, verbose=True, color='yellow'):
        if not verbose:
            return
        if self.has_colors:
            msg = self.colorize(msg, color)
        self.logger.warning(Logger.print(msg, lvl))

    def error(self, msg: str, lvl=0, verbose=True, color='red'):
        if not verbose:
            return
        if self.has_colors:
            msg = self.colorize(msg, color)
        self.logger.error(Logger.print(msg, lvl))

    # --------------------------------------------------------------

    def title(self, tail: str, desired_size: int=50, fill: str = '=', lvl=0, verbose=True, color=None):
        """
        Log ``tail`` centred in a bar of ``fill`` characters.

        Args:
            tail (str):
                Text in the middle of the title.
            desired_size (int):
                Total width of the bar.
            fill (str):
                Filler character(s).
        """
        if not verbose:
            return
        if len(tail) + 2 + lvl * 6 > desired_size:
            self.info(tail, lvl, verbose)
            return

        fill_size   = (desired_size - len(tail)) // (2 * len(fill))
        out         = (fill * fill_size) + tail + (fill * fill_size)
        if len(out) < desired_size:
            out    += fill[0] * (desired_size - len(out) - 1)
        self.info(out[:desired_size], lvl, verbose, color)

######################################################
#! GLOBAL LOGGER
######################################################

_G_LOGGER     = None
_G_LOGGER_PID = None
_G_LOCK       = threading.Lock()

def get_global_logger(**kwargs) -> Logger:
    """
    One Logger per process (PID), safe across threads and forks.

    Args:
        **kwargs: Passed to the Logger constructor on first use.
        - name (str): default "skewpf".
        - lvl (int): default logging.INFO.
        - use_ts_in_cmd (bool): default False.
        - logfile (str or None): default None.

    Example
    -------
        >>> logger = get_global_logger()
        >>> logger.info("Pfaffian computed.")
    """
    global  _G_LOGGER, _G_LOGGER_PID
    pid     = os.getpid()

    if _G_LOGGER is not None and _G_LOGGER_PID == pid:
        return _G_LOGGER

    with _G_LOCK:
        if _G_LOGGER is not None and _G_LOGGER_PID == pid:
            return _G_LOGGER

        logger = Logger(
            name            = kwargs.get("name",            "skewpf"),
            lvl             = kwargs.get("lvl",             logging.INFO),
            append_ts       = kwargs.get("append_ts",       True),
            use_ts_in_cmd   = kwargs.get("use_ts_in_cmd",   False),
            logfile         = kwargs.get("logfile",         None),
        )

        if os.environ.get("PY_BACKEND_INFO", "0") != "0":
            logger.title("skewpf logger initialized!", 50, '#', 0)

        _G_LOGGER       = logger
        _G_LOGGER_PID   = pid
        return _G_LOGGER

######################################################
#! TABLES
######################################################

def print_arguments(parser,
                    logger      : Logger,
                    title       : str = "Options for the script",
                    columnsize  : int = 20) -> None:
    """
    Log the options of an ``argparse`` parser as a table (name, default, help).
    """
    _default_size       = 15
    _description_size   = 50
    separator           = f"|{'-' * (columnsize + 2)}|{'-' * (_default_size + 2)}|{'-' * (_description_size + 2)}|"

    logger.title(title, 50, '#', 0)
    logger.info(separator)
    logger.info(f"| {'Option':<{columnsize}} | {'Default':<{_default_size}} | {'Description':<{_description_size}} |")
    logger.info(separator)
    for action in parser._actions:
        option      = f"| {action.dest:<{columnsize}} | {str(action.default):<{_default_size}} |"
        description = f" {str(action.help):<{_description_size}} |"
        logger.info(option + description)
    logger.info(separator)

def log_timing_summary(
    logger              : Logger,
    phase_durations     : Dict[str, float],
    total_duration      : Optional[float] = None,
    title               : str = "Timing Summary",
    phase_col_width     : int = 28,
    duration_col_width  : int = 14,
    duration_precision  : int = 6,
    lvl                 : int = 0,
    extra_info          : Optional[List[str]] = None
):
    """
    Logs durations as a two-column table (phase, seconds) followed by a total.

    Parameters:
    logger:
        Logger instance to log the table.
    phase_durations:
        Mapping of phase name to duration in seconds.
    total_duration:
        Value of the 'Total' row; the sum of the phases when None.
    extra_info:
        Lines logged above the table.
    """
    phase_header        = "Phase"
    duration_header     = "Duration (s)"
    phase_col_width     = max(phase_col_width, len(phase_header))
    duration_col_width  = max(duration_col_width, len(duration_header))

    separator           = f"|{'-' * (phase_col_width + 2)}|{'-' * (duration_col_width + 2)}|"
    header_fmt          = f"| {phase_header:<{phase_col_width}} | {duration_header:>{duration_col_width}} |"
    row_fmt             = f"| {{phase_name:<{phase_col_width}}} | {{duration:>{duration_col_width}.{duration_precision}f}} |"

    logger.title(title, 50, '#', lvl)
    for info in extra_info or []:
        logger.info(info, lvl=lvl + 1)

    logger.info(separator, lvl=lvl + 1)
    logger.info(header_fmt, lvl=lvl + 1)
    logger.info(separator, lvl=lvl + 1)

    calculated_sum = 0.0
    for name, duration in phase_durations.items():
        logger.info(row_fmt.format(phase_name=name, duration=duration), lvl=lvl + 1)
        calculated_sum += duration

    logger.info(separator, lvl=lvl + 1)
    total = total_duration if total_duration is not None else calculated_sum
    logger.info(row_fmt.format(phase_name="Total", duration=total), lvl=lvl + 1)
    logger.info(separator, lvl=lvl + 1)

########################################################
