"""
Common utilities shared by the skewpf subpackages.

**Logging and Monitoring:**
- ``Logger``: console/file logger with indentation levels and colours
- ``get_global_logger``: one logger per process
- ``print_arguments``, ``log_timing_summary``: tabular log helpers

Example:
    >>> from skewpf.common import get_global_logger
    >>> log = get_global_logger()
    >>> log.info("ready")
"""

import  importlib
from    typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .flog          import Logger, get_global_logger, print_arguments, log_timing_summary

# Lazy loading registry
_LAZY_IMPORTS = {
    'flog'                      : ('.flog', None),
    'Logger'                    : ('.flog', 'Logger'),
    'get_global_logger'         : ('.flog', 'get_global_logger'),
    'print_arguments'           : ('.flog', 'print_arguments'),
    'log_timing_summary'        : ('.flog', 'log_timing_summary'),
}

_LAZY_CACHE = {}

def __getattr__(name: str):
    """
    Module-level __getattr__ for lazy imports.
    """
    if name in _LAZY_CACHE:
        return _LAZY_CACHE[name]

    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module_path, attr_name  = _LAZY_IMPORTS[name]
    module                  = importlib.import_module(module_path, package=__name__)
    result                  = module if attr_name is None else getattr(module, attr_name)
    _LAZY_CACHE[name]       = result
    return result

def __dir__():
    return sorted(list(globals().keys()) + list(_LAZY_IMPORTS.keys()))

__all__ = list(_LAZY_IMPORTS.keys())
