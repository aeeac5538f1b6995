# file        :   skewpf/algebra/utils.py

'''
Environment-driven configuration for the algebra subpackage.

All knobs are read once at import time from environment variables and exposed
as module-level constants. The values are written back to ``os.environ`` so
child processes inherit the resolved configuration.

Provides:
- PY_PFAFFIAN_METHOD : name of the default Pfaffian algorithm ("recursive").
- PY_SKEW_TOL        : absolute tolerance of the skew-symmetry check.
- PY_GLOBAL_SEED     : default seed for random skew-symmetric matrices.
- PY_INFO_VERBOSE    : whether configuration and per-call info is logged.
- DEFAULT_NP_FLOAT_TYPE, Array : dtype and array alias used across the package.
'''

import os
from typing import TypeAlias, Type

import numpy as np

# ---------------------------------------------------------------------
#! Environment variable names
# ---------------------------------------------------------------------

PY_PFAFFIAN_METHOD_STR  : str               = "PY_PFAFFIAN_METHOD"
PY_SKEW_TOL_STR         : str               = "PY_SKEW_TOL"
PY_GLOBAL_SEED_STR      : str               = "PY_GLOBAL_SEED"
PY_INFO_VERBOSE_STR     : str               = "PY_BACKEND_INFO"

# ---------------------------------------------------------------------
#! Defaults
# ---------------------------------------------------------------------

DEFAULT_METHOD          : str               = "recursive"
DEFAULT_SKEW_TOL        : float             = 1e-9
DEFAULT_SEED            : int               = 42
DEFAULT_NP_FLOAT_TYPE   : Type              = np.float64

Array                   : TypeAlias         = np.ndarray

# ---------------------------------------------------------------------
#! SET VARIABLES
# ---------------------------------------------------------------------

def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name}={raw!r} is not a valid float.") from e

def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name}={raw!r} is not a valid integer.") from e

PY_PFAFFIAN_METHOD      : str               = os.environ.get(PY_PFAFFIAN_METHOD_STR, DEFAULT_METHOD).strip().lower() or DEFAULT_METHOD
os.environ[PY_PFAFFIAN_METHOD_STR]          = PY_PFAFFIAN_METHOD

PY_SKEW_TOL             : float             = _env_float(PY_SKEW_TOL_STR, DEFAULT_SKEW_TOL)
os.environ[PY_SKEW_TOL_STR]                 = repr(PY_SKEW_TOL)

PY_GLOBAL_SEED          : int               = _env_int(PY_GLOBAL_SEED_STR, DEFAULT_SEED)
os.environ[PY_GLOBAL_SEED_STR]              = str(PY_GLOBAL_SEED)

PY_INFO_VERBOSE         : bool              = os.environ.get(PY_INFO_VERBOSE_STR, "0") != "0"

# ---------------------------------------------------------------------

def get_config() -> dict:
    """
    Snapshot of the resolved configuration.

    Returns
    -------
    dict
        Mapping of environment variable name to the value in effect.
    """
    return {
        PY_PFAFFIAN_METHOD_STR  : PY_PFAFFIAN_METHOD,
        PY_SKEW_TOL_STR         : PY_SKEW_TOL,
        PY_GLOBAL_SEED_STR      : PY_GLOBAL_SEED,
        PY_INFO_VERBOSE_STR     : PY_INFO_VERBOSE,
    }

def print_config(logger=None):
    '''
    Log the resolved configuration, one variable per line.
    '''
    if logger is None:
        from ..common.flog import get_global_logger
        logger = get_global_logger()
    logger.title("skewpf configuration", 50, '-', 0)
    for key, value in get_config().items():
        logger.info(f"{key:<20} = {value}", lvl=1)

if PY_INFO_VERBOSE:
    print_config()

# ---------------------------------------------------------------------
#! EOF
# ---------------------------------------------------------------------
