"""
Algebra submodule: skew-symmetric matrices and their Pfaffians.

Modules:
--------
- skew      : SkewMatrix builder (upper triangle -> dense read-only matrix)
- pfaffian  : memoized Pfaffian engine plus O(n^3) reference algorithms
- errors    : SkewMatrixError hierarchy
- utils     : environment-driven configuration

Uses lazy imports so that importing the package does not trigger numba compilation.

Example:
    >>> from skewpf.algebra import build, pfaffian
    >>> pfaffian.pfaffian(build(2, [12.0]))
    12.0
"""

from typing import TYPE_CHECKING
import importlib

# -----------------------------------------------------------------------------------------------
# Lazy Import Configuration
# -----------------------------------------------------------------------------------------------

_LAZY_IMPORTS = {
    # modules
    'skew'                  : ('.skew', None),
    'pfaffian'              : ('.pfaffian', None),
    'errors'                : ('.errors', None),
    'utils'                 : ('.utils', None),
    # builder
    'SkewMatrix'            : ('.skew', 'SkewMatrix'),
    'build'                 : ('.skew', 'build'),
    'check_skew_symmetric'  : ('.skew', 'check_skew_symmetric'),
    # engine
    'pfaffian_with_stats'   : ('.pfaffian', 'pfaffian_with_stats'),
    'Pfaffian'              : ('.pfaffian', 'Pfaffian'),
    'PfaffianAlgorithms'    : ('.pfaffian', 'PfaffianAlgorithms'),
    'PfaffianResult'        : ('.pfaffian', 'PfaffianResult'),
    # errors
    'SkewMatrixError'       : ('.errors', 'SkewMatrixError'),
    'SkewMatrixErrorMsg'    : ('.errors', 'SkewMatrixErrorMsg'),
    'InvalidDimension'      : ('.errors', 'InvalidDimension'),
    'InvalidValueCount'     : ('.errors', 'InvalidValueCount'),
    'NotSkewSymmetric'      : ('.errors', 'NotSkewSymmetric'),
}

_LAZY_CACHE = {}

# For type checking only
if TYPE_CHECKING:
    from . import skew, pfaffian, errors, utils
    from .skew import SkewMatrix, build, check_skew_symmetric
    from .pfaffian import pfaffian_with_stats, Pfaffian, PfaffianAlgorithms, PfaffianResult
    from .errors import SkewMatrixError, SkewMatrixErrorMsg, InvalidDimension, InvalidValueCount, NotSkewSymmetric

def __getattr__(name: str):
    """
    Module-level __getattr__ for lazy imports.
    """
    if name in _LAZY_CACHE:
        return _LAZY_CACHE[name]

    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module_path, attr_name = _LAZY_IMPORTS[name]
    module = importlib.import_module(module_path, package=__name__)

    if attr_name is None:
        result = module
    else:
        result = getattr(module, attr_name)

    _LAZY_CACHE[name] = result
    return result

def __dir__():
    return sorted(list(globals().keys()) + list(_LAZY_IMPORTS.keys()))

__all__ = list(_LAZY_IMPORTS.keys())
