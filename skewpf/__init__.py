# skewpf/__init__.py

"""
skewpf - Pfaffians of dense skew-symmetric matrices.

The Pfaffian is computed by a memoized recursive expansion over perfect
matchings. This turns the (n-1)!! term sum into a dynamic program over the
index subsets reachable by "fix the first index, match it with another". The
O(n^3) Parlett-Reid, Hessenberg and Schur factorizations are provided as
cross-checks.

Modules:
--------
- algebra   : SkewMatrix builder, Pfaffian engine, errors and configuration
- common    : logging utilities
- cli       : command line driver (``python -m skewpf``)

Examples:
---------
>>> import skewpf
>>> m = skewpf.build(4, [2.0, 3.0, 4.0, 5.0, 6.0, 7.0])
>>> skewpf.pfaffian(m)
16.0

File    : skewpf/__init__.py
Version : 0.1.0
License : MIT
"""

import importlib

# Package metadata
__version__         = "0.1.0"
__license__         = "MIT"

MODULE_DESCRIPTION  = "Memoized Pfaffians of dense skew-symmetric matrices."

# Subpackages (not imported by default)
_SUBMODULES         = ["algebra", "common", "cli"]

# Convenience re-exports, resolved on first access
_LAZY_ATTRS         = {
    "SkewMatrix"            : (".algebra.skew",     "SkewMatrix"),
    "build"                 : (".algebra.skew",     "build"),
    "pfaffian"              : (".algebra.pfaffian", "pfaffian"),
    "pfaffian_with_stats"   : (".algebra.pfaffian", "pfaffian_with_stats"),
    "PfaffianAlgorithms"    : (".algebra.pfaffian", "PfaffianAlgorithms"),
    "SkewMatrixError"       : (".algebra.errors",   "SkewMatrixError"),
    "InvalidDimension"      : (".algebra.errors",   "InvalidDimension"),
    "InvalidValueCount"     : (".algebra.errors",   "InvalidValueCount"),
    "NotSkewSymmetric"      : (".algebra.errors",   "NotSkewSymmetric"),
    "get_global_logger"     : (".common.flog",      "get_global_logger"),
}

__all__             = _SUBMODULES + list(_LAZY_ATTRS.keys())

def get_module_description(module_name):
    """
    Get the description of a specific module in the skewpf package.
    """
    descriptions = {
        "algebra"   : "Skew-symmetric matrix builder and the memoized Pfaffian engine.",
        "common"    : "Console and file logging with verbosity control.",
        "cli"       : "Command line driver computing Pfaffians of upper-triangle inputs.",
    }
    return descriptions.get(module_name, "Module not found.")

# Lazy import subpackages on attribute access (PEP 562)
def __getattr__(name):  # pragma: no cover - simple indirection
    if name in _LAZY_ATTRS:
        module_path, attr = _LAZY_ATTRS[name]
        return getattr(importlib.import_module(module_path, __name__), attr)
    if name in _SUBMODULES:
        return importlib.import_module(f".{name}", __name__)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

def __dir__():  # pragma: no cover
    return sorted(list(globals().keys()) + __all__)

# ---------------------------------------------------------------------
#! EOF
# ---------------------------------------------------------------------
