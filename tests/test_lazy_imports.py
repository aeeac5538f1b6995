"""
Tests for the lazy import mechanism in skewpf.
"""

import types
import pytest

# --------------------------------------------

def test_lazy_access():
    """Ensure accessing attributes triggers the import."""
    import skewpf

    algebra_mod = skewpf.algebra
    assert isinstance(algebra_mod, types.ModuleType)
    assert algebra_mod.__name__ == "skewpf.algebra"

    common_mod = skewpf.common
    assert isinstance(common_mod, types.ModuleType)
    assert common_mod.__name__ == "skewpf.common"

def test_top_level_shortcuts():
    import skewpf

    m = skewpf.build(4, [2.0, 3.0, 4.0, 5.0, 6.0, 7.0])
    assert isinstance(m, skewpf.SkewMatrix)
    assert skewpf.pfaffian(m) == 16.0
    assert skewpf.pfaffian_with_stats(m).value == 16.0

def test_algebra_registry():
    from skewpf import algebra

    assert algebra.pfaffian.__name__ == "skewpf.algebra.pfaffian"
    assert algebra.SkewMatrix is algebra.skew.SkewMatrix
    assert issubclass(algebra.InvalidDimension, algebra.SkewMatrixError)
    assert algebra.PfaffianAlgorithms.Recursive.value == 0

def test_common_registry():
    from skewpf import common

    assert common.get_global_logger() is common.flog.get_global_logger()

def test_unknown_attribute():
    import skewpf
    with pytest.raises(AttributeError):
        skewpf.does_not_exist
    with pytest.raises(AttributeError):
        skewpf.algebra.does_not_exist

def test_module_description():
    import skewpf
    assert "Pfaffian" in skewpf.get_module_description("algebra")
    assert skewpf.get_module_description("nope") == "Module not found."
