"""
Tests for the Result[P] envelope.

Validates:
    - Generic type parameter works with arbitrary payload types
    - Frozen immutability
    - Default factories (warnings, provenance)
    - has_warning() method
    - Provenance metadata contains expected version keys
"""

from dataclasses import FrozenInstanceError, dataclass

import numpy as np
import pytest

from pylinsolve import __version__
from pylinsolve.core.result import Result, _default_provenance, make_provenance


# ═══════════════════════════════════════════════════════════════════════
# Test payload types
# ═══════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


# ═══════════════════════════════════════════════════════════════════════
# Construction and field access
# ═══════════════════════════════════════════════════════════════════════


class TestResultConstruction:

    def test_basic_creation(self):
        result = Result(
            params=FakeParams(value=42.0),
            info={"method": "test"},
            timing={"total_seconds": 0.01},
            backend_name="cpu_gauss",
        )
        assert result.params.value == 42.0
        assert result.info["method"] == "test"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "cpu_gauss"

    def test_timing_none(self):
        result = Result(params=FakeParams(value=1.0), info={}, timing=None, backend_name="cpu")
        assert result.timing is None

    def test_frozen(self):
        result = Result(params=FakeParams(value=1.0), info={}, timing=None, backend_name="cpu")
        with pytest.raises(FrozenInstanceError):
            result.backend_name = "other"


# ═══════════════════════════════════════════════════════════════════════
# Default factories
# ═══════════════════════════════════════════════════════════════════════


class TestDefaults:

    def test_warnings_default_empty(self):
        result = Result(params=FakeParams(value=1.0), info={}, timing=None, backend_name="cpu")
        assert result.warnings == ()
        assert isinstance(result.warnings, tuple)

    def test_provenance_auto_generated(self):
        result = Result(params=FakeParams(value=1.0), info={}, timing=None, backend_name="cpu")
        assert result.provenance["pylinsolve_version"] == __version__
        assert result.provenance["numpy_version"] == np.__version__

    def test_default_provenance_keys(self):
        prov = _default_provenance()
        assert set(prov) >= {
            "pylinsolve_version", "numpy_version", "scipy_version", "python_version",
        }

    def test_make_provenance_adds_entries(self):
        prov = make_provenance(algorithm="gaussian_elimination")
        assert prov["algorithm"] == "gaussian_elimination"
        assert "numpy_version" in prov


# ═══════════════════════════════════════════════════════════════════════
# has_warning
# ═══════════════════════════════════════════════════════════════════════


class TestHasWarning:

    def test_substring_match(self):
        result = Result(
            params=FakeParams(value=1.0),
            info={},
            timing=None,
            backend_name="cpu",
            warnings=("Matrix is ill-conditioned (condition estimate 1e+06)",),
        )
        assert result.has_warning("ill-conditioned")
        assert not result.has_warning("singular")

    def test_no_warnings(self):
        result = Result(params=FakeParams(value=1.0), info={}, timing=None, backend_name="cpu")
        assert not result.has_warning("anything")
