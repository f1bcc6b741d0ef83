"""Packaging correctness verification for response-lens.

Tests validate that:
- The base install imports without optional extras
- py.typed marker is present in the wheel
- Pytest plugin entry point is registered
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import sys
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestBaseInstall:
    """Verify the base install exposes the documented entry points."""

    def test_import_response_lens(self):  # type: ignore[no-untyped-def]
        """Top-level import succeeds."""
        import response_lens

        assert hasattr(response_lens, "ResponseSession")
        assert hasattr(response_lens, "analyze")
        assert hasattr(response_lens, "export")

    def test_session_basic(self):  # type: ignore[no-untyped-def]
        """A session loads and projects without extra configuration."""
        from response_lens import ResponseSession

        session = ResponseSession()
        session.load(b'{"a": 1}')
        assert session.analysis.stats.total_nodes == 2

    def test_no_pytest_import_on_base(self):  # type: ignore[no-untyped-def]
        """Importing response_lens does not import the pytest plugin module."""
        result = subprocess.run(
            [
                sys.executable,
                "-c",
                "import sys, response_lens; "
                "print('response_lens.integrations._pytest_plugin' in sys.modules)",
            ],
            capture_output=True,
            text=True,
        )
        assert result.stdout.strip() == "False"


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        # Use poetry build since that's the project's build system
        result = subprocess.run(
            ["poetry", "build", "-f", "wheel"],
            cwd=str(PROJECT_ROOT),
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            assert any(n.endswith("py.typed") for n in names), names

    def test_no_pycache_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        with zipfile.ZipFile(wheel_path) as zf:
            pycache_files = [n for n in zf.namelist() if "__pycache__" in n]
            assert not pycache_files, f"__pycache__ found in wheel: {pycache_files}"

    def test_all_source_modules_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        expected_modules = [
            "response_lens/__init__.py",
            "response_lens/api.py",
            "response_lens/cache.py",
            "response_lens/config.py",
            "response_lens/errors.py",
            "response_lens/navigation.py",
            "response_lens/normalizer.py",
            "response_lens/protocols.py",
            "response_lens/result.py",
            "response_lens/search.py",
            "response_lens/session.py",
            "response_lens/analysis/__init__.py",
            "response_lens/analysis/patterns.py",
            "response_lens/analysis/schema.py",
            "response_lens/analysis/stats.py",
            "response_lens/export/__init__.py",
            "response_lens/export/exporter.py",
            "response_lens/export/writers.py",
            "response_lens/tree/__init__.py",
            "response_lens/tree/path.py",
            "response_lens/tree/value.py",
            "response_lens/views/__init__.py",
            "response_lens/views/models.py",
            "response_lens/views/projector.py",
            "response_lens/integrations/__init__.py",
            "response_lens/integrations/_pytest_plugin.py",
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            for module in expected_modules:
                assert any(module in n for n in names), (
                    f"Module {module} not found in wheel"
                )

    def test_metadata_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        with zipfile.ZipFile(wheel_path) as zf:
            metadata_files = [n for n in zf.namelist() if "METADATA" in n]
            assert metadata_files, "No METADATA found in wheel"
            metadata = zf.read(metadata_files[0]).decode()
            assert "response-lens" in metadata.lower()
            assert "0.1.0" in metadata


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_registered(self):  # type: ignore[no-untyped-def]
        from importlib.metadata import entry_points

        eps = [
            ep
            for ep in entry_points(group="pytest11")
            if "response_lens" in str(ep.value)
        ]
        assert eps, "No pytest11 entry point found for response-lens"

    def test_fixture_available(self):  # type: ignore[no-untyped-def]
        import importlib

        mod = importlib.import_module("response_lens.integrations._pytest_plugin")
        assert callable(mod.assert_json_shape)


class TestPackageMetadata:
    def test_version(self):  # type: ignore[no-untyped-def]
        import response_lens

        assert response_lens.__version__ == "0.1.0"

    def test_all_exports(self):  # type: ignore[no-untyped-def]
        """__all__ must include the documented public API."""
        import response_lens

        expected = {
            "ResponseSession",
            "ViewerConfig",
            "ViewMode",
            "ExportFormat",
            "Value",
            "Path",
            "ingest",
            "analyze",
            "analyze_stats",
            "infer_schema",
            "search",
            "export",
            "project",
        }
        missing = expected - set(response_lens.__all__)
        assert not missing, f"Missing: {missing}"
