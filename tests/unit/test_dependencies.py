#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for dependency checking utilities."""

import logging

import pytest

from mdnorm.dependencies import generate_install_command, get_missing_dependencies, print_dependency_report
from mdnorm.exceptions import DependencyError
from mdnorm.utils.decorators import debug_timer, requires_dependencies
from mdnorm.utils.packages import check_package_installed, check_version_requirement, get_package_version


@pytest.mark.unit
class TestPackageChecks:
    """Test package presence and version checks."""

    def test_installed_package(self) -> None:
        """Test mistune is detected with a version."""
        assert check_package_installed("mistune") is True
        assert get_package_version("mistune") is not None

    def test_missing_package(self) -> None:
        """Test an absent package is reported missing."""
        assert check_package_installed("mdnorm_no_such_module") is False
        assert get_package_version("mdnorm-no-such-dist") is None
        assert check_version_requirement("mdnorm-no-such-dist", ">=1.0") == (False, None)

    def test_version_requirement(self) -> None:
        """Test version specifiers are evaluated."""
        meets, installed = check_version_requirement("mistune", ">=3.0.0")
        assert meets is True
        assert installed is not None

        assert check_version_requirement("mistune", ">=999")[0] is False

    def test_invalid_specifier(self) -> None:
        """Test an invalid specifier never passes."""
        assert check_version_requirement("mistune", "not a spec")[0] is False


@pytest.mark.unit
class TestDependencyReport:
    """Test the dependency report helpers."""

    def test_nothing_missing(self) -> None:
        """Test mistune satisfies the parser requirements."""
        assert get_missing_dependencies() == []
        assert "[OK] mistune" in print_dependency_report()

    def test_install_command(self) -> None:
        """Test pip commands quote version specs."""
        assert generate_install_command([]) == ""
        assert generate_install_command([("mistune", ">=3.0.0"), ("rich", "")]) == 'pip install "mistune>=3.0.0" rich'


@pytest.mark.unit
class TestDecorators:
    """Test requires_dependencies and debug_timer."""

    def test_missing_dependency_raises(self) -> None:
        """Test a missing import raises DependencyError before the call."""
        calls = []

        @requires_dependencies("demo", [("mdnorm-no-such-dist", "mdnorm_no_such_module", ">=1.0")])
        def parse() -> None:
            calls.append(1)

        with pytest.raises(DependencyError) as exc_info:
            parse()

        assert calls == []
        assert exc_info.value.missing_packages == [("mdnorm-no-such-dist", ">=1.0")]
        assert "The demo needs packages that are not installed: mdnorm-no-such-dist>=1.0" in str(exc_info.value)
        assert exc_info.value.install_command == 'pip install --upgrade "mdnorm-no-such-dist>=1.0"'
        assert isinstance(exc_info.value.original_import_error, ImportError)
        assert isinstance(exc_info.value.__cause__, ImportError)

    def test_version_mismatch_raises(self) -> None:
        """Test an installed but too old package raises DependencyError."""

        @requires_dependencies("demo", [("mistune", "mistune", ">=999")])
        def parse() -> None:
            pass

        with pytest.raises(DependencyError) as exc_info:
            parse()

        assert exc_info.value.version_mismatches[0][:2] == ("mistune", ">=999")

    def test_satisfied_dependency_calls_through(self) -> None:
        """Test the wrapped function runs when requirements are met."""

        @requires_dependencies("demo", [("mistune", "mistune", ">=3.0.0")])
        def parse(value: int) -> int:
            return value * 2

        assert parse(21) == 42

    def test_debug_timer_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test timing is logged at DEBUG level."""
        logger = logging.getLogger("mdnorm.test_timer")

        with caplog.at_level(logging.DEBUG, logger="mdnorm.test_timer"):
            with debug_timer(logger, "Parsing (demo)"):
                pass

        assert any("Parsing (demo) completed in" in r.getMessage() for r in caplog.records)
