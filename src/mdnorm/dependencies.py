#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Dependency checks for mdnorm.

The normalizer is pure Python; only parsing needs a third-party package.
These helpers answer whether that parser can be used and report what is
missing when it cannot.
"""

from __future__ import annotations

from typing import List, Tuple

from mdnorm.constants import DEPS_MARKDOWN
from mdnorm.utils.packages import find_unmet_requirements, get_package_version


def get_missing_dependencies() -> List[Tuple[str, str]]:
    """Return ``(package_name, version_spec)`` for parser packages that are missing or incompatible."""
    unmet = find_unmet_requirements(DEPS_MARKDOWN)
    return unmet.missing + [(name, spec) for name, spec, _installed in unmet.version_mismatches]


def is_available() -> bool:
    """Check whether the Markdown parser is installed and loadable."""
    return not find_unmet_requirements(DEPS_MARKDOWN)


def generate_install_command(packages: List[Tuple[str, str]]) -> str:
    """Build a pip command installing ``(package_name, version_spec)`` pairs; empty when there are none."""
    if not packages:
        return ""

    package_strs = [f'"{name}{spec}"' if spec else name for name, spec in packages]
    return f"pip install {' '.join(package_strs)}"


def print_dependency_report() -> str:
    """Generate a human-readable dependency report.

    Returns
    -------
    str
        One line per parser package with its status and installed version,
        followed by an install hint when something is missing

    """
    missing = get_missing_dependencies()
    missing_names = {name for name, _ in missing}
    lines = ["mdnorm Dependency Status", "=" * 40]

    for package_name, _import_name, version_spec in DEPS_MARKDOWN:
        icon = "[MISSING]" if package_name in missing_names else "[OK]"
        installed = get_package_version(package_name) or "not installed"
        lines.append(f"  {icon} {package_name}{version_spec} ({installed})")

    if missing:
        lines.append(f"  Install with: {generate_install_command(missing)}")

    return "\n".join(lines)
