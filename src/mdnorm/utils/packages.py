"""Checks for installed packages and their versions."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdnorm/utils/packages.py
from __future__ import annotations

import importlib
from importlib import metadata
from typing import List, NamedTuple, Optional, Tuple

from packaging import version
from packaging.specifiers import InvalidSpecifier, SpecifierSet

# (install_name, import_name, version_spec)
PackageRequirement = Tuple[str, str, str]


class UnmetRequirements(NamedTuple):
    """Outcome of checking a list of package requirements.

    Attributes
    ----------
    missing : list of (str, str)
        ``(install_name, version_spec)`` for packages that cannot be imported
    version_mismatches : list of (str, str, str)
        ``(install_name, version_spec, installed_version)`` for packages that
        import but are too old or too new
    import_error : ImportError or None
        The first import failure, kept for exception chaining

    """

    missing: List[Tuple[str, str]]
    version_mismatches: List[Tuple[str, str, str]]
    import_error: Optional[ImportError]

    def __bool__(self) -> bool:
        return bool(self.missing or self.version_mismatches)


def check_package_installed(import_name: str) -> bool:
    """Check whether ``import_name`` can be imported (e.g. 'yaml' for PyYAML)."""
    try:
        # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
        importlib.import_module(import_name)
        return True
    except ImportError:
        return False


def get_package_version(package_name: str) -> Optional[str]:
    """Get the installed version of a distribution.

    Parameters
    ----------
    package_name : str
        Distribution name, i.e. the name given to ``pip install``

    Returns
    -------
    str or None
        Version string if the distribution is installed, None otherwise

    """
    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(package_name: str, version_spec: str) -> Tuple[bool, Optional[str]]:
    """Check if an installed distribution satisfies a version specifier.

    Parameters
    ----------
    package_name : str
        Distribution name
    version_spec : str
        PEP 440 specifier such as ``">=3.0.0"``; an unparsable specifier
        never matches

    Returns
    -------
    tuple
        (meets_requirement, installed_version)

    """
    installed_version = get_package_version(package_name)
    if not installed_version:
        return False, None

    try:
        specifier = SpecifierSet(version_spec)
    except InvalidSpecifier:
        return False, installed_version

    return version.parse(installed_version) in specifier, installed_version


def find_unmet_requirements(packages: List[PackageRequirement]) -> UnmetRequirements:
    """Import each required package and compare its version.

    Parameters
    ----------
    packages : list of (str, str, str)
        ``(install_name, import_name, version_spec)`` triples

    Returns
    -------
    UnmetRequirements
        Falsy when every requirement is satisfied

    """
    missing: List[Tuple[str, str]] = []
    mismatches: List[Tuple[str, str, str]] = []
    import_error: Optional[ImportError] = None

    for install_name, import_name, version_spec in packages:
        try:
            # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            import_error = import_error or e
            continue

        if version_spec:
            meets, installed = check_version_requirement(install_name, version_spec)
            if not meets:
                mismatches.append((install_name, version_spec, installed or "unknown"))

    return UnmetRequirements(missing, mismatches, import_error)
