#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdnorm library.

The normalizer itself never raises: it is total over any tree the parser
produces, and parser diagnostics are logged rather than raised. These
exceptions cover the surrounding glue.

Exception Hierarchy
-------------------
- MdnormError (base exception)

  - ValidationError (unknown option names, bad option values)
    - InvalidOptionsError (options object of the wrong class)

  - ConfigError (configuration file discovery and loading)

  - ParsingError (the Markdown parser itself blew up)

  - DependencyError (mistune or rich missing or incompatible)

"""

from typing import Any


class MdnormError(Exception):
    """Base exception class for all mdnorm-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The exception that caused this one, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MdnormError):
    """Raised for invalid options or arguments.

    Parameters
    ----------
    message : str
        Description of the problem
    parameter_name : str, optional
        Name of the offending option
    parameter_value : any, optional
        The value that was provided
    original_error : Exception, optional
        The exception that caused this one, if any

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Raised when a parser receives an options object of the wrong class.

    Parameters
    ----------
    parser_name : str
        Name of the parser that received the options
    expected_type : type
        Options class the parser accepts
    received_type : type
        Class of the object that was passed
    message : str, optional
        Overrides the generated message

    """

    def __init__(
        self,
        parser_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"The {parser_name} parser takes {expected_type.__name__}, "
                f"got {received_type.__name__} instead."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.parser_name = parser_name
        self.expected_type = expected_type
        self.received_type = received_type


class ConfigError(MdnormError):
    """Raised when a configuration file cannot be found, read or parsed.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        The underlying exception, if any

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, original_error)
        self.config_path = config_path


class ParsingError(MdnormError):
    """Raised when the Markdown parser fails unexpectedly.

    Problems in the document itself are reported as diagnostics, never as
    this exception.

    Parameters
    ----------
    message : str
        Description of the failure
    parsing_stage : str, optional
        Where the failure happened (e.g. "markdown_parsing")
    original_error : Exception, optional
        The exception raised by the parser

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


def _format_requirement(name: str, spec: str) -> str:
    return f"{name}{spec}" if spec else name


class DependencyError(MdnormError):
    """Raised when an optional or required package is missing or too old.

    Parameters
    ----------
    component : str
        What needs the packages, e.g. "markdown parser"
    missing_packages : list of (str, str)
        ``(package_name, version_spec)`` for packages that are not installed
    version_mismatches : list of (str, str, str), optional
        ``(package_name, required, installed)`` for incompatible versions
    install_command : str, optional
        Command suggested to fix the problem; generated when omitted
    message : str, optional
        Overrides the generated message
    original_import_error : ImportError, optional
        First ImportError seen while checking

    """

    def __init__(
        self,
        component: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []

        if not install_command:
            wanted = list(missing_packages) + [(name, spec) for name, spec, _ in version_mismatches]
            if wanted:
                install_command = "pip install --upgrade " + " ".join(
                    f'"{_format_requirement(name, spec)}"' if spec else name for name, spec in wanted
                )

        if message is None:
            lines = []
            if missing_packages:
                names = ", ".join(_format_requirement(name, spec) for name, spec in missing_packages)
                lines.append(f"The {component} needs packages that are not installed: {names}")
            for name, required, installed in version_mismatches:
                lines.append(f"The {component} needs {name}{required}, but {installed} is installed")
            if install_command:
                lines.append(f"Install with: {install_command}")
            message = "\n".join(lines)

        super().__init__(message, original_import_error)
        self.component = component
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
        self.original_import_error = original_import_error


__all__ = [
    "MdnormError",
    "ValidationError",
    "InvalidOptionsError",
    "ConfigError",
    "ParsingError",
    "DependencyError",
]
