#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdnorm/utils/decorators.py
"""Decorators and context managers shared by mdnorm parsers.

Third-party packages are imported lazily inside the methods that need them;
:func:`requires_dependencies` checks them up front so a missing or outdated
package surfaces as a :class:`~mdnorm.exceptions.DependencyError` with an
install hint rather than a bare ImportError halfway through a parse.

"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List

from mdnorm.exceptions import DependencyError
from mdnorm.utils.packages import PackageRequirement, find_unmet_requirements


def requires_dependencies(component: str, packages: List[PackageRequirement]) -> Callable:
    """Check required packages and versions before running the wrapped method.

    Parameters
    ----------
    component : str
        What needs the packages (e.g. "markdown parser"); used in messages
    packages : list of tuple
        ``(install_name, import_name, version_spec)`` triples, e.g.
        ``("mistune", "mistune", ">=3.0.0")``; an empty spec accepts any version

    Returns
    -------
    Callable
        Decorator for the method

    Raises
    ------
    DependencyError
        When the decorated method is called while a package is missing or
        has an incompatible version

    Examples
    --------
        >>> @requires_dependencies("markdown parser", [("mistune", "mistune", ">=3.0.0")])
        ... def parse(self, text):
        ...     import mistune

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            unmet = find_unmet_requirements(packages)
            if unmet:
                raise DependencyError(
                    component=component,
                    missing_packages=unmet.missing,
                    version_mismatches=unmet.version_mismatches,
                    original_import_error=unmet.import_error,
                ) from unmet.import_error

            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long the ``with`` block took, at DEBUG level.

    Nothing is measured unless ``logger`` has DEBUG enabled.

    Parameters
    ----------
    logger : logging.Logger
        Logger that receives the timing message
    operation : str
        Label for the timed block, e.g. ``"Parsing (markdown)"``

    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return

    start_time = time.perf_counter()
    yield
    logger.debug("%s completed in %.1f ms", operation, (time.perf_counter() - start_time) * 1000)
