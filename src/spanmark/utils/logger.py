"""Logger lookup for Spanmark modules.

Every module logs under the ``spanmark`` namespace, so hosts can tune the
parser's depth-limit warnings and the renderer's debug output in one place.
The library installs no handlers.

Example:
    >>> import logging
    >>> logging.getLogger("spanmark").setLevel(logging.ERROR)  # silence depth warnings
    >>> from spanmark.utils.logger import get_logger
    >>> get_logger("spanmark.parser").name
    'spanmark.parser'
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the ``spanmark`` namespace.

    Args:
        name: Module name (typically __name__); other names get the
            ``spanmark.`` prefix

    Example:
        >>> get_logger("renderers").name
        'spanmark.renderers'
    """
    if not (name == "spanmark" or name.startswith("spanmark.")):
        name = f"spanmark.{name}"
    return logging.getLogger(name)
