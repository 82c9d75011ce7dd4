"""Public package surface for gridbrowser.

Exports ``main`` for programmatic CLI invocation.
Most implementation lives in submodules under ``gridbrowser``.
"""

from __future__ import annotations

import logging

# Package logs stay silent unless ``--log-file`` attaches a handler.
logging.getLogger(__name__).addHandler(logging.NullHandler())


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
