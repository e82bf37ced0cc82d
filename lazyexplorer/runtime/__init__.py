"""Public runtime orchestration entry points.

Groups the interactive bootstrap (``run_explorer``) with the session and
event-loop pieces used by tests and composition code.
"""

from __future__ import annotations


def run_explorer(*args, **kwargs):
    """Lazily import the bootstrap to avoid terminal imports on package import."""
    from .app import run_explorer as _run_explorer

    return _run_explorer(*args, **kwargs)


__all__ = ["run_explorer"]
