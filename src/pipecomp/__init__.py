# pipecomp - Pipeline Completion engine
"""
pipecomp resolves which autocomplete provider applies at a cursor position
inside an aggregation pipeline document and collects its suggestions.
"""

from pipecomp.version import __version__

__all__ = ["__version__"]
