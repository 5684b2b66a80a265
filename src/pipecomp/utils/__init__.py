# pipecomp.utils - Utility modules
from pipecomp.utils.logging import setup_logging

__all__ = ["setup_logging"]
