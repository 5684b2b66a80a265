# pipecomp.config - Configuration
from pipecomp.config.config import Config, load_config

__all__ = ["Config", "load_config"]
