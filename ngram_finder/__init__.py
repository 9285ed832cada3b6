__version__ = "0.1.0"
from ngram_finder.config import ConfigManager
from ngram_finder.core import *  # noqa: F401, F403
from ngram_finder.core import __all__ as _core_all

# Loaded lazily on first access to config.cfg
config = ConfigManager()

__all__ = [
    "__version__",
    "ConfigManager",
    "config",
    *_core_all,
]
