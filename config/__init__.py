"""Configuration settings and constants for esk.

Constants are defined once in `config.settings` and re-exported here so
both `from config import KEY_PREFIX` and `from config.settings import ...`
work.
"""

from .settings import *  # noqa: F401,F403
from .settings import __all__  # noqa: F401
