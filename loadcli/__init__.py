"""loadcli: a concurrent HTTP load generator."""
from .const import APP_VERSION

__version__ = APP_VERSION
