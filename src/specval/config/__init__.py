from specval.config.loader import ConfigLoader, configure_from_file
from specval.config.log_setup import setup_logging

__all__ = ["ConfigLoader", "configure_from_file", "setup_logging"]
