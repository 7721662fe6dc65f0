"""kiosk-locale: run-time string localization for interactive applications."""

from kiosk_locale.__version__ import __version__

__all__ = ["__version__"]
