"""Version information for kiosk-locale."""

__version__ = "0.3.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history
# 0.3.0 - Manifest-driven async loading, HTTP sources, CLI
# 0.2.0 - Reactive LocalizedString, persisted language state
# 0.1.0 - CSV locale tables with key fallback
