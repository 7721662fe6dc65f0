#!/usr/bin/env python3
"""Look up localization keys from the configured sources.

Usage:
    python -m kiosk_locale menu.start menu.quit --lang ru
    python -m kiosk_locale menu.start --all
"""

import sys

from kiosk_locale.core.config_loader import load_config, override_from_args
from kiosk_locale.core.logging_utils import configure_file_logging, set_global_log_level
from kiosk_locale.localization import (
    LocalizationError,
    MemoryPreferences,
    create_localization_service,
)


def parse_arguments(argv=None):
    """Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed arguments
    """
    import argparse

    parser = argparse.ArgumentParser(description="kiosk-locale key lookup")
    parser.add_argument("keys", nargs="+", help="Localization keys to resolve")
    parser.add_argument("--config", default="config/base.yaml", help="Base config file")
    parser.add_argument("--lang", help="Language abbreviation (default: configured default)")
    parser.add_argument("--all", action="store_true", help="Show every loaded language")
    parser.add_argument("--sources", help="Override sources location (directory or URL)")
    parser.add_argument("--http", action="store_true", help="Fetch sources over HTTP")
    parser.add_argument("--log-level", help="Logging level (e.g. DEBUG)")
    parser.add_argument("--timeout", type=float, default=30.0, help="Seconds to wait for sources")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_arguments(argv)

    config = load_config(args.config)
    override_from_args(config, args)

    set_global_log_level(config["logging"]["level"])
    if config["logging"].get("file"):
        configure_file_logging(log_file=config["logging"]["file"])

    # Lookups from the CLI never change the stored preference
    service = create_localization_service(config, persistence=MemoryPreferences())
    try:
        service.initialize()
        if not service.wait_ready(args.timeout):
            print(f"Locales not ready after {args.timeout:.0f}s", file=sys.stderr)
            return 1

        if args.lang:
            service.set_language(args.lang)

        for key in args.keys:
            if args.all:
                for language, text in service.get_all_translations(key).items():
                    print(f"{key}\t{language.name}\t{text}")
            else:
                print(f"{key}\t{service.get_localized(key)}")
    except LocalizationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    finally:
        service.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
