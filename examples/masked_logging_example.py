"""Minimal example for logging a map with sensitive values masked."""

import logging

from mapstr import LoggingMask, M, MapStrLoggerAdapter, MaskedMap


def main() -> None:
    """Log an event map with the default mask policy."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s %(fields)s")
    logger = MapStrLoggerAdapter(logging.getLogger("events"), mask=LoggingMask())

    event = M({"user": {"name": "alice", "password": "hunter2"}, "output": {"hosts": ["es:9200"]}})
    logger.info("event received", fields=event)

    print("masked:", MaskedMap(event, LoggingMask()))
    print("original untouched:", event)


if __name__ == "__main__":
    main()
