"""Minimal example for path access, merging and tags on an event map."""

from mapstr import M, TraversalMode
from mapstr.mapping import EventMetadata


def main() -> None:
    """Build an event, enrich it with configured metadata and print it."""
    event = M({"message": "hello", "Host": {"Name": "web-1"}})
    _ = event.put("agent.version", "8.1.0")
    print("host:", event.find_fold("host.name"))

    event.alter_path("Host.Name", TraversalMode.CASE_SENSITIVE, str.lower)
    print("renamed:", event.get_value("host.name"))

    metadata = EventMetadata.from_dict({"fields": {"env": "prod"}, "tags": ["web"]})
    metadata.apply(event)
    print(event.string_to_print())
    print("flat:", event.flatten())
    print("keys:", event.flatten_keys())


if __name__ == "__main__":
    main()
