"""Module entry point for `python -m dictionary_schema_registry`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
