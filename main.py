"""Main entry point: resolve, report on and edit document destinations."""

from pdfdest.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
