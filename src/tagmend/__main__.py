"""Allow ``python -m tagmend``."""

from tagmend.ui.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
