"""Allow ``python -m open_mail``."""

from open_mail.cli.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
