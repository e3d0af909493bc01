"""Allow ``python -m repo_scaffold``."""

from repo_scaffold.cli import main

raise SystemExit(main())
