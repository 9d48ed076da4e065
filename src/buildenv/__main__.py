"""Allow ``python -m buildenv``."""

from buildenv.cli import main

raise SystemExit(main())
