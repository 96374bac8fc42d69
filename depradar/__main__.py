"""Allow ``python -m depradar``."""

from .cli import main

raise SystemExit(main())
