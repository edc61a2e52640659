"""Allow ``python -m objective_ci``."""

from objective_ci.cli import main

raise SystemExit(main())
