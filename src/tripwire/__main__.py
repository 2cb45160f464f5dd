"""Allow ``python -m tripwire``."""

from tripwire.cli.main import main

raise SystemExit(main())
