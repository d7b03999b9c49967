"""Allow ``python -m dotnet_resolver``."""

import sys

from .cli import main

sys.exit(main())
