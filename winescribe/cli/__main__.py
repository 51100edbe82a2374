"""Allow ``python -m winescribe.cli`` execution."""

import sys

from winescribe.cli.generate import main

sys.exit(main())
