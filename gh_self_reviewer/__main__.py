"""Allow ``python -m gh_self_reviewer``."""

import sys

from gh_self_reviewer.main import main

sys.exit(main())
