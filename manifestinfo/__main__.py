"""Allow ``python -m manifestinfo``."""

import sys

from manifestinfo.main import main

sys.exit(main())
