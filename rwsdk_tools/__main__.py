"""Allow ``python -m rwsdk_tools``."""

import sys

from rwsdk_tools.cli.commands import main

sys.exit(main())
