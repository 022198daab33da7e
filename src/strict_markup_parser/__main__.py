"""Allow ``python -m strict_markup_parser``."""

import sys

from strict_markup_parser.cli.main import main

sys.exit(main())
