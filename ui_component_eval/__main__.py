"""Allow ``python -m ui_component_eval``."""

import sys

from ui_component_eval.cli import main

sys.exit(main())
