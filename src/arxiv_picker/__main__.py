"""Entry point for ``python -m arxiv_picker``."""

import sys

from arxiv_picker.cli import main

sys.exit(main())
