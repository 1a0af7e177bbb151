"""Allow ``python -m qpaper_pdf``."""
import sys

from .cli import main

sys.exit(main())
