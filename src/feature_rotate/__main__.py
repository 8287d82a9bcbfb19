"""Allow ``python -m feature_rotate``."""
import sys

from feature_rotate.main import main

sys.exit(main())
