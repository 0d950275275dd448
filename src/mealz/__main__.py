"""Run with: python -m mealz"""

import sys

from mealz.cli import main

if __name__ == "__main__":
    sys.exit(main())
