"""Allow running as: python -m comcraft"""

import sys

from comcraft.main import main

if __name__ == "__main__":
    sys.exit(main())
