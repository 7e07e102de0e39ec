"""
Main entry point for the resampling package.

Allows running: python -m freqresample <input> <output>
"""

import sys
from freqresample.cli import main

if __name__ == "__main__":
    sys.exit(main())
