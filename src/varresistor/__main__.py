"""
Run with: python -m varresistor
"""
import sys

from varresistor.main import main

if __name__ == "__main__":
    sys.exit(main())
