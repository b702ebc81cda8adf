"""
Run with: python -m seiti
"""
import sys

from seiti.main import main

if __name__ == "__main__":
    sys.exit(main())
