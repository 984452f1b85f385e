"""
Main script to play Othello against the computer from a source checkout.
"""
import sys
from pathlib import Path

# Add src directory to path
sys.path.append(str(Path(__file__).parent.absolute() / 'src'))

from othello.shell import main

if __name__ == "__main__":
    sys.exit(main())
