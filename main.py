"""Run the face-detection camera pipeline (camera + detector + window composed)."""

import sys

from facecam.cli import main

if __name__ == "__main__":
    sys.exit(main())
