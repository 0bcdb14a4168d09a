import sys
import os

# Ensure the sweepline package is in the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "src")))

# Import and run the benchmark
from sweepline.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
