import os
import sys

# Ensure the src directory is on sys.path so tests can import the package without installing it
SRC_ROOT = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)
