#!/usr/bin/env python3
"""
Wrapper that puts src/ on the path and runs the measuring CLI
"""
import sys
import os

# Add src to path FIRST
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

if __name__ == "__main__":
    from main import main

    sys.exit(main())
