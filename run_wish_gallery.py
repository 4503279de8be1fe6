#!/usr/bin/env python3
"""
WishGallery - Photo carousel builder
Entry point for running from a source checkout.
"""

import sys
from pathlib import Path

# Add src directory to Python path
src_path = Path(__file__).parent / 'src'
sys.path.insert(0, str(src_path))

if __name__ == "__main__":
    from wish_gallery.main import main
    main()
