#!/usr/bin/env python3
# /tedit/main.py
"""
tedit launcher for source checkouts
===================================

Puts ``src/`` on the import path and starts the editor, so ``python main.py
FILE`` works without installing the package. Installed copies use the
``tedit`` console script instead.
"""

import os
import sys

project_root = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(project_root, "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from tedit.main import start  # noqa: E402

if __name__ == "__main__":
    start()
