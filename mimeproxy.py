#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
MIME Proxy Interface
Start the proxy and its API from a source checkout
"""

import sys
import os

# Add the project root to the PYTHONPATH
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from interfaces.mimeproxy.__main__ import main


if __name__ == '__main__':
    sys.exit(main() or 0)
