#!/usr/bin/env python3
"""Entry point for ``python -m iam_lens``."""

from .main import main

if __name__ == "__main__":
    main()
