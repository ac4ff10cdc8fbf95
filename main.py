#!/usr/bin/env python3
"""FlowState entry point.

Run with:
    python main.py
    python -m flowstate
"""

from flowstate.__main__ import main


if __name__ == "__main__":
    main()
