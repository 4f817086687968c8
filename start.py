"""Simple launcher for the POI bridge.

Runs the command line front-end from a source checkout without
installing the package:

    python start.py "Find charging stations in London"
    python start.py            # interactive prompt
"""

from __future__ import annotations

from poi_bridge.cli import main

if __name__ == "__main__":
    main()
