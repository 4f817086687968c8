"""Top-level package for the POI command bridge.

The bridge turns a free-text command ("Find charging stations in
Berlin") into a call against a POI tool backend that is spoken to over
JSON-RPC on a child process's standard streams, then filters the
returned POIs to the resolved search area.
"""

__version__ = "0.1.0"
