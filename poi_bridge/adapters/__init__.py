"""Adapters layer - Concrete implementations of ports.

This module connects the application to external systems:
- The POI tool backend (JSON-RPC over a child process)
- Geocoding services (Nominatim)
- The gazetteer (CSV file)
- Command interpretation (rule-based)
- Caching (in-memory, null)
"""
