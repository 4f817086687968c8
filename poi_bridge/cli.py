"""POI bridge - command line front-end.

Usage:
    poi-bridge                                      # interactive mode
    poi-bridge "Find charging stations in Berlin"   # single command
    poi-bridge --json "List tools"                  # raw JSON payload

Settings come from POI_* environment variables (see poi_bridge.config).
The backend credential is read from OCM_API_KEY by default.
"""

from __future__ import annotations

import json
import sys
from typing import Any, List, Optional

from .container import get_container
from .observability import configure_logging
from .services import CommandService

_BANNER = """\
POI bridge - charging station search
Examples: "Find charging stations in Berlin", "Search coordinates 48.85, 2.35", "List tools"
Type 'q' to quit.
"""


def _title(value: Any) -> str:
    return str(value.get("Title") or "") if isinstance(value, dict) else ""


def _describe_poi(poi: Any) -> str:
    if not isinstance(poi, dict):
        return str(poi)

    address = poi.get("AddressInfo") or {}
    title = address.get("Title") or "Charging Station"
    town = address.get("Town") or ""
    country = _title(address.get("Country"))
    connections = poi.get("Connections") or []
    power = connections[0].get("PowerKW") if connections and isinstance(connections[0], dict) else None
    status = _title(poi.get("StatusType"))

    parts = [title]
    place = ", ".join(p for p in (town, country) if p)
    if place:
        parts.append(place)
    if power:
        parts.append(f"{power}kW")
    if status:
        parts.append(status)
    return " | ".join(parts)


def format_payload(payload: Any) -> str:
    """Render a command payload for the terminal."""
    if isinstance(payload, list):
        lines = [f"Found {len(payload)} charging stations"]
        lines.extend(f"  - {_describe_poi(poi)}" for poi in payload)
        return "\n".join(lines)

    if isinstance(payload, dict) and "tools" in payload:
        lines = [f"{len(payload['tools'])} tools available"]
        for tool in payload["tools"]:
            name = tool.get("name", "?") if isinstance(tool, dict) else str(tool)
            description = tool.get("description", "") if isinstance(tool, dict) else ""
            lines.append(f"  - {name}: {description}" if description else f"  - {name}")
        return "\n".join(lines)

    if isinstance(payload, dict) and "error" in payload:
        lines = [payload["error"]]
        lines.extend(f"  - {cmd}" for cmd in payload.get("availableCommands", []))
        return "\n".join(lines)

    return json.dumps(payload, indent=2)


def run_command(service: CommandService, command: str, as_json: bool = False) -> int:
    """Execute one command and print its result. Returns an exit code."""
    payload, error = service.execute_safe(command)
    if error is not None:
        if as_json:
            print(json.dumps({"error": error}))
        else:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    print(json.dumps(payload, indent=2) if as_json else format_payload(payload))
    return 0


def _run_interactive(service: CommandService) -> None:
    print(_BANNER)
    while True:
        try:
            command = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            break

        if command.lower() in ("q", "quit", "exit"):
            print("Bye!")
            break
        if not command:
            continue

        run_command(service, command)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point - supports both CLI args and interactive mode."""
    args = list(sys.argv[1:] if argv is None else argv)
    as_json = "--json" in args
    if as_json:
        args.remove("--json")

    configure_logging()
    service: CommandService = get_container().resolve(CommandService)

    if args:
        sys.exit(run_command(service, " ".join(args), as_json=as_json))

    service.probe()
    _run_interactive(service)


if __name__ == "__main__":
    main()
