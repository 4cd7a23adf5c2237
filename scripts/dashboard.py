"""
CLI entry point for the dashboard client.

Usage:
    python scripts/dashboard.py view --name soil
    python scripts/dashboard.py setup --lat 12.9716 --lon 77.5946 --lang kn
    python scripts/dashboard.py watch
    python scripts/dashboard.py chat --message "what is a good crop to grow in this season"
"""

import argparse
import json
import logging
import sys
import threading
from dataclasses import asdict
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.dashboard.config import DashboardConfig
from src.dashboard.errors import ChatbotApiError
from src.dashboard.preferences import SUPPORTED_LANGUAGES, UserPreferences
from src.dashboard.projectors import PROJECTORS
from src.dashboard.service import DashboardService


def print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_view(service: DashboardService, args) -> int:
    state = service.refetch()
    if state.error_message:
        print(f"[!] {state.error_message}", file=sys.stderr)

    names = list(PROJECTORS) if args.name == "all" else [args.name]
    output = {}
    for name in names:
        view = service.view(name)
        if name == "overview" and args.display_defaults:
            view = view.with_display_defaults()
        output[name] = asdict(view)
    print_json(output if len(names) > 1 else output[names[0]])
    return 0


def cmd_setup(service: DashboardService, args) -> int:
    if args.lang not in SUPPORTED_LANGUAGES:
        print(
            f"ERROR: Unsupported language '{args.lang}'. "
            f"Choose from: {', '.join(SUPPORTED_LANGUAGES)}",
            file=sys.stderr,
        )
        return 1
    if not (-90 <= args.lat <= 90) or not (-180 <= args.lon <= 180):
        print("ERROR: Coordinates out of range", file=sys.stderr)
        return 1

    prefs = UserPreferences(latitude=args.lat, longitude=args.lon, language=args.lang)
    service.update_preferences(prefs)
    print_json({
        "saved": asdict(prefs),
        "language_label": SUPPORTED_LANGUAGES[args.lang],
        "storage": str(service.store.storage.path),
    })
    return 0


def cmd_watch(service: DashboardService, args) -> int:
    def on_state(state):
        line = {"status": state.status.value, "generation": state.generation}
        if state.error_message:
            line["error_message"] = state.error_message
        print_json(line)

    service.subscribe(on_state)
    service.start(watch=True)
    print("[*] Watching for preference changes. Press Ctrl-C to stop.", file=sys.stderr)
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        service.stop()
    return 0


def cmd_chat(service: DashboardService, args) -> int:
    try:
        reply = service.ask(args.message)
    except ChatbotApiError as e:
        print(f"[ERROR] {e.message}", file=sys.stderr)
        return 2
    print(reply)
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Agricultural telemetry dashboard client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/dashboard.py view --name weather
  python scripts/dashboard.py view --name all
  python scripts/dashboard.py setup --lat 28.6139 --lon 77.2090 --lang hi
        """,
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_view = sub.add_parser("view", help="Fetch and print a page view")
    p_view.add_argument(
        "--name", default="overview", choices=list(PROJECTORS) + ["all"],
        help="View to print (default: overview)",
    )
    p_view.add_argument(
        "--display-defaults", action="store_true",
        help="Fill unresolved overview fields with display literals",
    )

    p_setup = sub.add_parser("setup", help="Save location and language preferences")
    p_setup.add_argument("--lat", type=float, required=True, help="Latitude")
    p_setup.add_argument("--lon", type=float, required=True, help="Longitude")
    p_setup.add_argument(
        "--lang", default="en",
        help=f"Language code ({', '.join(SUPPORTED_LANGUAGES)})",
    )

    sub.add_parser("watch", help="Refetch whenever preferences change")

    p_chat = sub.add_parser("chat", help="Ask the farming assistant")
    p_chat.add_argument("--message", "-m", required=True, help="Message text")

    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    service = DashboardService.from_config(DashboardConfig.from_env())
    commands = {
        "view": cmd_view,
        "setup": cmd_setup,
        "watch": cmd_watch,
        "chat": cmd_chat,
    }
    sys.exit(commands[args.command](service, args))


if __name__ == "__main__":
    main()
