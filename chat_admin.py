#!/usr/bin/env python3
"""
Maintenance commands for the chat snapshot file.

Works directly on the JSON snapshot the API persists its chat state
to, so it can be run while the server is stopped (the running server
rewrites the whole file on its next chat mutation, so do not run the
mutating commands against a live server's file).

Usage:
    python chat_admin.py --data ./data/chat.json stats
    python chat_admin.py --data ./data/chat.json backup
    python chat_admin.py --data ./data/chat.json cleanup --days 30

``--data`` defaults to ``CHAT_DATA_PATH`` (``data/chat.json``).
"""

import argparse
import json
import os
import sys

from lab_dashboard_api.app.core.chat_storage import ChatStorage
from lab_dashboard_api.app.core.config import settings
from lab_dashboard_api.app.core.logging_config import setup_logging


def main(argv=None):
    ap = argparse.ArgumentParser(description="Inspect and maintain the lab dashboard chat snapshot.")
    ap.add_argument("--data", default=settings.chat_data_path, help="Path to the chat snapshot JSON file")
    ap.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    sub = ap.add_subparsers(dest="command", required=True)
    sub.add_parser("stats", help="Print message, channel and user counts")
    sub.add_parser("backup", help="Write a timestamped copy next to the snapshot")
    cleanup = sub.add_parser("cleanup", help="Delete messages older than --days")
    cleanup.add_argument("--days", type=int, default=settings.chat_message_max_age_days)
    args = ap.parse_args(argv)

    setup_logging(args.log_level)

    if not os.path.exists(args.data):
        print(f"[!] Chat snapshot not found: {args.data}", file=sys.stderr)
        return 1

    storage = ChatStorage(args.data, initial=None)

    if args.command == "stats":
        print(json.dumps(storage.stats(), ensure_ascii=False, indent=2))
    elif args.command == "backup":
        path = storage.backup()
        if not path:
            print("[!] Backup failed, see the log for details.", file=sys.stderr)
            return 2
        print(f"[+] Backup written to {path}")
    elif args.command == "cleanup":
        removed = storage.cleanup_old_messages(args.days)
        print(f"[+] Removed {removed} message(s) older than {args.days} days")
    return 0


if __name__ == "__main__":
    sys.exit(main())
