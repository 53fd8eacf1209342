#!/usr/bin/env python3
"""
Local booking harness (no HTTP).

Usage:
  python3 scripts/bookings_local.py list
  python3 scripts/bookings_local.py create 2024-06-01 09:00 60
  python3 scripts/bookings_local.py delete <booking-id>

Runs the same BookingUseCase the API uses, against the store configured
through .env / environment (STORE_PROVIDER, DATA_DIR, BOOKINGS_FILE).
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.application.exceptions import BookingError, ConflictError  # noqa: E402
from app.wiring.dependencies import get_booking_use_case  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Manage meeting bookings without the HTTP server")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="Print all bookings sorted by date and start time")
    create = sub.add_parser("create", help="Book a slot")
    create.add_argument("date", help="YYYY-MM-DD")
    create.add_argument("time", help="HH:MM (24h)")
    create.add_argument("duration", help="Minutes")
    delete = sub.add_parser("delete", help="Cancel a booking by id")
    delete.add_argument("booking_id")
    args = parser.parse_args()

    use_case = get_booking_use_case()
    try:
        if args.command == "list":
            for booking in use_case.list_bookings():
                print(f"{booking.date} {booking.time} ({booking.duration} min)  {booking.id}")
        elif args.command == "create":
            booking = use_case.create_booking(args.date, args.time, args.duration)
            print(json.dumps(asdict(booking), indent=2))
        elif args.command == "delete":
            use_case.delete_booking(args.booking_id)
            print(f"Deleted {args.booking_id}")
    except ConflictError as e:
        print(f"{e} Conflicts with {e.conflict.id} ({e.conflict.date} {e.conflict.time})")
        return 1
    except BookingError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
