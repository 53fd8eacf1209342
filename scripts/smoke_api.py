#!/usr/bin/env python3
"""Smoke test for the booking API against a running server."""

from __future__ import annotations

import argparse
import sys

import httpx
from httpx import ConnectError


def main() -> None:
    parser = argparse.ArgumentParser(description="Exercise /api/bookings on a running server")
    parser.add_argument("--base-url", default="http://127.0.0.1:8001")
    parser.add_argument("--date", default="2099-01-01")
    args = parser.parse_args()

    try:
        httpx.get(f"{args.base_url}/health", timeout=5.0)
    except ConnectError:
        print("Server is not running!")
        print("Please start it with: uvicorn app.main:app --reload --port 8001")
        sys.exit(1)

    url = f"{args.base_url}/api/bookings"

    first = httpx.post(url, json={"date": args.date, "time": "09:00", "duration": 60}, timeout=10.0)
    print("create 09:00+60 ->", first.status_code, first.text)

    overlap = httpx.post(url, json={"date": args.date, "time": "09:30", "duration": 30}, timeout=10.0)
    print("create 09:30+30 ->", overlap.status_code, overlap.text)

    adjacent = httpx.post(url, json={"date": args.date, "time": "10:00", "duration": 30}, timeout=10.0)
    print("create 10:00+30 ->", adjacent.status_code, adjacent.text)

    listing = httpx.get(url, timeout=10.0)
    print("list ->", listing.status_code, len(listing.json().get("bookings", [])), "bookings")

    for resp in (first, adjacent):
        if resp.status_code == 201:
            booking_id = resp.json()["booking"]["id"]
            deleted = httpx.delete(f"{url}/{booking_id}", timeout=10.0)
            print(f"delete {booking_id} ->", deleted.status_code, deleted.text)

    missing = httpx.delete(f"{url}/does-not-exist", timeout=10.0)
    print("delete missing ->", missing.status_code, missing.text)


if __name__ == "__main__":
    main()
