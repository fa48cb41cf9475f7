"""Smoke check a running campus assistant server.

Usage: QA_API_BASE=http://localhost:5000 python scripts/smoke_check.py
"""
import os
import sys

import requests


API_BASE = os.getenv("QA_API_BASE", "http://localhost:5000").rstrip("/")

CHECKS = [
    ("GET", "/health", None),
    ("GET", "/api/connectivity", None),
    ("POST", "/api/sentiment", {"text": "the shuttle was late again"}),
    ("POST", "/api/tamper/check", {"dataType": "bus", "payload": {"nextBuses": [{"time": "25:00"}]}}),
    ("GET", "/api/cache/schedule", None),
    ("POST", "/api/chat", {"message": "When is the next bus?"}),
    ("GET", "/api/game/progress", None),
    ("GET", "/api/insights?window=day", None),
]


def main() -> int:
    failures = 0
    for method, path, body in CHECKS:
        try:
            resp = requests.request(method, f"{API_BASE}{path}", json=body, timeout=10)
            print(f"{method} {path}: {resp.status_code} - {resp.text[:80]}", flush=True)
            if resp.status_code >= 400:
                failures += 1
        except requests.RequestException as e:
            print(f"{method} {path} FAIL: {e}", flush=True)
            failures += 1

    print(f"\n{len(CHECKS) - failures}/{len(CHECKS)} checks passed")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
