#!/usr/bin/env python3
"""
Print a day's cash reconciliation from a running cash-up server, optionally
recording the night's balances first.

Examples:
    python scripts/cashup_report.py --server http://127.0.0.1:8000 --date 2026-10-19
    python scripts/cashup_report.py --date 2026-10-19 --fx-rate 36000 \
        --save --cash-sos 720,000 --cash-usd 352.50 --evc 120.50 --edahab 40
"""

from __future__ import annotations

import argparse
import json
import sys
import urllib.error
import urllib.parse
import urllib.request
from datetime import date
from typing import Any, Optional


def http_json(method: str, url: str, payload: Optional[dict[str, Any]] = None,
              timeout: int = 30) -> tuple[int, dict[str, Any]]:
    data = json.dumps(payload).encode("utf-8") if payload is not None else None
    req = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"}, method=method)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.status, json.loads(resp.read() or b"{}")
    except urllib.error.HTTPError as exc:
        body = exc.read()
        try:
            return exc.code, json.loads(body or b"{}")
        except json.JSONDecodeError:
            return exc.code, {"detail": body.decode("utf-8", "replace")}


def build_url(server: str, path: str, fx_rate: Optional[str]) -> str:
    url = server.rstrip("/") + path
    if fx_rate:
        url += "?" + urllib.parse.urlencode({"fx_rate": fx_rate})
    return url


def print_report(report: dict[str, Any]) -> None:
    ref = report.get("reference_currency", "USD")
    local = report.get("local_currency", "SOS")
    now = report["current_totals"]
    prev = report["previous_totals"]
    deltas = report["deltas"]
    movement = report["movement"]
    result = report["result"]

    print(f"Cash-up for {report['day']}  (FX {report['fx_rate']} {local} per 1 {ref})")
    print("-" * 60)
    print(f"{'Channel':<12}{'Yesterday':>16}{'Today':>16}{'Change':>16}")
    for channel in ("cash_usd", "evc", "edahab", "merchant", "cash_sos"):
        print(f"{channel:<12}{prev[channel]:>16}{now[channel]:>16}{deltas['channels'][channel]:>16}")
    print("-" * 60)
    print(f"{'Overall ' + ref:<12}{prev['overall_total']:>16}{now['overall_total']:>16}{deltas['overall_total']:>16}")
    print()
    print(f"Cash in:  {movement['inbound']}   Cash out: {movement['outbound']}   Net: {movement['net']}")
    print(f"Expected change: {result['expected']}   Actual change: {result['actual']}")
    print(f"Difference: {result['difference']}   Status: {result['status'].upper()}")
    for warning in report.get("warnings") or []:
        print(f"! {warning}")
    if report.get("snapshot_error"):
        print(f"! {report['snapshot_error']}")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Night cash-up reconciliation report")
    parser.add_argument("--server", default="http://127.0.0.1:8000", help="Cash-up server base URL")
    parser.add_argument("--date", default=date.today().isoformat(), help="Day to reconcile (YYYY-MM-DD)")
    parser.add_argument("--fx-rate", default=None, help="SOS per 1 USD; server default when omitted")
    parser.add_argument("--save", action="store_true", help="Record the balances below before reporting")
    for name in ("cash-sos", "cash-usd", "evc", "edahab", "merchant"):
        parser.add_argument(f"--{name}", default=None)
    parser.add_argument("--note", default=None)
    parser.add_argument("--json", action="store_true", help="Print the raw JSON response")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    api = "/api"

    if args.save:
        payload = {
            "cash_sos": args.cash_sos,
            "cash_usd": args.cash_usd,
            "evc": args.evc,
            "edahab": args.edahab,
            "merchant": args.merchant,
            "note": args.note,
        }
        code, body = http_json("PUT", build_url(args.server, f"{api}/balances/{args.date}", args.fx_rate), payload)
        if code != 200:
            print(f"[save] failed ({code}): {body.get('detail')}", file=sys.stderr)
            return 1
        print(f"[save] {body['message']}")
        report = body["reconciliation"]
    else:
        code, report = http_json("GET", build_url(args.server, f"{api}/reconciliation/{args.date}", args.fx_rate))
        if code != 200:
            print(f"[report] failed ({code}): {report.get('detail')}", file=sys.stderr)
            return 1

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print_report(report)
    return 0 if report["result"]["status"] == "balanced" else 2


if __name__ == "__main__":
    sys.exit(main())
