#!/usr/bin/env python3
"""Summarize codecheck JSON line logs for ops/CI usage."""

from __future__ import annotations

import argparse
import json
import math
from collections import Counter
from pathlib import Path
from typing import Any

_SUMMARY_TOTAL_KEYS = ("invalid_count", "valid_count", "duplicate_group_count", "unique_count")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize codecheck structured logs.")
    parser.add_argument("files", nargs="+", help="One or more JSONL log files.")
    parser.add_argument("--json", action="store_true", help="Output JSON.")
    return parser.parse_args()


def _percentile(values: list[int], p: float) -> int | None:
    if not values:
        return None
    ordered = sorted(values)
    index = min(len(ordered) - 1, max(0, math.ceil((p / 100) * len(ordered)) - 1))
    return ordered[index]


def summarize_log_files(paths: list[Path]) -> dict[str, Any]:
    event_counts: Counter[str] = Counter()
    error_code_counts: Counter[str] = Counter()
    status_counts: Counter[str] = Counter()
    code_totals: Counter[str] = Counter({key: 0 for key in _SUMMARY_TOTAL_KEYS})
    total_ms_values: list[int] = []
    parse_errors = 0
    lines_total = 0

    for path in paths:
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except Exception:  # noqa: BLE001
            parse_errors += 1
            continue

        for line in lines:
            lines_total += 1
            raw = line.strip()
            if not raw:
                continue

            try:
                payload = json.loads(raw)
            except Exception:  # noqa: BLE001
                parse_errors += 1
                continue

            if not isinstance(payload, dict):
                parse_errors += 1
                continue

            event = payload.get("event")
            if isinstance(event, str):
                event_counts[event] += 1

            error_code = payload.get("error_code")
            if isinstance(error_code, str):
                error_code_counts[error_code] += 1

            if "http_status" in payload:
                status_counts[str(payload["http_status"])] += 1
            elif "status_code" in payload:
                status_counts[str(payload["status_code"])] += 1

            summary = payload.get("summary")
            if event == "done" and isinstance(summary, dict):
                for key in _SUMMARY_TOTAL_KEYS:
                    value = summary.get(key)
                    if isinstance(value, int):
                        code_totals[key] += value

            timing = payload.get("timing")
            if isinstance(timing, dict):
                total_ms = timing.get("total_ms")
                if isinstance(total_ms, int | float):
                    total_ms_values.append(int(total_ms))

    return {
        "files": [str(path) for path in paths],
        "lines_total": lines_total,
        "parse_errors": parse_errors,
        "event_counts": dict(sorted(event_counts.items())),
        "error_code_counts": dict(sorted(error_code_counts.items())),
        "http_status_counts": dict(sorted(status_counts.items())),
        "code_totals": {key: code_totals[key] for key in _SUMMARY_TOTAL_KEYS},
        "total_ms_p50": _percentile(total_ms_values, 50),
        "total_ms_p95": _percentile(total_ms_values, 95),
    }


def main() -> None:
    args = _parse_args()
    paths = [Path(item).expanduser() for item in args.files]
    summary = summarize_log_files(paths)

    if args.json:
        print(json.dumps(summary, ensure_ascii=False, indent=2, sort_keys=True))
        return

    print("Codecheck Log Summary")
    print(f"files={len(summary['files'])}")
    print(f"lines_total={summary['lines_total']}")
    print(f"parse_errors={summary['parse_errors']}")
    print(f"event_counts={summary['event_counts']}")
    print(f"error_code_counts={summary['error_code_counts']}")
    print(f"http_status_counts={summary['http_status_counts']}")
    print(f"code_totals={summary['code_totals']}")
    print(f"total_ms_p50={summary['total_ms_p50']}")
    print(f"total_ms_p95={summary['total_ms_p95']}")


if __name__ == "__main__":
    main()
