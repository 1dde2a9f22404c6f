from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path


def test_log_summarizer_json_output(tmp_path: Path) -> None:
    log_path = tmp_path / "app.log"
    log_path.write_text(
        "\n".join(
            [
                json.dumps({"event": "start", "request_id": "r1", "input_chars": 40}),
                json.dumps(
                    {
                        "event": "done",
                        "request_id": "r1",
                        "outcome": "ok",
                        "http_status": 200,
                        "summary": {
                            "invalid_count": 2,
                            "valid_count": 5,
                            "duplicate_group_count": 1,
                            "unique_count": 4,
                        },
                        "timing": {"total_ms": 3},
                    }
                ),
                json.dumps(
                    {
                        "event": "error",
                        "request_id": "r2",
                        "error_code": "INPUT_TOO_LARGE",
                        "status_code": 413,
                        "failure_stage": "validate_inputs",
                        "timing": {"total_ms": 1},
                    }
                ),
                "not-json-line",
            ]
        ),
        encoding="utf-8",
    )

    result = subprocess.run(
        [sys.executable, "scripts/summarize_logs.py", "--json", str(log_path)],
        cwd=Path(__file__).resolve().parents[1],
        check=False,
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0

    payload = json.loads(result.stdout)
    assert payload["parse_errors"] == 1
    assert payload["event_counts"] == {"done": 1, "error": 1, "start": 1}
    assert payload["error_code_counts"] == {"INPUT_TOO_LARGE": 1}
    assert payload["http_status_counts"] == {"200": 1, "413": 1}
    assert payload["code_totals"] == {
        "invalid_count": 2,
        "valid_count": 5,
        "duplicate_group_count": 1,
        "unique_count": 4,
    }
    assert payload["total_ms_p95"] == 3


def test_log_summarizer_text_output_counts_missing_files(tmp_path: Path) -> None:
    result = subprocess.run(
        [sys.executable, "scripts/summarize_logs.py", str(tmp_path / "missing.log")],
        cwd=Path(__file__).resolve().parents[1],
        check=False,
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0
    assert "Codecheck Log Summary" in result.stdout
    assert "parse_errors=1" in result.stdout
