#!/usr/bin/env python
"""Demonstrate the dashboard and report export endpoints.

Usage:
    uv run python examples/export_report_demo.py [path/to/dashboard.json]

This script demonstrates:
1. Building every dashboard view from one request
2. Sorting a table on a column
3. Downloading the three-sheet enrollment report
4. Writing the report into the server's export directory

Prerequisites:
    - API running (uv run uvicorn app.main:app --reload --port 8123)
"""

import json
import re
import sys
from pathlib import Path

import httpx

API_BASE = "http://localhost:8123"
DEFAULT_PAYLOAD = Path(__file__).parent / "data" / "dashboard.json"


def print_section(title: str) -> None:
    """Print a section header."""
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}\n")


def print_response(response: httpx.Response, label: str = "") -> dict:
    """Print status and, for JSON responses, the body."""
    content_type = response.headers.get("content-type", "")
    data = response.json() if "json" in content_type else {}
    status_emoji = "✓" if response.status_code < 400 else "✗"
    print(f"{status_emoji} {label} [{response.status_code}]")
    if data:
        print(json.dumps(data, indent=2, default=str))
    return data


def main() -> int:
    """Run the export demo workflow."""
    print_section("EnrollmentDash - Report Export Demo")

    payload_path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_PAYLOAD
    payload = json.loads(payload_path.read_text(encoding="utf-8"))

    client = httpx.Client(base_url=API_BASE, timeout=30)

    try:
        health = client.get("/health")
        if health.status_code != 200:
            print(f"API not healthy: {health.status_code}")
            return 1
    except httpx.ConnectError:
        print(f"Cannot connect to API at {API_BASE}")
        print("Start the API with: uv run uvicorn app.main:app --reload --port 8123")
        return 1

    print_section("1. Dashboard stats")
    response = client.post("/dashboard", json=payload)
    if response.status_code != 200:
        print_response(response, "Build dashboard")
        return 1
    dashboard = response.json()
    print(json.dumps(dashboard["stats"], indent=2))
    for slice_ in dashboard["levels"]["distribution"]:
        print(f"  {slice_['label']:<20} {slice_['color']}")

    print_section("2. Sources table sorted by enrollments")
    response = client.post(
        "/dashboard/tables/sources",
        params={"sort_key": "count", "descending": "true"},
        json=payload["sources"],
    )
    for row in response.json()["rows"]:
        print(f"  {row['source']['text']:<15} {row['course']:<40} {row['count']:>4}")

    print_section("3. Download report")
    response = client.post("/exports/report", json=payload)
    if response.status_code != 200:
        print_response(response, "Download report")
        return 1
    match = re.search(r'filename="([^"]+)"', response.headers["content-disposition"])
    filename = match.group(1) if match else "report.xlsx"
    Path(filename).write_bytes(response.content)
    print(f"✓ Saved {filename} ({len(response.content)} bytes)")

    print_section("4. Write report on the server")
    response = client.post("/exports/report/files", params={"base_name": "demo"}, json=payload)
    print_response(response, "Save report")

    print_section("Demo Complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
