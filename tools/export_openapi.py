#!/usr/bin/env python3
"""
Export the Weather API OpenAPI schema to openapi.json.

Usage:
  - From a running API:
      python tools/export_openapi.py --base http://127.0.0.1:8000 --out openapi.json

  - From local app import (requires project deps installed):
      python tools/export_openapi.py --local --out openapi.json

  - Fail when the committed schema is stale (CI):
      python tools/export_openapi.py --local --out openapi.json --check
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from urllib.request import Request, urlopen


def fetch_from_base(base: str) -> dict:
    url = base.rstrip("/") + "/openapi.json"
    req = Request(url, headers={"Accept": "application/json"})
    with urlopen(req, timeout=10) as resp:  # nosec B310
        return json.loads(resp.read().decode("utf-8"))


def build_local() -> dict:
    sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))
    from apps.api.main import app  # type: ignore

    return app.openapi()


def render(spec: dict) -> str:
    return json.dumps(spec, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def main() -> int:
    ap = argparse.ArgumentParser(description="Export Weather API OpenAPI schema")
    ap.add_argument("--base", help="Base URL of a running API (e.g. http://127.0.0.1:8000)")
    ap.add_argument("--local", action="store_true", help="Build schema by importing app locally")
    ap.add_argument("--out", default="openapi.json", help="Output file path")
    ap.add_argument("--check", action="store_true", help="Compare with --out instead of writing")
    args = ap.parse_args()

    if not args.base and not args.local:
        ap.error("Provide --base or --local")

    spec = fetch_from_base(args.base) if args.base else build_local()
    text = render(spec)
    out = Path(args.out)

    if args.check:
        current = out.read_text(encoding="utf-8") if out.exists() else ""
        if current != text:
            print(f"{out} is out of date; re-run without --check", file=sys.stderr)
            return 1
        print(f"{out} is up to date")
        return 0

    out.write_text(text, encoding="utf-8")
    print(f"Wrote {out} ({out.stat().st_size} bytes)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
