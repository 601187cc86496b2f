"""
morlock bench CLI

Runs one of the benchmark/simulation helpers from morlock.bench and emits a
single JSON document.

    python3 -m morlock.bench_cli reduce --length 100000 --repeats 3
    python3 -m morlock.bench_cli throttle --delay 100 --interval 10 --duration 1000
    python3 -m morlock.bench_cli debounce --delay 100 --interval 10 --burst-size 5

Contract: emits JSON tagged morlock-bench.v1 (see docs/bench_schema.md).
"""

from __future__ import annotations

import argparse
import datetime
import hashlib
import json
import sys
from typing import Any, Dict, List, Optional

from morlock.bench import benchmark_reduce, simulate_debounce, simulate_throttle
from morlock.cli_schema import BENCH_CONTRACT


MODES = ("reduce", "throttle", "debounce")


def _utc_now_z() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def _inputs_hash(mode: str, params: Dict[str, Any]) -> str:
    payload = json.dumps({"mode": mode, "params": params}, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _params(args: argparse.Namespace) -> Dict[str, Any]:
    if args.mode == "reduce":
        return {"length": args.length, "repeats": args.repeats}
    if args.mode == "throttle":
        return {"delay": args.delay, "interval": args.interval, "duration": args.duration}
    return {
        "delay": args.delay,
        "interval": args.interval,
        "burst_size": args.burst_size,
        "bursts": args.bursts,
    }


def _run(mode: str, params: Dict[str, Any]) -> Dict[str, Any]:
    if mode == "reduce":
        return benchmark_reduce(**params)
    if mode == "throttle":
        return simulate_throttle(**params)
    return simulate_debounce(**params)


def _emit(payload: Dict[str, Any], pretty: bool) -> None:
    if pretty:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(json.dumps(payload, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="morlock.bench_cli",
        description="Benchmark the trampolined fold or simulate throttle/debounce, emitting JSON.",
    )
    ap.add_argument("--schema", action="store_true", help="Print schema tag + doc + schema file and exit.")
    ap.add_argument("--pretty", action="store_true", help="Pretty-print JSON output.")
    ap.add_argument("mode", nargs="?", choices=MODES, help="What to run.")

    ap.add_argument("--length", type=int, default=100_000, help="reduce: sequence length.")
    ap.add_argument("--repeats", type=int, default=3, help="reduce: timed repetitions.")
    ap.add_argument("--delay", type=float, default=100.0, help="throttle/debounce: delay in ms.")
    ap.add_argument("--interval", type=float, default=10.0, help="throttle/debounce: ms between calls.")
    ap.add_argument("--duration", type=float, default=1000.0, help="throttle: length of the call stream in ms.")
    ap.add_argument("--burst-size", type=int, default=10, help="debounce: calls per burst.")
    ap.add_argument("--bursts", type=int, default=3, help="debounce: number of bursts.")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    if args.schema:
        print(BENCH_CONTRACT.line())
        return 0

    if not args.mode:
        ap.error("mode is required unless --schema is used")

    params = _params(args)
    warnings: List[str] = []
    try:
        result = _run(args.mode, params)
        ok = True
    except ValueError as e:
        print(f"Invalid parameters: {e}", file=sys.stderr)
        ok = False
        result = {}
        warnings.append(str(e))

    payload: Dict[str, Any] = {
        "schema": BENCH_CONTRACT.tag,
        "schema_doc": BENCH_CONTRACT.doc_md,
        "mode": args.mode,
        "params": params,
        "result": result,
        "ok": ok,
        "warnings": warnings,
        "meta": {
            "tool": "bench_cli",
            "generated_at": _utc_now_z(),
            "determinism": {
                "inputs_hash": _inputs_hash(args.mode, params),
            },
        },
    }

    _emit(payload, pretty=bool(args.pretty))
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
