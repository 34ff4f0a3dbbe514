from __future__ import annotations

import csv
import json
import platform
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Sequence

from .layout import column_of
from .ticket import Ticket
from .uniqueness import ticket_hash, tickets_hash


def ensure_parent(path: Path, *, mkdirs: bool) -> None:
    parent = path.parent
    if not parent.exists() and mkdirs:
        parent.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, data: object, *, mkdirs: bool, overwrite: bool) -> None:
    if path.exists() and not overwrite:
        raise FileExistsError(
            f"Refusing to overwrite existing file without --force: {path}"
        )
    ensure_parent(path, mkdirs=mkdirs)
    text = json.dumps(data, ensure_ascii=True, sort_keys=True, indent=2)
    path.write_text(text + "\n", encoding="utf-8")


def build_run_meta(
    *,
    app_version: str,
    params_hash: str,
    seed: int,
    rng_engine: str,
) -> Dict[str, object]:
    return {
        "app_version": app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "python_version": sys.version.split()[0],
        "platform": platform.system().lower(),
        "params_hash": params_hash,
        "seed": seed,
        "rng_engine": rng_engine,
        "hash_algorithm": "sha256",
    }


def emit_tickets_json(
    path: Path,
    *,
    tickets: Sequence[Ticket],
    run_meta: Dict[str, object],
    mkdirs: bool,
    overwrite: bool,
) -> None:
    entries: List[Dict[str, object]] = []
    for idx, ticket in enumerate(tickets, start=1):
        entries.append(
            {"id": str(idx), "matrix": ticket.to_matrix(), "ticket_hash": ticket_hash(ticket)}
        )
    data = {
        "run_meta": run_meta,
        "tickets": entries,
        "tickets_hash": tickets_hash(tickets),
    }
    write_json(path, data, mkdirs=mkdirs, overwrite=overwrite)


def load_tickets_json(path: Path) -> List[Ticket]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not isinstance(data.get("tickets"), list):
        raise ValueError(f"Not a tickets file: {path}")
    return [Ticket.from_matrix(entry["matrix"]) for entry in data["tickets"]]


def emit_report_json(
    path: Path, *, report: Dict[str, object], mkdirs: bool, overwrite: bool
) -> None:
    write_json(path, report, mkdirs=mkdirs, overwrite=overwrite)


def emit_summary_csv(
    path: Path,
    *,
    freqs: Dict[int, int],
    by_column: bool,
    mkdirs: bool,
    overwrite: bool,
) -> None:
    if path.exists() and not overwrite:
        raise FileExistsError(
            f"Refusing to overwrite existing file without --force: {path}"
        )
    ensure_parent(path, mkdirs=mkdirs)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["number", "total"])
        for num in sorted(freqs.keys()):
            writer.writerow([num, freqs[num]])
        if by_column:
            writer.writerow([])
            writer.writerow(["column", "number", "count"])
            for num in sorted(freqs.keys()):
                writer.writerow([column_of(num), num, freqs[num]])
