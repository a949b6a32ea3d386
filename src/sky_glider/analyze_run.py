"""Analyze a recorded flight and generate diagnostic figures."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from sky_glider.core.logging_utils import (
    EVENTS_FILENAME,
    LAST_RUN_FILENAME,
    META_FILENAME,
    TIMESERIES_FILENAME,
)

FIGS_SUBDIR = "figs"
EVENT_TYPES = ("ring_pass", "crash", "finish", "reset")


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        columns: Dict[str, List[float]] = {name: [] for name in reader.fieldnames or []}
        for row in reader:
            for key, value in row.items():
                if key is None:
                    continue
                columns.setdefault(key, []).append(float(value))
    return {key: np.asarray(values) for key, values in columns.items()}


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row or not row.get("type"):
                continue
            events.append(
                {
                    "t": float(row["t"]),
                    "type": row["type"],
                    "position": (float(row["x"]), float(row["y"]), float(row["z"])),
                    "details": row.get("details", ""),
                }
            )
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def summarize_events(events: List[dict]) -> Dict[str, int]:
    summary: Dict[str, int] = {event_type: 0 for event_type in EVENT_TYPES}
    for event in events:
        if event["type"] in summary:
            summary[event["type"]] += 1
    return summary


def final_attempt(events: List[dict]) -> List[dict]:
    """Events logged after the last reset."""

    for idx in range(len(events) - 1, -1, -1):
        if events[idx]["type"] == "reset":
            return events[idx + 1:]
    return list(events)


def rings_passed(events: List[dict]) -> List[int]:
    return [int(float(event["details"])) for event in events if event["type"] == "ring_pass"]


def outcome(events: List[dict]) -> str:
    for event in reversed(events):
        if event["type"] == "crash":
            return f"crashed ({event['details'] or 'unknown'})"
        if event["type"] == "finish":
            return "finished"
    return "in flight"


def plot_flight_path(fig_dir: Path, ts: Dict[str, np.ndarray], meta: dict) -> None:
    fig, ax = plt.subplots(figsize=(6, 8))
    ax.plot(ts["x"], ts["z"], color="#339ae6", lw=1.5, label="Glider")
    rings = np.asarray(meta.get("rings", []), dtype=float)
    if rings.size:
        ax.scatter(rings[:, 0], rings[:, 2], color="#e6b233", s=40, marker="o", label="Rings")
    finish_z = meta.get("finish_z")
    if finish_z is not None:
        ax.axhline(float(finish_z), color="#2f9e44", linestyle="--", alpha=0.6, label="Finish")
    ax.set_xlabel("x")
    ax.set_ylabel("z")
    ax.set_title("Flight path (top view)")
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "flight_path.png", dpi=150)
    plt.close(fig)


def plot_altitude(fig_dir: Path, ts: Dict[str, np.ndarray], meta: dict) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], ts["y"], color="#4dabf7")
    floor_y = meta.get("floor_y")
    if floor_y is not None:
        ax.axhline(float(floor_y), color="#d9480f", linestyle="--", alpha=0.6, label="Floor")
        ax.legend()
    ax.set_xlabel("t [s]")
    ax.set_ylabel("altitude")
    ax.set_title("Altitude over time")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "altitude.png", dpi=150)
    plt.close(fig)


def plot_speed(fig_dir: Path, ts: Dict[str, np.ndarray], events: List[dict]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], ts["speed"], color="#ffa94d")
    for event in events:
        if event["type"] == "ring_pass":
            ax.axvline(event["t"], color="#e6b233", linestyle=":", alpha=0.5)
    ax.set_xlabel("t [s]")
    ax.set_ylabel("speed")
    ax.set_title("Speed over time")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "speed.png", dpi=150)
    plt.close(fig)


def print_summary(run_dir: Path, meta: dict, events: List[dict]) -> None:
    summary = summarize_events(events)
    attempt = final_attempt(events)
    passed = rings_passed(attempt)
    ring_total = len(meta.get("rings", []))
    print(f"Run: {run_dir.name}")
    print(f" Course: {meta.get('course_name', meta.get('course', 'unknown'))}")
    print(f" Last attempt: {outcome(attempt)}, {len(passed)} / {ring_total} rings")
    if passed:
        print(f" Ring order: {', '.join(str(i) for i in passed)}")
    print(" Events:" + ",".join(f" {etype}: {count}" for etype, count in summary.items()))


def resolve_run_dir(run_dir: Optional[str], base_runs_dir: Path) -> Optional[Path]:
    if run_dir:
        run_path = Path(run_dir)
        if not run_path.is_dir():
            run_path = base_runs_dir / run_dir
        return run_path
    last_run_file = base_runs_dir / LAST_RUN_FILENAME
    if not last_run_file.exists():
        return None
    return base_runs_dir / last_run_file.read_text(encoding="utf-8").strip()


def analyze(run_path: Path) -> Path:
    """Write all figures for *run_path* and return the figure directory."""

    with (run_path / META_FILENAME).open("r", encoding="utf-8") as fh:
        meta = json.load(fh)
    ts = load_timeseries(run_path / TIMESERIES_FILENAME)
    events = load_events(run_path / EVENTS_FILENAME)
    if not ts or ts["t"].size == 0:
        raise ValueError(f"{run_path / TIMESERIES_FILENAME} has no samples")

    fig_dir = ensure_fig_dir(run_path)
    plot_flight_path(fig_dir, ts, meta)
    plot_altitude(fig_dir, ts, meta)
    plot_speed(fig_dir, ts, events)
    print_summary(run_path, meta, events)
    return fig_dir


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a logged flight and create figures.")
    parser.add_argument("run_dir", nargs="?", help="Path to a specific run directory")
    parser.add_argument("--runs-dir", default="data/runs", help="Base directory for run logs")
    args = parser.parse_args(argv)

    run_path = resolve_run_dir(args.run_dir, Path(args.runs_dir))
    if run_path is None:
        parser.error(f"No run given and {LAST_RUN_FILENAME} is missing.")
    if not run_path.is_dir():
        parser.error(f"Could not find run directory: {run_path}")
    for name in (META_FILENAME, TIMESERIES_FILENAME, EVENTS_FILENAME):
        if not (run_path / name).exists():
            parser.error(f"Run directory is missing {name}.")

    try:
        analyze(run_path)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
