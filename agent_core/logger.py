# agent_core/logger.py
import json, time
from datetime import datetime

from agent_core.config import get_config

def _log_path(name=None, log_dir=None):
    date = datetime.now().strftime("%Y-%m-%d")
    return (log_dir or get_config().log_dir) / (name or f"{date}.jsonl")

def _append(path, entry):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, default=str) + "\n")

def log_event(event_type, payload, log_dir=None):
    """Append an event to today's JSON-lines log (global config dir unless given)."""
    entry = {
        "timestamp": datetime.now().isoformat(),
        "type": event_type,
        "payload": payload,
    }
    try:
        _append(_log_path(log_dir=log_dir), entry)
    except OSError as e:
        print(f"[logger] Logging failed: {e}")
    return entry

def log_perf(component, label, latency, log_dir=None):
    """
    Lightweight micro-benchmark logger.
    Appends latency entries to <log_dir>/perf.jsonl
    """
    entry = {"component": component, "label": label, "latency": latency, "ts": time.time()}
    try:
        _append(_log_path("perf.jsonl", log_dir), entry)
    except OSError as e:
        print(f"[logger] Logging failed: {e}")
    return entry
