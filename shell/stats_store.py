import json
from pathlib import Path

from solitaire.Variants import VARIANTS

STATS_PATH = Path(__file__).with_name("stats.json")

# counter name -> type; every counter is clamped at zero on load
BUCKET_FIELDS = {
    "games_started": int,
    "games_won": int,
    "games_lost": int,
    "total_duration_sec": float,
    "total_moves": int,
    "current_streak": int,
    "best_streak": int,
}


def variant_order() -> tuple[str, ...]:
    return tuple(VARIANTS)


def _empty_bucket():
    return {name: kind() for name, kind in BUCKET_FIELDS.items()}


def _default_stats():
    return {
        "overall": _empty_bucket(),
        "by_variant": {k: _empty_bucket() for k in variant_order()},
    }


def _read_bucket(raw) -> dict:
    """A clean bucket from whatever was stored; unreadable counters start from zero."""
    bucket = _empty_bucket()
    if not isinstance(raw, dict):
        return bucket
    for name, kind in BUCKET_FIELDS.items():
        try:
            value = kind(raw.get(name, 0))
        except (TypeError, ValueError):
            continue
        bucket[name] = max(kind(), value)
    return bucket


def _sanitize(data):
    if not isinstance(data, dict):
        return _default_stats()
    stored = data.get("by_variant")
    if not isinstance(stored, dict):
        stored = {}
    return {
        "overall": _read_bucket(data.get("overall")),
        "by_variant": {k: _read_bucket(stored.get(k)) for k in variant_order()},
    }


def load_stats():
    if not STATS_PATH.exists():
        return _default_stats()
    try:
        return _sanitize(json.loads(STATS_PATH.read_text(encoding="utf-8")))
    except (OSError, ValueError):
        return _default_stats()


def save_stats(stats):
    STATS_PATH.parent.mkdir(parents=True, exist_ok=True)
    STATS_PATH.write_text(json.dumps(_sanitize(stats), ensure_ascii=False, indent=2), encoding="utf-8")


def _record(stats, variant, update):
    stats = _sanitize(stats)
    stats["by_variant"].setdefault(variant, _empty_bucket())
    for bucket in (stats["overall"], stats["by_variant"][variant]):
        update(bucket)
    return stats


def record_game_started(stats, variant):
    def update(bucket):
        bucket["games_started"] += 1
    return _record(stats, variant, update)


def record_game_won(stats, variant, duration_sec, moves):
    def update(bucket):
        bucket["games_won"] += 1
        bucket["total_duration_sec"] += max(0.0, float(duration_sec))
        bucket["total_moves"] += max(0, int(moves))
        bucket["current_streak"] += 1
        bucket["best_streak"] = max(bucket["best_streak"], bucket["current_streak"])
    return _record(stats, variant, update)


def record_game_lost(stats, variant, duration_sec=0.0, moves=0):
    def update(bucket):
        bucket["games_lost"] += 1
        bucket["total_duration_sec"] += max(0.0, float(duration_sec))
        bucket["total_moves"] += max(0, int(moves))
        bucket["current_streak"] = 0
    return _record(stats, variant, update)
