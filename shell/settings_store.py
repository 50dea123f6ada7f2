import configparser
from pathlib import Path

from solitaire.Variants import DEFAULT_VARIANT, VARIANTS, GameConfig

SETTINGS_PATH = Path(__file__).with_name("settings.ini")

DEFAULT_SETTINGS = {
    "variant": DEFAULT_VARIANT,
    "seed": "",
    "year": "",
    "draw_count": "1",
    "stock_passes": "",
    "reserve_size": "20",
    "pyramid_rows": "7",
}

MAX_DRAW_COUNT = 3
MAX_RESERVE_SIZE = 40
MAX_PYRAMID_ROWS = 7


def _clamp_int(raw, default, low, high):
    try:
        value = int(raw)
    except Exception:
        value = int(default)
    if value < low:
        value = low
    if value > high:
        value = high
    return value


def _optional_int(raw, low=None):
    text = str(raw).strip()
    if text in ("", "None", "none", "unlimited"):
        return None
    try:
        value = int(text)
    except Exception:
        return None
    if low is not None and value < low:
        return None
    return value


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: v for k, v in settings.items() if k in DEFAULT_SETTINGS})

    variant = str(data["variant"]).strip().lower()
    if variant not in VARIANTS:
        variant = DEFAULT_SETTINGS["variant"]
    data["variant"] = variant

    seed = _optional_int(data["seed"])
    data["seed"] = "" if seed is None else str(seed)

    year = _optional_int(data["year"], low=0)
    data["year"] = "" if year is None or year > 9999 else str(year)

    data["draw_count"] = str(_clamp_int(data["draw_count"], DEFAULT_SETTINGS["draw_count"], 1, MAX_DRAW_COUNT))

    passes = _optional_int(data["stock_passes"], low=0)
    data["stock_passes"] = "" if passes is None else str(passes)

    data["reserve_size"] = str(_clamp_int(data["reserve_size"], DEFAULT_SETTINGS["reserve_size"], 0, MAX_RESERVE_SIZE))
    data["pyramid_rows"] = str(_clamp_int(data["pyramid_rows"], DEFAULT_SETTINGS["pyramid_rows"], 1, MAX_PYRAMID_ROWS))
    return data


def load_settings():
    parser = configparser.ConfigParser()
    if not SETTINGS_PATH.exists():
        return dict(DEFAULT_SETTINGS)
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except Exception:
        return dict(DEFAULT_SETTINGS)
    if "game" not in parser:
        return dict(DEFAULT_SETTINGS)
    raw = {key: parser["game"].get(key, default) for key, default in DEFAULT_SETTINGS.items()}
    return _sanitize(raw)


def save_settings(settings):
    data = _sanitize(settings)
    parser = configparser.ConfigParser()
    parser["game"] = data
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as f:
        parser.write(f)


def to_game_config(settings) -> GameConfig:
    data = _sanitize(settings)
    return GameConfig(
        variant=data["variant"],
        seed=_optional_int(data["seed"]),
        year=_optional_int(data["year"]),
        drawCount=int(data["draw_count"]),
        stockPasses=_optional_int(data["stock_passes"]),
        reserveSize=int(data["reserve_size"]),
        pyramidRows=int(data["pyramid_rows"]),
    )
