import json
import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "cellgrid")
LOG_PATH = os.path.join(CONFIG_DIR, "cellgrid.log")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
DEFAULT_COL_WIDTH_DEFAULT = 20
MIN_COL_WIDTH_DEFAULT = 4
MAX_COL_WIDTH_DEFAULT = 60
EDIT_PREFILL_DEFAULT = False


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def _positive_int(value):
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def load_config():
    cfg = {
        "DEFAULT_COL_WIDTH": DEFAULT_COL_WIDTH_DEFAULT,
        "MIN_COL_WIDTH": MIN_COL_WIDTH_DEFAULT,
        "MAX_COL_WIDTH": MAX_COL_WIDTH_DEFAULT,
        "COLUMN_WIDTHS": {},
        "HIDDEN_COLUMNS": [],
        "EDIT_PREFILL": EDIT_PREFILL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return cfg
    if not isinstance(data, dict):
        return cfg

    grid = data.get("grid")
    if isinstance(grid, dict):
        for key, cfg_key in (
            ("default_col_width", "DEFAULT_COL_WIDTH"),
            ("min_col_width", "MIN_COL_WIDTH"),
            ("max_col_width", "MAX_COL_WIDTH"),
        ):
            val = _positive_int(grid.get(key))
            if val is not None:
                cfg[cfg_key] = val
        if cfg["MIN_COL_WIDTH"] > cfg["MAX_COL_WIDTH"]:
            cfg["MIN_COL_WIDTH"] = MIN_COL_WIDTH_DEFAULT
            cfg["MAX_COL_WIDTH"] = MAX_COL_WIDTH_DEFAULT

        widths = grid.get("column_widths")
        if isinstance(widths, dict):
            for name, width in widths.items():
                width = _positive_int(width)
                if isinstance(name, str) and width is not None:
                    cfg["COLUMN_WIDTHS"][name] = width

        hidden = grid.get("hidden_columns")
        if isinstance(hidden, list):
            cfg["HIDDEN_COLUMNS"] = [str(item) for item in hidden if isinstance(item, str)]

    edit = data.get("edit")
    if isinstance(edit, dict) and isinstance(edit.get("prefill"), bool):
        cfg["EDIT_PREFILL"] = edit["prefill"]

    return cfg


def apply_column_config(schema, cfg):
    """Set initial widths and visibility on a fresh schema."""
    lo, hi = cfg["MIN_COL_WIDTH"], cfg["MAX_COL_WIDTH"]
    hidden = set(cfg.get("HIDDEN_COLUMNS", []))
    for col in schema:
        width = cfg["COLUMN_WIDTHS"].get(col.id, col.width)
        col.width = max(lo, min(hi, width))
        if col.id in hidden:
            col.visible = False
    return schema
