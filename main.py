import curses
import logging
import os
import sys

from app_state import AppState
from config_paths import LOG_PATH, apply_column_config, ensure_config_dirs, load_config
from default_grid_initializer import DefaultGridInitializer
from file_type_handler import FileTypeHandler

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")
from orchestrator import Orchestrator

try:
    from _version import __version__
except ImportError:
    __version__ = "0.0.0"


USAGE = (
    "cellgrid - terminal spreadsheet grid\n\n"
    "Usage:\n  cellgrid [path.csv|path.json]\n  cellgrid -v\n  cellgrid -h\n\n"
    "Keys:\n"
    "  arrows/hjkl  move focus      Tab  focus first cell\n"
    "  Enter        edit cell       Esc  cancel edit\n"
    "  c            columns panel   < > = resize focused column\n"
    "  Ctrl+S       save            Ctrl+C/Ctrl+X quit\n"
)


def setup_logging(path: str = LOG_PATH, level=logging.INFO):
    logging.basicConfig(
        filename=path,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_state(path, config):
    """AppState from a data file, or the built-in rows when no path is given."""
    init = DefaultGridInitializer(col_width=config["DEFAULT_COL_WIDTH"])
    handler = FileTypeHandler(path) if path else None

    df = handler.load() if handler else None
    if df is None:
        rows = init.create_rows()
        columns = init.create_columns()
    else:
        rows = df
        columns = init.create_columns(list(df.columns))

    apply_column_config(columns, config)
    return AppState(rows, columns, file_path=path, file_handler=handler)


def main():
    args = sys.argv[1:]

    if "-v" in args or "-V" in args:
        print(__version__)
        return

    if "-h" in args or len(args) > 1:
        print(USAGE)
        return

    ensure_config_dirs()
    setup_logging()
    config = load_config()

    path = args[0] if args else None
    try:
        state = build_state(path, config)
    except (OSError, ValueError) as e:
        print(f"Load failed: {e}", file=sys.stderr)
        sys.exit(1)
    logging.getLogger(__name__).info(
        "Loaded %d rows, %d columns from %s", state.row_count, len(state.columns), path or "defaults"
    )

    def curses_main(stdscr):
        Orchestrator(stdscr, state, config).run()

    curses.wrapper(curses_main)


if __name__ == "__main__":
    main()
