import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from live_search.settings_models import SettingsPaths
from live_search.settings_store import load_settings
from live_search.ui.live_search_window import LiveSearchWindow


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Live incremental search across open files.")
    parser.add_argument("files", nargs="*", help="Files to open as editor tabs.")
    parser.add_argument(
        "--settings",
        default=str(SettingsPaths.default().settings_file),
        help="Path to the JSON settings file.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...).")
    return parser.parse_known_args(argv)[0]


if __name__ == "__main__":
    args = _parse_args(sys.argv[1:])
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings(Path(args.settings))
    app = QApplication([sys.argv[0]])
    app.setStyle("Fusion")
    app.setApplicationName(LiveSearchWindow.APP_NAME)

    window = LiveSearchWindow(settings=settings)
    for path in args.files:
        window.open_file(path)
    if not window.editors():
        window.new_scratch()
    window.show()
    sys.exit(app.exec())
