"""Entry point — glues pystray (daemon thread) with tkinter (main thread)."""

import logging
import threading

from calendar_window import CalendarWindow
from icon_gen import create_icon_image
from settings import load_settings
from tray_icon import create_tray

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(log_level: str = "INFO") -> None:
    """Install a single stream handler on the root logger."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def main() -> None:
    settings = load_settings()
    setup_logging(settings["log_level"])

    cal_win = CalendarWindow()

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    def on_settings() -> None:
        cal_win.root.after(0, cal_win.open_settings)

    def on_reset() -> None:
        cal_win.root.after(0, cal_win.reset_ranges)

    icon_image = create_icon_image(settings["colors"])
    tray = create_tray(icon_image, on_show, on_exit,
                       on_settings=on_settings, on_reset=on_reset)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()
    logger.info("Range calendar started")

    cal_win.show()
    cal_win.root.mainloop()


if __name__ == "__main__":
    main()
