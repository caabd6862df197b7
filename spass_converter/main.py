"""
Main entry point for the SPASS Converter GUI.

LEGAL NOTICE:
This tool is for personal use only. It must only be used to convert Samsung
Pass export files that belong to you, on devices you own or administer.
"""

import sys
import os
import signal
from PyQt5.QtWidgets import QApplication
from PyQt5.QtCore import Qt

from spass_converter.ui import ConverterWindow
from spass_converter import config
from spass_converter.utils import setup_logging


class ConverterApp:
    """Main application class for the converter."""

    def __init__(self, argv=None):
        """Initialize the application."""
        self.app = QApplication(argv if argv is not None else sys.argv)
        self.app.setApplicationName(config.APP_NAME)
        self.app.setOrganizationName(config.APP_NAME)
        self.app.setStyle(config.APP_STYLE)

        self.window = ConverterWindow()

        # Handle Ctrl+C gracefully
        signal.signal(signal.SIGINT, signal.SIG_DFL)

    def open_file(self, path: str):
        """Preselect a file passed on the command line."""
        if os.path.isfile(path):
            self.window.set_selected_file(path)

    def run(self) -> int:
        """Run the application."""
        self.window.show()
        return self.app.exec_()


def main():
    """Main entry point."""
    setup_logging()
    # Enable high DPI scaling
    if hasattr(Qt, 'AA_EnableHighDpiScaling'):
        QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)
    if hasattr(Qt, 'AA_UseHighDpiPixmaps'):
        QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps, True)

    app = ConverterApp()
    if len(sys.argv) > 1:
        app.open_file(sys.argv[1])
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
