"""
User interface for the SPASS Converter.

LEGAL NOTICE:
This tool is for personal use only. It must only be used to convert Samsung
Pass export files that belong to you. The converted CSV holds passwords in
plain text; the user is reminded to delete it after importing.
"""

import os
import logging
from typing import Optional
from PyQt5.QtWidgets import (
    QMainWindow, QDialog, QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QLineEdit, QPushButton, QMessageBox, QFileDialog, QGroupBox, QCheckBox,
    QDialogButtonBox, QProgressBar, QTextEdit
)
from PyQt5.QtCore import pyqtSignal, QThread

from .converter import ConversionOptions, ConversionResult, convert, capability_available, is_likely_source_file
from .errors import ConversionError
from .storage import save_csv, default_output_dir, log_action
from . import config

logger = logging.getLogger(__name__)

CAPABILITY_MESSAGE = (
    "AES-CBC decryption is not available on this system. "
    "Please install the cryptography package."
)


class ConversionWorker(QThread):
    """Worker thread for decrypting and converting a SPASS file."""

    progress = pyqtSignal(int, str)
    finished = pyqtSignal(object)
    error = pyqtSignal(str)

    def __init__(self, filepath: str, password: str, include_empty_fields: bool = False):
        super().__init__()
        self.filepath = filepath
        self.password = password
        self.include_empty_fields = include_empty_fields

    def run(self):
        """Run the conversion."""
        try:
            self.progress.emit(0, f"Decrypting {os.path.basename(self.filepath)}...")
            with open(self.filepath, 'rb') as f:
                content = f.read()
            result = convert(content, self.password, ConversionOptions(
                include_empty_fields=self.include_empty_fields
            ))
            self.progress.emit(100, f"Converted {result.record_count} passwords")
            self.finished.emit(result)
        except (ConversionError, OSError) as e:
            self.error.emit(str(e))
        finally:
            self.password = None


class SecurityInfoDialog(QDialog):
    """Explains what happens to the data and to the resulting CSV."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle(f"{config.APP_TITLE_PREFIX} - Security Information")
        self.setModal(True)
        self.setMinimumWidth(config.WINDOW_MIN_WIDTH)

        layout = QVBoxLayout()

        notice = QTextEdit()
        notice.setReadOnly(True)
        notice.setPlainText(config.SECURITY_NOTICE_TEXT)
        layout.addWidget(notice)

        tip = QLabel("Tip: import the passwords directly in your password manager "
                     "and delete the CSV file afterwards.")
        tip.setWordWrap(True)
        layout.addWidget(tip)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok)
        buttons.button(QDialogButtonBox.Ok).setText("Understood")
        buttons.accepted.connect(self.accept)
        layout.addWidget(buttons)

        self.setLayout(layout)


class ConverterWindow(QMainWindow):
    """Main window: pick a .spass file, enter its password, save the CSV."""

    def __init__(self):
        super().__init__()
        self.selected_file: Optional[str] = None
        self.conversion_worker: Optional[ConversionWorker] = None
        self.crypto_available = capability_available()
        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle(config.APP_TITLE_PREFIX)
        self.setMinimumWidth(config.WINDOW_MIN_WIDTH)

        central_widget = QWidget()
        layout = QVBoxLayout()

        # Title row
        header_layout = QHBoxLayout()
        title = QLabel(".SPASS to Chrome CSV")
        font = title.font()
        font.setPointSize(16)
        font.setBold(True)
        title.setFont(font)
        header_layout.addWidget(title)
        header_layout.addStretch()

        self.security_button = QPushButton("Security")
        self.security_button.setToolTip("Security Information")
        self.security_button.clicked.connect(self.show_security_info)
        header_layout.addWidget(self.security_button)
        layout.addLayout(header_layout)

        subtitle = QLabel("Convert Samsung Pass export files (.spass) securely to Chrome format.")
        subtitle.setWordWrap(True)
        layout.addWidget(subtitle)

        # Input
        input_group = QGroupBox("Export File")
        input_layout = QVBoxLayout()

        self.file_button = QPushButton("Select Samsung Pass Export File (.spass)")
        self.file_button.setToolTip("Only Samsung Pass export files (.spass) are accepted")
        self.file_button.clicked.connect(self.select_file)
        input_layout.addWidget(self.file_button)

        self.password_input = QLineEdit()
        self.password_input.setEchoMode(QLineEdit.Password)
        self.password_input.setPlaceholderText("Password used when exporting")
        self.password_input.returnPressed.connect(self.start_conversion)
        input_layout.addWidget(self.password_input)

        self.include_empty_checkbox = QCheckBox("Include records without any values")
        input_layout.addWidget(self.include_empty_checkbox)

        input_group.setLayout(input_layout)
        layout.addWidget(input_group)

        self.convert_button = QPushButton("Convert Securely && Save")
        self.convert_button.clicked.connect(self.start_conversion)
        layout.addWidget(self.convert_button)

        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        layout.addWidget(self.progress_bar)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: red")
        self.error_label.setWordWrap(True)
        layout.addWidget(self.error_label)

        layout.addStretch()
        central_widget.setLayout(layout)
        self.setCentralWidget(central_widget)

        if not self.crypto_available:
            self.convert_button.setEnabled(False)
            self.show_error(CAPABILITY_MESSAGE)

        self.statusBar().showMessage("Ready")

    def show_security_info(self):
        """Show the security information dialog."""
        SecurityInfoDialog(self).exec_()

    def select_file(self):
        """Let the user pick the export file."""
        filename, _ = QFileDialog.getOpenFileName(
            self, "Open Samsung Pass Export", "", config.SPASS_FILE_DIALOG_FILTER
        )
        if filename:
            self.set_selected_file(filename)

    def set_selected_file(self, filename: str):
        self.selected_file = filename
        self.file_button.setText(os.path.basename(filename))
        self.error_label.setText("")
        if not is_likely_source_file(filename):
            self.statusBar().showMessage("Selected file does not have a .spass extension")

    def show_error(self, message: str):
        self.error_label.setText(message)

    def start_conversion(self):
        """Validate input and start the conversion worker."""
        self.error_label.setText("")

        if not self.crypto_available:
            self.show_error(CAPABILITY_MESSAGE)
            return
        if not self.selected_file:
            self.show_error("Please select a Samsung Pass export file (.spass).")
            return
        if not self.password_input.text():
            self.show_error("Please enter the password.")
            return

        self.convert_button.setEnabled(False)
        self.show_progress("Converting...")

        self.conversion_worker = ConversionWorker(
            self.selected_file,
            self.password_input.text(),
            self.include_empty_checkbox.isChecked()
        )
        self.conversion_worker.progress.connect(self.update_progress)
        self.conversion_worker.finished.connect(self._handle_conversion_finished)
        self.conversion_worker.error.connect(self._handle_conversion_error)
        self.conversion_worker.start()

    def _handle_conversion_finished(self, result: ConversionResult):
        """Ask where to save and write the CSV."""
        self.hide_progress()
        self.convert_button.setEnabled(True)
        self.password_input.clear()

        # Warn before writing plaintext passwords
        reply = QMessageBox.warning(
            self, "Export Warning",
            f"{result.record_count} passwords were decrypted.\n\n"
            "They will be saved in PLAIN TEXT.\n"
            "Anyone with access to this file can see all passwords.\n\n"
            "Do you want to save the CSV file?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.Yes
        )
        if reply != QMessageBox.Yes:
            return

        filename, _ = QFileDialog.getSaveFileName(
            self, "Save Chrome CSV",
            os.path.join(default_output_dir(), result.suggested_filename),
            config.CSV_FILE_DIALOG_FILTER
        )
        if not filename:
            return

        try:
            saved_path = save_csv(result.text, filename)
        except OSError as e:
            QMessageBox.critical(self, "Save Error", f"Failed to save CSV: {e}")
            return

        self.statusBar().showMessage(f"Saved {result.record_count} passwords")
        QMessageBox.information(
            self, "Conversion Complete",
            f"Successfully converted {result.record_count} passwords to {saved_path}\n\n"
            "Remember to delete this file after use!"
        )
        self._log_action("SPASS_CONVERT", f"Converted {result.record_count} entries to {saved_path}")

    def _handle_conversion_error(self, error: str):
        """Handle conversion error."""
        self.hide_progress()
        self.convert_button.setEnabled(self.crypto_available)
        self.show_error(error)
        self._log_action("SPASS_CONVERT_FAILED", os.path.basename(self.selected_file or ""))

    def _log_action(self, action: str, details: str):
        """Write an audit line; a read-only home must not take the window down."""
        try:
            log_action(action, details)
        except OSError as e:
            logger.error(f"Could not write audit log entry {action}: {e}")

    def show_progress(self, message: str):
        """Show progress bar with message."""
        self.progress_bar.setRange(0, 0)
        self.progress_bar.setVisible(True)
        self.statusBar().showMessage(message)

    def update_progress(self, value: int, message: str):
        """Update progress bar value and message."""
        if value >= 100:
            self.progress_bar.setRange(0, 100)
            self.progress_bar.setValue(value)
        self.statusBar().showMessage(message)

    def hide_progress(self):
        """Hide progress bar and clear message."""
        self.progress_bar.setVisible(False)
        self.statusBar().clearMessage()
        self.statusBar().showMessage("Ready")

    def closeEvent(self, event):
        """Handle window close event."""
        if self.conversion_worker is not None and self.conversion_worker.isRunning():
            self.conversion_worker.wait()
        self.password_input.clear()
        event.accept()
