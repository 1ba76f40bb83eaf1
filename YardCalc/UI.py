# UI.py
""""PySide6 user interface for YardCalc.

Structure
---------
- Calculator UI: main window with display, button grid and tree panel
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Handle user input and maintain undo/redo
- Dispatch the expression to MathEngine in a worker thread
- Render results, show MathEngine errors as dialogs
- Show the postfix sequence / tree dump when enabled in the settings
- Clipboard integration (Shift + copy copies the tree dump instead of the display)


Threading Note
--------------
Evaluation is executed off the UI thread in Worker(QObject).
Results (or errors) are emitted via a Qt signal and handled back in the UI.
"""""

import sys
import threading
import logging

from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, QObject, Signal, QTimer
from pynput.keyboard import Controller
import pyperclip

from . import error as E
from . import config_manager as config_manager
from . import MathEngine as MathEngine

logger = logging.getLogger(__name__)

ENTER = '⏎'
COPY = '⎘'
UNDO = '↶'
REDO = '↷'
SETTINGS = '⚙'

# (text, row, column)
BUTTONS = [
    (SETTINGS, 0, 0), (COPY, 0, 1), (UNDO, 0, 2), (REDO, 0, 3), ('<', 0, 4),
    ('(', 1, 0), (')', 1, 1), ('~', 1, 2), ('^', 1, 3), ('/', 1, 4),
    ('7', 2, 0), ('8', 2, 1), ('9', 2, 2), ('*', 2, 3), ('%', 2, 4),
    ('4', 3, 0), ('5', 3, 1), ('6', 3, 2), ('-', 3, 3), ('|', 3, 4),
    ('1', 4, 0), ('2', 4, 1), ('3', 4, 2), ('+', 4, 3), ('&', 4, 4),
    ('C', 5, 0), ('0', 5, 1), ('.', 5, 2), ('Ans', 5, 3), (ENTER, 5, 4),
]

# Buttons that support "press and hold"
HOLD_BUTTONS = ['0', '1', '2', '3', '4', '5', '6', '7', '8', '9', UNDO, REDO, '<']


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used for "shift + copy copies the tree dump".

    """""

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


class Worker(QObject):
    """""

    Runs in a separate thread, transmits the problem to MathEngine.py and emits
    a Signal with the Calculation (or the MathError) back to the Calculator UI.

    """""

    job_finished = Signal(object, str)

    def __init__(self, problem):
        super().__init__()
        self.data = problem

    def run_Calc(self):

        try:
            result = MathEngine.calculate(self.data)
            self.job_finished.emit(result, self.data)

        except E.MathError as e:
            # Known, handled error (e.g. "Mismatched parenthesis")
            self.job_finished.emit(e, self.data)

        except Exception as e:
            # Unexpected crash we didn't plan for (e.g. a bug in the code)
            logger.exception("Worker crashed on %r", self.data)
            critical_error = E.MathError(
                message=f"Unexpected crash: {e}",
                code="9999",
                equation=self.data
            )
            self.job_finished.emit(critical_error, self.data)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Every setting is a boolean and shown as a checkbox, with
    the description from ui_strings.json.

    """""

    settings_saved = Signal()  # Signal to tell the main window to update

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(320, 180)
        main_layout = QtWidgets.QVBoxLayout(self)

        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        for key_value, value in self.setting_value_list.items():
            if not isinstance(value, bool):
                continue
            description = self.setting_description_list.get(key_value, key_value)
            checkbox = QtWidgets.QCheckBox(description)
            checkbox.setChecked(value)
            main_layout.addWidget(checkbox)
            self.widgets[key_value] = checkbox  # Store widget for later saving

        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self):
        for key_value, widget in self.widgets.items():
            self.setting_value_list[key_value] = widget.isChecked()

        saved_settings = config_manager.save_setting(self.setting_value_list)

        if saved_settings != {}:
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           f"Error 4501: {E.ERROR_MESSAGES['4501']}config.json")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"]:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QCheckBox {color: white;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):
    initial_delay = 500
    repeat_interval = 100

    def __init__(self):
        super().__init__()

        self.setting_value_list = config_manager.load_setting_value("all")

        # --- Instance State ---
        self.calculator_result = ""  # Last result, used by 'Ans'
        self.last_dump = ""
        self.display_text = "0"
        self.thread_active = False
        self.undo = ["0"]
        self.redo = []
        self.was_held = False
        self.held_button_value = None
        self.hold_timer = QTimer(self)
        self.hold_timer.timeout.connect(self.handle_hold_tick)
        self.button_objects = {}

        # --- Window Setup ---
        self.setWindowTitle("YardCalc")
        self.resize(420, 560)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- Display ---
        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        font = self.display.font()
        font.setPointSize(28)
        self.display.setFont(font)
        main_v_layout.addWidget(self.display)

        # --- Postfix / tree panel ---
        self.tree_panel = QtWidgets.QPlainTextEdit()
        self.tree_panel.setReadOnly(True)
        self.tree_panel.setFont(QtGui.QFontDatabase.systemFont(QtGui.QFontDatabase.SystemFont.FixedFont))
        main_v_layout.addWidget(self.tree_panel, 1)

        # --- Button Grid ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 3)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        for text, row, col in BUTTONS:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)

            if text == SETTINGS:
                button.clicked.connect(self.open_settings)
            elif text in HOLD_BUTTONS:
                button.pressed.connect(lambda val=text: self.handle_button_pressed_hold(val))
                button.released.connect(self.handle_button_released_hold)
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_clicked_hold(val))
            else:
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))

            button_grid.addWidget(button, row, col)
            self.button_objects[text] = button

        self.apply_settings()

    # --- Button Hold Logic ---
    def handle_button_pressed_hold(self, value):
        self.was_held = False
        self.held_button_value = value
        self.hold_timer.setInterval(self.initial_delay)
        self.hold_timer.start()

    def handle_button_released_hold(self):
        self.hold_timer.stop()
        self.held_button_value = None

    def handle_button_clicked_hold(self, value):
        # A click right after a hold was already handled by the timer
        if not self.was_held:
            self.handle_button_press(value)

    def handle_hold_tick(self):
        self.was_held = True
        if self.hold_timer.interval() == self.initial_delay:
            self.hold_timer.setInterval(self.repeat_interval)
        if self.held_button_value:
            self.handle_button_press(self.held_button_value)

    # --- Input Handling ---
    def handle_button_press(self, value):
        if value == ENTER:
            self.start_calculation()
            return

        if value == COPY:
            if is_shift_pressed():
                pyperclip.copy(self.last_dump)
            else:
                pyperclip.copy(self.display.text())
            return

        if value == UNDO:
            if len(self.undo) > 1:
                self.redo.append(self.undo.pop())
                self.display_text = self.undo[-1]
        elif value == REDO:
            if self.redo:
                self.undo.append(self.redo.pop())
                self.display_text = self.undo[-1]
        elif value == "<":
            self.display_text = self.display_text[:-1] or "0"
        elif value == "C":
            self.display_text = "0"
        elif value == "Ans":
            if self.calculator_result:
                self.append_text(self.calculator_result)
        else:
            self.append_text(value)

        if value not in (UNDO, REDO) and self.display_text != self.undo[-1]:
            self.undo.append(self.display_text)
            self.redo.clear()

        self.display.setText(self.display_text)

    def append_text(self, text):
        if self.display_text.startswith("= "):
            # An operator continues from the last result, anything else starts over
            self.display_text = self.calculator_result if text in "+*/%^|&" else ""
        elif self.display_text == "0":
            self.display_text = ""
        self.display_text += text

    def keyPressEvent(self, event):
        # Typing works like the buttons; Enter/Return calculates
        if event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.handle_button_press(ENTER)
        elif event.key() == Qt.Key.Key_Backspace:
            self.handle_button_press("<")
        elif event.text() and event.text() in "0123456789.+-*/%^|&~()":
            self.handle_button_press(event.text())
        else:
            super().keyPressEvent(event)

    # --- Calculation ---
    def start_calculation(self):
        if self.thread_active:
            logger.warning("Error 4002: %s", E.ERROR_MESSAGES["4002"])
            return

        self.thread_active = True
        self.update_return_button()
        self.display.setText("...")

        worker_instance = Worker(self.display_text)
        # Connect before starting so a fast result is not lost
        worker_instance.job_finished.connect(self.Calc_result)
        self.worker_instance = worker_instance
        my_thread = threading.Thread(target=worker_instance.run_Calc, daemon=True)
        my_thread.start()

    def Calc_result(self, result, equation):
        self.thread_active = False
        self.update_return_button()

        if isinstance(result, E.MathError):
            self.last_dump = result.dump or ""
            self.show_panel("", self.last_dump)
            error_box = QtWidgets.QMessageBox(self)
            error_box.setIcon(QtWidgets.QMessageBox.Critical)
            error_box.setWindowTitle("Calculation error")
            error_box.setText(f"Error {result.code}: {E.ERROR_MESSAGES.get(result.code, 'Unknown error')}")
            error_box.setInformativeText(f"Details: {result.message}\nEquation: {result.equation}")
            error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
            error_box.setStyleSheet(self.get_message_box_stylesheet())
            error_box.exec()
            self.display.setText(equation)
            return

        self.calculator_result = str(result.value)
        self.last_dump = result.dump()
        self.show_panel(result.postfix, self.last_dump)

        self.display_text = f"= {self.calculator_result}"
        self.display.setText(self.display_text)
        if self.display_text != self.undo[-1]:
            self.undo.append(self.display_text)
            self.redo.clear()

    def show_panel(self, postfix, dump):
        parts = []
        if self.setting_value_list["show_postfix"] and postfix:
            parts.append(f"Postfix: {postfix}")
        if self.setting_value_list["dump_tree"] and dump:
            parts.append(dump)
        self.tree_panel.setPlainText("\n\n".join(parts))

    # --- Appearance / Settings ---
    def update_return_button(self):
        return_button = self.button_objects.get(ENTER)
        if not return_button:
            return
        if self.thread_active:
            return_button.setStyleSheet("background-color: #FF0000; color: white; font-weight: bold;")
            return_button.setText("X")
        else:
            return_button.setStyleSheet("background-color: #007bff; color: white; font-weight: bold;")
            return_button.setText(ENTER)

    def apply_settings(self):
        show_panel = self.setting_value_list["dump_tree"] or self.setting_value_list["show_postfix"]
        self.tree_panel.setVisible(bool(show_panel))

        if self.setting_value_list["darkmode"]:
            for text, button in self.button_objects.items():
                if text != ENTER:
                    button.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.setStyleSheet("background-color: #121212;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.tree_panel.setStyleSheet("background-color: #1e1e1e; color: white;")
        else:
            for text, button in self.button_objects.items():
                if text != ENTER:
                    button.setStyleSheet("font-weight: normal;")
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")
            self.tree_panel.setStyleSheet("")
        self.update_return_button()

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # modal

        # Reload settings after the dialog closes
        self.setting_value_list = config_manager.load_setting_value("all")
        self.apply_settings()

    def get_message_box_stylesheet(self):
        if self.setting_value_list["darkmode"]:
            return """
                QMessageBox { background-color: #121212; color: white; }
                QLabel { color: white; }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
            """
        return ""


def main():
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    return app.exec()
