# passgauge/gui.py
# Password strength window: backend selector, password field, strength bar, timing label

import sys
import logging
from functools import partial

from PySide6 import QtAsyncio
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import (
    QApplication, QWidget, QHBoxLayout, QVBoxLayout, QLabel, QLineEdit,
    QPushButton, QButtonGroup, QProgressBar
)

from passgauge.backends import BackendChoice
from passgauge.config import load_config, configure_logging
from passgauge.dispatcher import StrengthDispatcher
from passgauge.pipeline import StrengthPipeline
from passgauge.strength import EvaluationResult
from passgauge.view import render_view

logger = logging.getLogger(__name__)

# ---------------- UI building helpers ----------------

def make_backend_row(labels):
    box = QWidget()
    layout = QHBoxLayout()
    layout.setSpacing(0)
    box.setLayout(layout)

    group = QButtonGroup(box)
    group.setExclusive(True)
    buttons = {}
    for index, (choice, label) in enumerate(zip(BackendChoice, labels)):
        btn = QPushButton(label)
        btn.setCheckable(True)
        group.addButton(btn, index)
        layout.addWidget(btn)
        buttons[choice] = btn

    return {"widget": box, "group": group, "buttons": buttons}


def make_evaluator_group():
    box = QWidget()
    layout = QVBoxLayout()
    box.setLayout(layout)

    row = QHBoxLayout()
    input_pw = QLineEdit()
    input_pw.setPlaceholderText("Enter password")
    input_pw.setEchoMode(QLineEdit.Password)
    btn_visibility = QPushButton("Show")
    btn_visibility.setCheckable(True)
    row.addWidget(input_pw, 1)
    row.addWidget(btn_visibility)

    bar = QProgressBar()
    bar.setRange(0, 100)
    bar.setTextVisible(True)
    lbl_timing = QLabel("Calculation time: 0 ms")

    layout.addLayout(row)
    layout.addWidget(bar)
    layout.addWidget(lbl_timing)

    return {
        "widget": box,
        "input_pw": input_pw,
        "btn_visibility": btn_visibility,
        "bar": bar,
        "lbl_timing": lbl_timing,
    }


class PasswordStrengthGUI(QWidget):
    def __init__(self, pipeline: StrengthPipeline):
        super().__init__()
        self.setWindowTitle("Password Strength")
        self.setMinimumSize(480, 200)
        self.pipeline = pipeline
        self.show_password = False

        main = QVBoxLayout()
        self.setLayout(main)

        initial = render_view(pipeline.password, self.show_password, pipeline.result, pipeline.selected)
        backends = make_backend_row(initial.backend_labels)
        evalg = make_evaluator_group()
        main.addWidget(backends["widget"])
        main.addWidget(evalg["widget"])
        main.addStretch(1)

        for choice, btn in backends["buttons"].items():
            btn.clicked.connect(partial(self.on_backend_selected, choice))
        evalg["input_pw"].textChanged.connect(self.on_password_changed)
        evalg["btn_visibility"].toggled.connect(self.on_visibility_toggled)
        pipeline.on_result(self.on_result)

        self.backends = backends
        self.evalg = evalg
        self.refresh()

    # ----------------- events -----------------
    def on_backend_selected(self, choice: BackendChoice, checked: bool = True):
        self.pipeline.select_backend(choice)
        self.refresh()

    def on_password_changed(self, text: str):
        self.pipeline.submit(text)
        self.refresh()

    def on_visibility_toggled(self, checked: bool):
        self.show_password = checked
        self.refresh()

    def on_result(self, result: EvaluationResult):
        self.refresh()

    # ----------------- rendering -----------------
    def refresh(self):
        view = render_view(self.pipeline.password, self.show_password,
                           self.pipeline.result, self.pipeline.selected)
        self.backends["group"].button(view.selected_index).setChecked(True)
        btn = self.evalg["btn_visibility"]
        btn.setText(view.visibility_action)
        btn.setIcon(QIcon.fromTheme(view.visibility_icon))
        btn.setToolTip(view.visibility_tooltip)
        btn.setEnabled(view.visibility_enabled or not view.masked)
        self.evalg["input_pw"].setEchoMode(QLineEdit.Password if view.masked else QLineEdit.Normal)
        bar = self.evalg["bar"]
        bar.setValue(view.progress_percent)
        bar.setFormat(view.strength_label)
        self.evalg["lbl_timing"].setText(view.timing_label)


def main():
    cfg = load_config()
    configure_logging(cfg.get("log_level", "INFO"))

    app = QApplication(sys.argv)
    dispatcher = StrengthDispatcher.from_config(cfg)
    pipeline = StrengthPipeline(dispatcher, debounce=float(cfg.get("debounce_ms", 500)) / 1000.0)
    app.aboutToQuit.connect(pipeline.close)

    gui = PasswordStrengthGUI(pipeline)
    gui.show()
    logger.info("Started with %s backend", dispatcher.selected.label)
    QtAsyncio.run(handle_sigint=True)


if __name__ == "__main__":
    main()
