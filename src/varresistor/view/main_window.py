"""
Main window of the experiment: bar view, V(x) graph and the control panel.
Holds no simulation logic; it calls ExperimentSession and draws `render` frames.
"""
from __future__ import annotations

import logging

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import Qt, QTimer, Slot
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QGroupBox, QLabel,
    QSlider, QPushButton, QCheckBox, QComboBox, QTableWidget, QTableWidgetItem, QHeaderView,
)

from varresistor.config import PRESETS, NoiseMode, get_preset
from varresistor.model.state import ExperimentSession
from varresistor.utils import fmt_num
from varresistor.view.render import Frame, render

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Variable-Area Resistor"
FRAME_INTERVAL_MS = 33
SLIDER_STEPS = 1000

PROBE_COLOR = (255, 220, 120)
SCATTER_COLOR = (255, 180, 120, 190)
IDEAL_COLOR = (70, 200, 255)
PROFILE_COLOR = (60, 120, 255)


class ValueSlider(QWidget):
    """Horizontal float slider with a caption and a value pill."""

    def __init__(self, label: str, low: float, high: float, value: float, fmt, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.low = low
        self.high = high
        self._fmt = fmt

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        row = QHBoxLayout()
        row.addWidget(QLabel(label, self))
        self.value_label = QLabel(self)
        row.addStretch()
        row.addWidget(self.value_label)
        layout.addLayout(row)

        self.slider = QSlider(Qt.Orientation.Horizontal, self)
        self.slider.setRange(0, SLIDER_STEPS)
        layout.addWidget(self.slider)
        self.slider.valueChanged.connect(self._update_label)
        self.set_value(value)

    def set_range(self, low: float, high: float, value: float) -> None:
        self.low = low
        self.high = high
        self.set_value(value)

    def value(self) -> float:
        return self.low + (self.high - self.low) * self.slider.value() / SLIDER_STEPS

    def set_value(self, value: float) -> None:
        span = self.high - self.low
        pos = 0 if span <= 0 else round((value - self.low) / span * SLIDER_STEPS)
        self.slider.setValue(int(np.clip(pos, 0, SLIDER_STEPS)))
        self._update_label()

    def _update_label(self, *_) -> None:
        self.value_label.setText(self._fmt(self.value()))


class MainWindow(QMainWindow):
    def __init__(self, session: ExperimentSession | None = None) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        self.session = session or ExperimentSession()
        self._syncing = False

        central = QWidget(self)
        root = QHBoxLayout(central)

        # ---- Plots ----
        plots = QVBoxLayout()
        self.bar_plot = pg.PlotWidget(title="Bar cross-section A(x)")
        self.bar_plot.setLabel("bottom", "x (m)")
        self.bar_plot.hideAxis("left")
        self.bar_plot.setMouseEnabled(x=False, y=False)
        self.bar_curve = self.bar_plot.plot(pen=pg.mkPen(PROFILE_COLOR, width=2))
        self.bar_mirror = self.bar_plot.plot(pen=pg.mkPen(PROFILE_COLOR, width=2))
        self.bar_probe = pg.InfiniteLine(angle=90, pen=pg.mkPen(PROBE_COLOR, width=2))
        self.bar_plot.addItem(self.bar_probe)
        plots.addWidget(self.bar_plot, 1)

        self.graph = pg.PlotWidget(title="Voltage V(x)")
        self.graph.setLabel("bottom", "x (m)")
        self.graph.setLabel("left", "Voltage V (V)")
        self.graph.setMouseEnabled(x=False, y=False)
        self.ideal_curve = self.graph.plot(pen=pg.mkPen(IDEAL_COLOR, width=2))
        self.scatter = pg.ScatterPlotItem(size=8, pen=None, brush=pg.mkBrush(*SCATTER_COLOR))
        self.graph.addItem(self.scatter)
        self.cross_v = pg.InfiniteLine(angle=90, pen=pg.mkPen(PROBE_COLOR))
        self.cross_h = pg.InfiniteLine(angle=0, pen=pg.mkPen(PROBE_COLOR))
        self.graph.addItem(self.cross_v)
        self.graph.addItem(self.cross_h)
        plots.addWidget(self.graph, 2)
        root.addLayout(plots, 1)

        # ---- Control panel ----
        panel = QWidget(central)
        panel.setFixedWidth(340)
        root.addWidget(panel, 0)
        self._build_controls(panel)

        self.setCentralWidget(central)

        # External scheduler for the per-frame redraw
        self.timer = QTimer(self)
        self.timer.setInterval(FRAME_INTERVAL_MS)
        self.timer.timeout.connect(self._tick)
        self.timer.start()

        self._sync_controls()
        self._refresh_table()

    def _build_controls(self, panel: QWidget) -> None:
        layout = QVBoxLayout(panel)

        preset_row = QHBoxLayout()
        preset_row.addWidget(QLabel("Experiment:", panel))
        self.preset_combo = QComboBox(panel)
        for name in PRESETS:
            self.preset_combo.addItem(name, userData=name)
        self.preset_combo.currentIndexChanged.connect(self._on_preset_changed)
        preset_row.addWidget(self.preset_combo, 1)
        layout.addLayout(preset_row)

        cfg = self.session.config
        sliders = QGroupBox("Controls", panel)
        grid = QVBoxLayout(sliders)
        self.i_slider = ValueSlider(
            "Drive Current (A)", *cfg.current_range, self.session.current,
            lambda v: f"{fmt_num(v, 3)} A", sliders,
        )
        self.n_slider = ValueSlider(
            "Noise σ (V)", *cfg.noise_range, self.session.noise_std,
            lambda v: f"{fmt_num(v, 4)} V", sliders,
        )
        self.x_slider = ValueSlider(
            "Probe Position x (m)", 0.0, self.session.profile.length, self.session.probe_x,
            lambda v: f"{fmt_num(v * 1000, 3)} mm", sliders,
        )
        for w in (self.i_slider, self.n_slider, self.x_slider):
            grid.addWidget(w)
        self.i_slider.slider.valueChanged.connect(self._on_sliders_changed)
        self.n_slider.slider.valueChanged.connect(self._on_sliders_changed)
        self.x_slider.slider.valueChanged.connect(self._on_sliders_changed)
        layout.addWidget(sliders)

        buttons = QGridLayout()
        self.new_btn = QPushButton("New Sample", panel)
        self.measure_btn = QPushButton("Add Reading", panel)
        self.scan_btn = QPushButton(f"Auto Scan {cfg.scan_count} pts", panel)
        self.clear_btn = QPushButton("Clear Data", panel)
        buttons.addWidget(self.new_btn, 0, 0)
        buttons.addWidget(self.measure_btn, 0, 1)
        buttons.addWidget(self.scan_btn, 1, 0)
        buttons.addWidget(self.clear_btn, 1, 1)
        self.new_btn.clicked.connect(self._on_new_sample)
        self.measure_btn.clicked.connect(self._on_add_reading)
        self.scan_btn.clicked.connect(self._on_auto_scan)
        self.clear_btn.clicked.connect(self._on_clear)
        layout.addLayout(buttons)

        self.truth_chk = QCheckBox("Reveal A(x)", panel)
        self.ideal_chk = QCheckBox("Show ideal V(x)", panel)
        self.truth_chk.toggled.connect(self._on_toggles_changed)
        self.ideal_chk.toggled.connect(self._on_toggles_changed)
        layout.addWidget(self.truth_chk)
        layout.addWidget(self.ideal_chk)

        self.meter_label = QLabel(panel)
        self.meter_label.setStyleSheet("font-size: 24pt; font-family: monospace;")
        layout.addWidget(QLabel("Voltmeter @ probe", panel))
        layout.addWidget(self.meter_label)

        layout.addWidget(QLabel("<b>Readings</b>", panel))
        self.table = QTableWidget(0, 3, panel)
        self.table.setHorizontalHeaderLabels(["#", "x (m)", "V (V)"])
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        layout.addWidget(self.table, 1)

        self.legend_label = QLabel(panel)
        layout.addWidget(self.legend_label)

    # ------------------------------------------------------------------
    # Control handlers
    # ------------------------------------------------------------------
    def _sync_controls(self) -> None:
        """Push session values into the widgets (after reset / preset switch)."""
        cfg = self.session.config
        self._syncing = True
        self.i_slider.set_range(*cfg.current_range, self.session.current)
        self.n_slider.set_range(*cfg.noise_range, self.session.noise_std)
        self.n_slider.setEnabled(cfg.noise_mode == NoiseMode.SIMPLE)
        self.x_slider.set_range(0.0, self.session.profile.length, self.session.probe_x)
        self.truth_chk.setChecked(self.session.show_truth)
        self.ideal_chk.setChecked(self.session.show_ideal)
        self._syncing = False

    @Slot()
    def _on_sliders_changed(self) -> None:
        if self._syncing:
            return
        self.session.set_current(self.i_slider.value())
        self.session.set_noise_std(self.n_slider.value())
        self.session.set_probe(self.x_slider.value())

    @Slot()
    def _on_toggles_changed(self) -> None:
        if self._syncing:
            return
        self.session.show_truth = self.truth_chk.isChecked()
        self.session.show_ideal = self.ideal_chk.isChecked()

    @Slot()
    def _on_preset_changed(self) -> None:
        name = self.preset_combo.currentData()
        self.session.reset(get_preset(name))
        self._sync_controls()
        self._refresh_table()
        logger.info(f"Switched to preset '{name}'.")

    @Slot()
    def _on_new_sample(self) -> None:
        self.session.regenerate()
        self._refresh_table()

    @Slot()
    def _on_add_reading(self) -> None:
        self.session.add_reading()
        self._refresh_table()

    @Slot()
    def _on_auto_scan(self) -> None:
        self.session.auto_scan()
        self._refresh_table()

    @Slot()
    def _on_clear(self) -> None:
        self.session.clear_readings()
        self._refresh_table()

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    @Slot()
    def _tick(self) -> None:
        frame = render(self.session, reading=self.session.measure_voltage())
        self._draw(frame)

    def _draw(self, frame: Frame) -> None:
        self._draw_bar(frame)
        self.bar_probe.setValue(frame.probe_x)

        if frame.ideal_x is not None:
            self.ideal_curve.setData(frame.ideal_x, frame.ideal_v)
        else:
            self.ideal_curve.setData([], [])
        self.scatter.setData(frame.scatter_x, frame.scatter_v)
        self.graph.setXRange(0.0, frame.length, padding=0.02)
        self.graph.setYRange(0.0, frame.vmax, padding=0)

        self.cross_v.setValue(frame.probe_x)
        if frame.meter_voltage is not None:
            self.cross_h.setValue(frame.meter_voltage)
            self.meter_label.setText(f"{fmt_num(frame.meter_voltage, 4)} V")
        self.legend_label.setText("\n".join(frame.legend))

    def _draw_bar(self, frame: Frame) -> None:
        """Bar outline: mirrored radius for round conductors, area height otherwise."""
        self.bar_plot.setXRange(0.0, frame.length, padding=0.02)
        if not frame.truth_visible:
            self.bar_curve.setData([], [])
            self.bar_mirror.setData([], [])
            return
        if frame.axisymmetric:
            peak = frame.bar_radius.max()
            upper = frame.bar_radius / peak if peak > 0.0 else frame.bar_radius
            self.bar_curve.setData(frame.bar_x, upper)
            self.bar_mirror.setData(frame.bar_x, -upper)
            self.bar_plot.setYRange(-1.05, 1.05, padding=0)
        else:
            self.bar_curve.setData(frame.bar_x, frame.bar_height)
            self.bar_mirror.setData([], [])
            self.bar_plot.setYRange(0.0, 1.05, padding=0)

    def _refresh_table(self) -> None:
        rows = self.session.log.table_rows()
        if not rows:
            rows = [("-", "", "")]
        self.table.setRowCount(len(rows))
        for r, row in enumerate(rows):
            for c, text in enumerate(row):
                self.table.setItem(r, c, QTableWidgetItem(text))
