"""
Control UI Module for the Sum to 10 Solver

Provides a PyQt5 window for entering a grid, running the solver and
stepping through the resulting moves.
"""

import json
import logging
from typing import List, Optional

from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QPushButton, QHBoxLayout,
    QComboBox, QSpinBox, QTableWidget, QTableWidgetItem, QApplication,
    QHeaderView, QAbstractItemView, QScrollArea, QShortcut
)
from PyQt5.QtCore import Qt, QEvent, pyqtSignal
from PyQt5.QtGui import QColor, QFont, QKeySequence

from .grid_io import GridValidationError, create_empty_grid, grid_to_json, parse_grid
from .solver import Grid, Solution, get_strategy_info
from .solver.solution import describe

logger = logging.getLogger(__name__)

# Editor size limits
MAX_COLS = 12
MAX_ROWS = 20

HIGHLIGHT_COLOR = QColor("#ffcc80")
EMPTY_COLOR = QColor("#e0e0e0")
TILE_COLOR = QColor("#ffffff")


class ControlWindow(QMainWindow):
    """
    Main window: grid editor, solver controls and solution viewer.

    The window owns the edited grid and the solution being viewed; the
    solve itself runs elsewhere (see SolverWorker) and is requested via
    solve_requested.
    """

    # Signals for application communication
    solve_requested = pyqtSignal(object)  # Emits validated Grid
    strategy_changed = pyqtSignal(str)  # Emits strategy name when changed
    size_changed = pyqtSignal(int, int)  # (rows, cols) of a newly created grid
    shutdown_requested = pyqtSignal()

    def __init__(self, rows: int = 14, cols: int = 8):
        super().__init__()
        self._grid: List[List[int]] = create_empty_grid(rows, cols)
        self._solution: Optional[Solution] = None
        self._current_step = 0
        self._is_solving = False
        self._init_ui()
        self._refresh_table()

    def _init_ui(self):
        """Initialize the user interface components."""
        self.setWindowTitle("Sum to 10 Solver")
        self.resize(560, 760)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout()
        layout.setSpacing(8)
        layout.setContentsMargins(16, 16, 16, 16)
        central_widget.setLayout(layout)

        # Status label
        self.status_label = QLabel("Status: Enter a grid")
        status_font = QFont()
        status_font.setPointSize(10)
        status_font.setBold(True)
        self.status_label.setFont(status_font)
        layout.addWidget(self.status_label)

        # Grid configuration
        config_layout = QHBoxLayout()
        config_layout.addWidget(QLabel("Width:"))
        self.width_spin = QSpinBox()
        self.width_spin.setRange(1, MAX_COLS)
        self.width_spin.setValue(len(self._grid[0]) if self._grid else 1)
        config_layout.addWidget(self.width_spin)

        config_layout.addWidget(QLabel("Height:"))
        self.height_spin = QSpinBox()
        self.height_spin.setRange(1, MAX_ROWS)
        self.height_spin.setValue(len(self._grid))
        config_layout.addWidget(self.height_spin)

        self.create_button = QPushButton("Create Grid")
        self.create_button.clicked.connect(self._on_create_clicked)
        config_layout.addWidget(self.create_button)

        self.import_button = QPushButton("Import")
        self.import_button.clicked.connect(self._on_import_clicked)
        config_layout.addWidget(self.import_button)

        self.export_button = QPushButton("Export")
        self.export_button.clicked.connect(self._on_export_clicked)
        config_layout.addWidget(self.export_button)
        layout.addLayout(config_layout)

        # Strategy selector
        strategy_layout = QHBoxLayout()
        strategy_layout.addWidget(QLabel("Strategy:"))
        self.strategy_combo = QComboBox()
        for info in get_strategy_info():
            self.strategy_combo.addItem(info["description"], info["name"])
        self.strategy_combo.currentIndexChanged.connect(self._on_strategy_changed)
        strategy_layout.addWidget(self.strategy_combo, 1)  # stretch factor 1
        layout.addLayout(strategy_layout)

        # Grid editor
        self.table = QTableWidget()
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.verticalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.cellChanged.connect(self._on_cell_changed)
        layout.addWidget(self.table, 1)

        # Solve / reset
        action_layout = QHBoxLayout()
        self.solve_button = QPushButton("SOLVE")
        self.solve_button.setMinimumHeight(40)
        button_font = QFont()
        button_font.setPointSize(11)
        button_font.setBold(True)
        self.solve_button.setFont(button_font)
        self.solve_button.clicked.connect(self._on_solve_clicked)
        action_layout.addWidget(self.solve_button, 2)

        self.reset_button = QPushButton("Reset")
        self.reset_button.setMinimumHeight(40)
        self.reset_button.clicked.connect(self.clear_solution)
        action_layout.addWidget(self.reset_button, 1)
        layout.addLayout(action_layout)

        # Solution summary and step details
        info_font = QFont()
        info_font.setPointSize(9)
        self.summary_label = QLabel("Solution: --")
        self.step_label = QLabel("Step:  --")
        self.cells_label = QLabel("")
        self.cells_label.setWordWrap(True)
        self.sum_label = QLabel("")
        for label in [self.summary_label, self.step_label, self.cells_label, self.sum_label]:
            label.setFont(info_font)
            layout.addWidget(label)

        # Step navigation
        nav_layout = QHBoxLayout()
        self.initial_button = QPushButton("Initial")
        self.initial_button.clicked.connect(lambda: self.go_to_step(0))
        self.prev_button = QPushButton("< Prev")
        self.prev_button.clicked.connect(self.prev_step)
        self.next_button = QPushButton("Next >")
        self.next_button.clicked.connect(self.next_step)
        for button in [self.initial_button, self.prev_button, self.next_button]:
            nav_layout.addWidget(button)
        layout.addLayout(nav_layout)

        # One button per step, filled in by show_solution()
        self.step_buttons: List[QPushButton] = []
        self.step_buttons_widget = QWidget()
        self.step_buttons_layout = QHBoxLayout()
        self.step_buttons_layout.setContentsMargins(0, 0, 0, 0)
        self.step_buttons_layout.addStretch(1)
        self.step_buttons_widget.setLayout(self.step_buttons_layout)
        self.step_scroll = QScrollArea()
        self.step_scroll.setWidgetResizable(True)
        self.step_scroll.setFixedHeight(52)
        self.step_scroll.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.step_scroll.setWidget(self.step_buttons_widget)
        layout.addWidget(self.step_scroll)

        # Left/Right step through a solution whichever child has focus
        self.next_shortcut = QShortcut(QKeySequence(Qt.Key_Right), self, self.next_step)
        self.prev_shortcut = QShortcut(QKeySequence(Qt.Key_Left), self, self.prev_step)
        for shortcut in [self.next_shortcut, self.prev_shortcut]:
            shortcut.setContext(Qt.WindowShortcut)
        # The table handles arrow keys itself when it has focus
        self.table.installEventFilter(self)

        self._apply_styles()
        self._update_controls()

    def _apply_styles(self):
        """Apply clean, minimal styling to the window."""
        style = """
            QMainWindow {
                background-color: #f5f5f5;
            }
            QPushButton {
                background-color: #4CAF50;
                color: white;
                border: none;
                border-radius: 5px;
                padding: 6px 10px;
            }
            QPushButton:hover {
                background-color: #45a049;
            }
            QPushButton:disabled {
                background-color: #cccccc;
                color: #666666;
            }
            QLabel {
                color: #333333;
            }
        """
        self.setStyleSheet(style)

    # ---- grid editing -------------------------------------------------

    def set_grid(self, grid: List[List[int]]):
        """
        Replace the edited grid and drop any solution.

        Args:
            grid: Rectangular matrix of digits 0-9
        """
        self._grid = [list(row) for row in grid]
        self.height_spin.setValue(max(1, len(self._grid)))
        self.width_spin.setValue(max(1, len(self._grid[0]) if self._grid else 1))
        self.clear_solution()

    def _on_create_clicked(self):
        rows, cols = self.height_spin.value(), self.width_spin.value()
        logger.info(f"Creating {rows}x{cols} grid")
        self.set_grid(create_empty_grid(rows, cols))
        self.size_changed.emit(rows, cols)
        self.table.setCurrentCell(0, 0)
        self.set_status("Enter a grid")

    def _on_cell_changed(self, row: int, col: int):
        """Validate an edited cell; advance to the next cell on success."""
        item = self.table.item(row, col)
        text = item.text().strip() if item else ""
        if text == "":
            value = 0
        elif text.isdigit() and len(text) == 1:
            value = int(text)
        else:
            self.set_status(f"Error: '{text}' is not a digit 0-9")
            self._refresh_table()
            return

        self._grid[row][col] = value
        if self._solution is not None:
            self.clear_solution()
        else:
            self._refresh_table()
        self._focus_next_cell(row, col)

    def _focus_next_cell(self, row: int, col: int):
        """Move to the next column, wrapping to the start of the next row."""
        cols = len(self._grid[0]) if self._grid else 0
        if col + 1 < cols:
            self.table.setCurrentCell(row, col + 1)
        elif row + 1 < len(self._grid):
            self.table.setCurrentCell(row + 1, 0)

    def _on_import_clicked(self):
        """Load a grid from JSON on the clipboard."""
        text = QApplication.clipboard().text()
        try:
            parsed = parse_grid(json.loads(text))
        except (json.JSONDecodeError, GridValidationError) as e:
            logger.warning(f"Import failed: {e}")
            self.set_status("Error: clipboard does not hold a valid grid")
            return
        if parsed.rows == 0 or parsed.cols == 0:
            self.set_status("Error: imported grid is empty")
            return
        if parsed.rows > MAX_ROWS or parsed.cols > MAX_COLS:
            self.set_status(f"Error: grid larger than {MAX_ROWS}x{MAX_COLS}")
            return
        self.set_grid(parsed.to_list())
        self.set_status(f"Imported {parsed.rows}x{parsed.cols} grid")

    def _on_export_clicked(self):
        """Copy the edited grid to the clipboard as JSON."""
        QApplication.clipboard().setText(grid_to_json(Grid.from_rows(self._grid)))
        self.set_status("Grid copied to clipboard")

    # ---- solving ------------------------------------------------------

    def _on_solve_clicked(self):
        try:
            grid = parse_grid(self._grid)
        except GridValidationError as e:
            self.set_status(f"Error: {e}")
            return
        self.solve_requested.emit(grid)

    def _on_strategy_changed(self, index: int):
        """Handle strategy dropdown selection change."""
        strategy_name = self.strategy_combo.itemData(index)
        if strategy_name:
            self.strategy_changed.emit(strategy_name)

    def select_strategy(self, strategy_name: str) -> bool:
        """
        Select a strategy in the dropdown by name.

        Returns:
            True if the strategy was found
        """
        for i in range(self.strategy_combo.count()):
            if self.strategy_combo.itemData(i) == strategy_name:
                self.strategy_combo.setCurrentIndex(i)
                return True
        return False

    def set_solving(self, is_solving: bool):
        """
        Lock the editor while a solve runs.

        Args:
            is_solving: True while the worker is running
        """
        self._is_solving = is_solving
        if is_solving:
            self.set_status("Solving...")
        self._update_controls()

    def show_solution(self, solution: Solution):
        """
        Display a finished solution, starting at its first step.

        Args:
            solution: Result from the worker
        """
        self._solution = solution
        self._current_step = 0
        self.set_solving(False)
        self.summary_label.setText(f"Solution: {describe(solution)}")
        self.set_status(f"Solved in {solution.metrics.computation_time_ms:.0f}ms "
                        f"({solution.metrics.strategy_name})")
        self._rebuild_step_buttons()
        self._refresh_table()
        self._update_controls()

    def clear_solution(self):
        """Drop the displayed solution and return to editing."""
        self._solution = None
        self._current_step = 0
        self.summary_label.setText("Solution: --")
        self._rebuild_step_buttons()
        self._refresh_table()
        self._update_controls()

    # ---- step navigation ---------------------------------------------

    def go_to_step(self, index: int):
        """Show the grid before step index with that step's cells highlighted."""
        if not self._solution or not self._solution.has_moves:
            return
        self._current_step = max(0, min(index, self._solution.move_count - 1))
        self._refresh_table()
        self._update_controls()

    def next_step(self):
        self.go_to_step(self._current_step + 1)

    def prev_step(self):
        self.go_to_step(self._current_step - 1)

    def eventFilter(self, obj, event):
        """Left/Right arrows on the table step through a displayed solution."""
        if (obj is self.table and event.type() == QEvent.KeyPress
                and self._solution is not None and self._solution.has_moves):
            if event.key() == Qt.Key_Right:
                self.next_step()
                return True
            if event.key() == Qt.Key_Left:
                self.prev_step()
                return True
        return super().eventFilter(obj, event)

    def _rebuild_step_buttons(self):
        """Replace the per-step buttons with one for each step of the solution."""
        for button in self.step_buttons:
            self.step_buttons_layout.removeWidget(button)
            button.deleteLater()
        self.step_buttons = []

        if self._solution is None:
            return
        for index in range(self._solution.move_count):
            button = QPushButton(str(index + 1))
            button.setCheckable(True)
            button.setFixedWidth(36)
            button.clicked.connect(lambda _checked, i=index: self.go_to_step(i))
            # Keep the trailing stretch last
            self.step_buttons_layout.insertWidget(index, button)
            self.step_buttons.append(button)

    # ---- display ------------------------------------------------------

    def _refresh_table(self):
        """Redraw the table from the edited grid or the current step."""
        highlighted = set()
        values = self._grid
        if self._solution is not None and self._solution.has_moves:
            values = self._solution.grid_before(self._current_step).to_list()
            highlighted = set(self._solution.steps[self._current_step].positions)

        rows = len(values)
        cols = len(values[0]) if rows else 0
        self.table.blockSignals(True)
        self.table.setRowCount(rows)
        self.table.setColumnCount(cols)
        for r in range(rows):
            for c in range(cols):
                value = values[r][c]
                item = QTableWidgetItem("" if value == 0 else str(value))
                item.setTextAlignment(Qt.AlignCenter)
                if (r, c) in highlighted:
                    item.setBackground(HIGHLIGHT_COLOR)
                elif value == 0:
                    item.setBackground(EMPTY_COLOR)
                else:
                    item.setBackground(TILE_COLOR)
                self.table.setItem(r, c, item)
        self.table.blockSignals(False)

        self._update_step_labels()

    def _update_step_labels(self):
        if self._solution is None or not self._solution.has_moves:
            self.step_label.setText("Step:  --")
            self.cells_label.setText("")
            self.sum_label.setText("")
            return

        step = self._solution.steps[self._current_step]
        step_rows = sorted({c.row + 1 for c in step.cells})
        step_cols = sorted({c.col + 1 for c in step.cells})
        self.step_label.setText(
            f"Step:  {self._current_step + 1}/{self._solution.move_count} "
            f"[{step.selection_type}] Rows {'-'.join(map(str, step_rows))}, "
            f"Cols {'-'.join(map(str, step_cols))}, +{step.score}"
        )
        self.cells_label.setText("  ".join(
            f"R{c.row + 1}C{c.col + 1}: {c.value}" for c in step.cells
        ))
        self.sum_label.setText(
            f"Sum: {' + '.join(str(c.value) for c in step.cells)} = {step.sum}"
        )

    def _update_controls(self):
        """Enable controls that make sense in the current state."""
        has_steps = self._solution is not None and self._solution.has_moves
        editing = not self._is_solving and self._solution is None

        self.solve_button.setEnabled(not self._is_solving)
        self.reset_button.setEnabled(self._solution is not None and not self._is_solving)
        for widget in [self.create_button, self.import_button, self.strategy_combo,
                       self.width_spin, self.height_spin]:
            widget.setEnabled(not self._is_solving)
        self.table.setEditTriggers(
            QAbstractItemView.AllEditTriggers if editing else QAbstractItemView.NoEditTriggers
        )

        self.initial_button.setEnabled(has_steps and self._current_step > 0)
        self.prev_button.setEnabled(has_steps and self._current_step > 0)
        self.next_button.setEnabled(
            has_steps and self._current_step < self._solution.move_count - 1
        )
        # Arrows belong to the editor until there is a solution to step through
        self.next_shortcut.setEnabled(has_steps)
        self.prev_shortcut.setEnabled(has_steps)
        for index, button in enumerate(self.step_buttons):
            button.setChecked(index == self._current_step)

    def set_status(self, status: str):
        """
        Update the status label.

        Args:
            status: Status text to display (e.g., "Solving...", "Error: message")
        """
        self.status_label.setText(f"Status: {status}")

        if status.lower().startswith("error"):
            self.status_label.setStyleSheet("color: #d32f2f;")
        elif status.lower().startswith("solved"):
            self.status_label.setStyleSheet("color: #4CAF50;")
        else:
            self.status_label.setStyleSheet("color: #333333;")

    def closeEvent(self, event):
        """
        Handle window close event.

        Emits shutdown_requested signal before closing to allow
        graceful cleanup of worker threads.

        Args:
            event: QCloseEvent object
        """
        self.shutdown_requested.emit()
        event.accept()
