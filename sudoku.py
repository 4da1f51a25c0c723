# sudoku.py
"""
Sudoku CSP engine: per-cell option tracking, the fixed peer topology,
reversible assignments kept on an undo ledger, and MRV backtracking search
with forward checking.
"""
from typing import List, Tuple, Optional
import logging

# ----------------------------
# Config
# ----------------------------
GRID_SIZE = 9
BOX_SIZE = 3
CELL_COUNT = GRID_SIZE * GRID_SIZE
PEER_COUNT = 20
DIGITS = range(1, GRID_SIZE + 1)
LOGGER_NAME = "sudoku"

# ----------------------------
# Types
# ----------------------------
Variable = Tuple[int, int]   # (row, column), both in [0, 9)
Grid = List[List[int]]       # 0 = empty


def get_logger() -> logging.Logger:
    """Return the shared sudoku logger, attaching a console handler on first use."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] [%(name)s] %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


logger = get_logger()


def cell_index(var: Variable) -> int:
    """Dense slot of a (row, column) variable: row * 9 + column."""
    row, column = var
    return row * GRID_SIZE + column


def cell_variable(index: int) -> Variable:
    return divmod(index, GRID_SIZE)


# ----------------------------
# CSP Components: cell domains and peer topology
# ----------------------------
class CellState:
    """Which digits may still go in one cell, how many, and the assigned digit (0 = unassigned)."""

    __slots__ = ("options", "option_count", "value")

    def __init__(self):
        self.options = set(DIGITS)
        self.option_count = GRID_SIZE
        self.value = 0

    def remove_option(self, value: int) -> bool:
        """Drop `value` from the domain. Returns True when the domain is wiped out."""
        if value in self.options:
            self.options.remove(value)
            self.option_count -= 1
        return self.option_count == 0

    def add_option(self, value: int):
        if value not in self.options:
            self.options.add(value)
            self.option_count += 1

    def has_option(self, value: int) -> bool:
        return value in self.options


class ConstraintTopology:
    """
    For every cell, the 20 other cells sharing its row, column or 3x3 box.
    Built once; the lookup table is read-only afterwards and shared by all cells.
    """

    def __init__(self):
        self._peers: Tuple[Tuple[int, ...], ...] = tuple(
            self._build_peers(index) for index in range(CELL_COUNT)
        )

    @staticmethod
    def _build_peers(index: int) -> Tuple[int, ...]:
        row, column = cell_variable(index)
        peers: List[int] = []

        # row peers
        for peer_column in range(GRID_SIZE):
            if peer_column != column:
                peers.append(cell_index((row, peer_column)))

        # column peers
        for peer_row in range(GRID_SIZE):
            if peer_row != row:
                peers.append(cell_index((peer_row, column)))

        # box peers not already covered by the row or column
        box_start_row, box_start_column = (row // BOX_SIZE) * BOX_SIZE, (column // BOX_SIZE) * BOX_SIZE
        for box_row_index in range(box_start_row, box_start_row + BOX_SIZE):
            for box_column_index in range(box_start_column, box_start_column + BOX_SIZE):
                if box_row_index != row and box_column_index != column:
                    peers.append(cell_index((box_row_index, box_column_index)))

        return tuple(peers)

    def peer_indices(self, index: int) -> Tuple[int, ...]:
        return self._peers[index]

    def peers_of(self, var: Variable) -> List[Variable]:
        """Return peer coordinates that share row, column, or 3x3 box with var (excluding var)."""
        return [cell_variable(peer) for peer in self._peers[cell_index(var)]]


# ----------------------------
# Undo ledger
# ----------------------------
class SetOperation:
    """
    One tentative assignment on the ledger: the cell, the value, and the peers
    that actually lost `value` as a consequence (in removal order).
    """

    __slots__ = ("index", "value", "forbids")

    def __init__(self, index: int, value: int):
        self.index = index
        self.value = value
        self.forbids: List[int] = []

    @property
    def variable(self) -> Variable:
        return cell_variable(self.index)


# ----------------------------
# Solver (MRV + Forward Checking)
# ----------------------------
class SudokuSolver:
    """
    Owns the 81 cell domains, the shared topology and the undo ledger.

    `free_cells` counts unassigned cells; `iterations` counts visited search
    nodes and is diagnostic only.
    """

    def __init__(self, topology: Optional[ConstraintTopology] = None):
        self.topology = topology if topology is not None else ConstraintTopology()
        self.cells: List[CellState] = [CellState() for _ in range(CELL_COUNT)]
        self.ledger: List[SetOperation] = []
        self.free_cells = CELL_COUNT
        self.iterations = 0

    # --- queries -----------------------------------------------------------

    def is_solved(self) -> bool:
        return self.free_cells == 0

    def value_at(self, var: Variable) -> int:
        """Assigned digit of a cell, 0 when empty."""
        return self.cells[cell_index(var)].value

    def options_of(self, var: Variable) -> List[int]:
        return sorted(self.cells[cell_index(var)].options)

    @property
    def ledger_depth(self) -> int:
        return len(self.ledger)

    def to_grid(self) -> Grid:
        return [
            [self.cells[row * GRID_SIZE + column].value for column in range(GRID_SIZE)]
            for row in range(GRID_SIZE)
        ]

    # --- assignment --------------------------------------------------------

    def force(self, var: Variable, value: int) -> bool:
        """Seed a known digit. Narrows peers without a ledger entry, so it is never undone."""
        return self._assign(cell_index(var), value, undoable=False)

    def set(self, var: Variable, value: int) -> bool:
        """Tentatively assign `value`; returns False if the cell is taken or `value` is not a candidate."""
        return self._assign(cell_index(var), value, undoable=True)

    def _assign(self, index: int, value: int, undoable: bool) -> bool:
        state = self.cells[index]

        # Cannot set if already set, or if value is not a valid option
        if state.value:
            return False
        if not state.has_option(value):
            return False

        state.value = value
        peers = self.topology.peer_indices(index)
        if undoable:
            operation = SetOperation(index, value)
            self.ledger.append(operation)
            for peer in peers:
                peer_state = self.cells[peer]
                if peer_state.has_option(value):
                    peer_state.remove_option(value)
                    operation.forbids.append(peer)
        else:
            for peer in peers:
                self.cells[peer].remove_option(value)

        self.free_cells -= 1
        return True

    def unset(self):
        """
        Undo the most recent tentative assignment, restoring exactly the
        options it removed. Raises IndexError if nothing is outstanding.
        """
        operation = self.ledger.pop()
        for peer in operation.forbids:
            self.cells[peer].add_option(operation.value)
        self.cells[operation.index].value = 0
        self.free_cells += 1

    # --- search ------------------------------------------------------------

    def select_unassigned_variable(self) -> Optional[int]:
        """
        MRV: index of the unassigned cell with the fewest options, first in scan
        order on ties. An over-constrained cell is returned immediately.
        """
        best_index: Optional[int] = None
        best_count = GRID_SIZE + 1

        for index, state in enumerate(self.cells):
            if state.value:
                continue
            option_count = state.option_count
            if option_count == 0:
                return index
            if option_count < best_count:
                best_count = option_count
                best_index = index
                if best_count == 1:
                    break

        return best_index

    def solve(self) -> bool:
        """
        Backtracking search. On success every cell is assigned and the
        accepted assignments stay on the ledger; on failure all tentative
        assignments made by this call are undone.
        """
        if self.is_solved():
            return True
        self.iterations += 1

        index = self.select_unassigned_variable()
        if index is None:
            return False
        state = self.cells[index]
        if state.option_count == 0:
            logger.debug("Dead branch at %s (depth %d)", cell_variable(index), len(self.ledger))
            return False

        logger.debug("Selecting %s with %d options", cell_variable(index), state.option_count)
        for value in sorted(state.options):
            self._assign(index, value, undoable=True)
            if self.solve():
                return True
            logger.debug("  UNASSIGN %s = %d (backtracking)", cell_variable(index), value)
            self.unset()

        return False


# ----------------------------
# Solution check
# ----------------------------
def is_valid_solution(grid: Grid) -> bool:
    """True when every row, column and 3x3 box holds 1-9 exactly once."""
    expected = set(DIGITS)
    if len(grid) != GRID_SIZE or any(len(row) != GRID_SIZE for row in grid):
        return False

    for row in range(GRID_SIZE):
        if set(grid[row]) != expected:
            return False

    for column in range(GRID_SIZE):
        if {grid[row][column] for row in range(GRID_SIZE)} != expected:
            return False

    for box_start_row in range(0, GRID_SIZE, BOX_SIZE):
        for box_start_column in range(0, GRID_SIZE, BOX_SIZE):
            box_values = {
                grid[box_row_index][box_column_index]
                for box_row_index in range(box_start_row, box_start_row + BOX_SIZE)
                for box_column_index in range(box_start_column, box_start_column + BOX_SIZE)
            }
            if box_values != expected:
                return False

    return True
