"""
Neighbor graph over the board's cells.

Construction happens in two phases: every cell is created first, then a
single sealing step wires each one to the cells around it. After that the
topology never changes.
"""
from typing import Iterator, List, Tuple, Union

from .cell import Cell
from .errors import InvariantViolation
from .position import Position


class CellGrid:
    """
    Row-major matrix of cells with fixed 8-neighbor adjacency.

    Cells can be looked up by Position or by a (row, col) tuple.
    """

    def __init__(self, rows: int, cols: int) -> None:
        """
        Build and seal a rows x cols grid.

        Args:
            rows: Number of rows.
            cols: Number of columns.
        """
        if rows < 1 or cols < 1:
            raise ValueError("Grid dimensions must be positive")
        self.rows = rows
        self.cols = cols
        self._sealed = False
        self._cells: List[List[Cell]] = [
            [Cell(Position(row, col)) for col in range(cols)]
            for row in range(rows)
        ]
        self.seal()

    def seal(self) -> None:
        """
        Wire every cell to its in-range neighbors.

        Raises:
            InvariantViolation: If the grid was already sealed.
        """
        if self._sealed:
            raise InvariantViolation("Grid neighbors already wired")
        for cell in self:
            cell.assign_neighbors(
                self[position]
                for position in cell.position.surrounding_in_range(
                    self.rows, self.cols
                )
            )
        self._sealed = True

    @property
    def is_sealed(self) -> bool:
        """Check if neighbors have been wired."""
        return self._sealed

    def __getitem__(self, key: Union[Position, Tuple[int, int]]) -> Cell:
        row, col = (key.row, key.col) if isinstance(key, Position) else key
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"({row}, {col}) is off the grid")
        return self._cells[row][col]

    def __iter__(self) -> Iterator[Cell]:
        for row in self._cells:
            yield from row

    def __len__(self) -> int:
        return self.rows * self.cols

    def row_cells(self) -> List[List[Cell]]:
        """Return the cells as a list of rows."""
        return [list(row) for row in self._cells]
