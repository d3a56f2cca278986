"""
Unit tests for Cell class.

Tests the cell state machine, surface observation, and the exact and
subset deduction rules.
"""
import pytest
from solver import Cell, CellGrid, CellState, InvariantViolation, Position
from solver.tokens import (
    BLANK_TOKEN,
    FLAGGED_TOKEN,
    MINE_REVEALED_TOKEN,
    MINE_TRIGGER_TOKEN,
)


def reveal(grid: CellGrid, surface, row: int, col: int, digit: int) -> Cell:
    """Show a clue on the surface and let the cell observe it."""
    surface.set_clue(row, col, digit)
    cell = grid[row, col]
    assert cell.observe(surface) == (True, False)
    return cell


def positions(cells) -> set:
    return {cell.position for cell in cells}


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_blank(self) -> None:
        """New cell should be blank."""
        cell = Cell(Position(0, 0))
        assert cell.state == CellState.BLANK
        assert cell.is_blank is True

    def test_default_attribute_is_blank_token(self) -> None:
        """New cell remembers the blank render token."""
        assert Cell(Position(0, 0)).attribute == BLANK_TOKEN

    def test_new_cell_has_no_neighbors(self) -> None:
        """Neighbors are empty until wired."""
        cell = Cell(Position(0, 0))
        assert cell.neighbors == frozenset()

    def test_number_of_blank_cell_raises(self) -> None:
        """Reading a clue from an unrevealed cell is an invariant violation."""
        with pytest.raises(InvariantViolation):
            Cell(Position(0, 0)).number


# ============================================================================
# Neighbor Wiring Tests
# ============================================================================

class TestCellNeighbors:
    """Test one-time neighbor assignment and identity semantics."""

    def test_assign_neighbors(self) -> None:
        """Assigned neighbors are visible through the cell."""
        cell = Cell(Position(0, 0))
        other = Cell(Position(0, 1))
        cell.assign_neighbors([other])
        assert cell.neighbors == frozenset({other})

    def test_assign_neighbors_twice_raises(self) -> None:
        """Neighbors can only be wired once."""
        cell = Cell(Position(0, 0))
        cell.assign_neighbors([])
        with pytest.raises(InvariantViolation, match="already assigned"):
            cell.assign_neighbors([Cell(Position(0, 1))])

    def test_hash_ignores_neighbors(self, small_grid: CellGrid) -> None:
        """A wired cell hashes like an unwired cell at the same spot."""
        assert hash(small_grid[1, 1]) == hash(Cell(Position(1, 1)))

    def test_equality_ignores_neighbors(self, small_grid: CellGrid) -> None:
        """Equality compares state, not the neighbor graph."""
        assert small_grid[1, 1] == Cell(Position(1, 1))

    def test_equality_compares_state(self, small_grid: CellGrid) -> None:
        """Cells in different states are not equal."""
        other = Cell(Position(1, 1), state=CellState.MINE)
        assert small_grid[1, 1] != other

    def test_mutation_visible_through_neighbors(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """A neighbor sees the state change of the shared cell."""
        small_grid[0, 0].flag(scripted_surface, mark_on_surface=False)
        assert small_grid[0, 0] in small_grid[1, 1].bomb_neighbors


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test flagging behavior."""

    def test_flag_blank_cell(self, scripted_surface) -> None:
        """Flagging a blank cell makes it a mine."""
        cell = Cell(Position(0, 0))
        cell.flag(scripted_surface)
        assert cell.is_mine is True

    def test_flag_marks_on_surface(self, scripted_surface) -> None:
        """Flagging with marking right-clicks the cell."""
        cell = Cell(Position(2, 1))
        cell.flag(scripted_surface, mark_on_surface=True)
        assert scripted_surface.calls == [("right_click", Position(2, 1))]

    def test_flag_without_marking_makes_no_calls(
        self, scripted_surface
    ) -> None:
        """Flagging without marking stays off the surface."""
        Cell(Position(0, 0)).flag(scripted_surface, mark_on_surface=False)
        assert scripted_surface.calls == []

    def test_flag_mine_raises(self, scripted_surface) -> None:
        """Cannot flag a cell twice."""
        cell = Cell(Position(0, 0))
        cell.flag(scripted_surface, mark_on_surface=False)
        with pytest.raises(InvariantViolation):
            cell.flag(scripted_surface, mark_on_surface=False)

    def test_flag_number_raises(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """Cannot flag a revealed cell."""
        cell = reveal(small_grid, scripted_surface, 0, 0, 1)
        with pytest.raises(InvariantViolation):
            cell.flag(scripted_surface)


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObserve:
    """Test reading tokens back from the surface."""

    def test_unchanged_token_is_no_change(self, scripted_surface) -> None:
        """A still-blank square reports nothing."""
        cell = Cell(Position(0, 0))
        assert cell.observe(scripted_surface) == (False, False)
        assert cell.is_blank is True

    @pytest.mark.parametrize("digit", range(9))
    def test_clue_token_becomes_number(
        self, scripted_surface, digit: int
    ) -> None:
        """Each clue token decodes to its digit."""
        scripted_surface.set_clue(0, 0, digit)
        cell = Cell(Position(0, 0))
        assert cell.observe(scripted_surface) == (True, False)
        assert cell.is_number is True
        assert cell.number == digit

    def test_mine_trigger_is_boom(self, scripted_surface) -> None:
        """The triggered mine token ends in a boom."""
        scripted_surface.tokens[Position(0, 0)] = MINE_TRIGGER_TOKEN
        cell = Cell(Position(0, 0))
        assert cell.observe(scripted_surface) == (False, True)
        assert cell.is_mine is True

    @pytest.mark.parametrize("token", [FLAGGED_TOKEN, MINE_REVEALED_TOKEN, "odd"])
    def test_other_tokens_do_not_classify(
        self, scripted_surface, token: str
    ) -> None:
        """Unknown tokens are recorded but change nothing else."""
        scripted_surface.tokens[Position(0, 0)] = token
        cell = Cell(Position(0, 0))
        assert cell.observe(scripted_surface) == (False, False)
        assert cell.is_blank is True
        assert cell.attribute == token

    def test_observe_non_blank_raises(self, scripted_surface) -> None:
        """Observing a resolved cell is an invariant violation."""
        cell = Cell(Position(0, 0))
        cell.flag(scripted_surface, mark_on_surface=False)
        with pytest.raises(InvariantViolation):
            cell.observe(scripted_surface)

    def test_click_does_not_change_state(self, scripted_surface) -> None:
        """Clicking only talks to the surface."""
        cell = Cell(Position(1, 1))
        cell.click(scripted_surface)
        assert cell.is_blank is True
        assert scripted_surface.calls == [("click", Position(1, 1))]


# ============================================================================
# Cell Reset Tests
# ============================================================================

class TestCellReset:
    """Test returning a cell to blank."""

    def test_reset_number(self, small_grid: CellGrid, scripted_surface) -> None:
        """A revealed cell goes back to blank with the blank token."""
        cell = reveal(small_grid, scripted_surface, 0, 0, 2)
        cell.reset()
        assert cell.is_blank is True
        assert cell.attribute == BLANK_TOKEN
        with pytest.raises(InvariantViolation):
            cell.number

    def test_reset_keeps_neighbors(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """Reset does not touch the neighbor graph."""
        cell = small_grid[0, 0]
        before = cell.neighbors
        cell.flag(scripted_surface, mark_on_surface=False)
        cell.reset()
        assert cell.neighbors == before
        assert len(cell.neighbors) == 3


# ============================================================================
# Neighbor Query Tests
# ============================================================================

class TestCellQueries:
    """Test derived neighbor queries."""

    def test_neighbor_filters(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """Neighbors split by state into bombs, blanks and numbers."""
        small_grid[0, 0].flag(scripted_surface, mark_on_surface=False)
        reveal(small_grid, scripted_surface, 0, 1, 1)
        reveal(small_grid, scripted_surface, 0, 2, 0)
        center = small_grid[1, 1]

        assert positions(center.bomb_neighbors) == {Position(0, 0)}
        assert positions(center.non_zero_number_neighbors) == {Position(0, 1)}
        assert len(center.blank_neighbors) == 5

    def test_bombs_remaining(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """Remaining mines subtract flagged neighbors from the clue."""
        small_grid[0, 0].flag(scripted_surface, mark_on_surface=False)
        cell = reveal(small_grid, scripted_surface, 1, 1, 3)
        assert cell.bombs_remaining == 2

    def test_zero_does_not_join_workset(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """A zero clue carries no information for the workset."""
        assert reveal(small_grid, scripted_surface, 1, 1, 0).should_join_workset is False

    def test_number_with_blanks_joins_workset(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """A positive clue next to blanks joins the workset."""
        assert reveal(small_grid, scripted_surface, 1, 1, 2).should_join_workset is True

    def test_number_without_blanks_does_not_join(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """A positive clue with nothing blank around it is spent."""
        for cell in small_grid[0, 0].neighbors:
            cell.flag(scripted_surface, mark_on_surface=False)
        assert reveal(small_grid, scripted_surface, 0, 0, 3).should_join_workset is False


# ============================================================================
# Exact Rule Tests
# ============================================================================

class TestExactRules:
    """Test the single-cell flag and reveal rules."""

    def test_exact_flag_when_blanks_match_remaining(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """A corner 3 with three blank neighbors flags all of them."""
        cell = reveal(small_grid, scripted_surface, 0, 0, 3)
        assert positions(cell.neighbors_to_flag()) == {
            Position(0, 1), Position(1, 0), Position(1, 1)
        }

    def test_exact_flag_counts_existing_bombs(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """Flagged neighbors reduce the blanks needed."""
        small_grid[0, 1].flag(scripted_surface, mark_on_surface=False)
        cell = reveal(small_grid, scripted_surface, 0, 0, 3)
        assert positions(cell.neighbors_to_flag()) == {
            Position(1, 0), Position(1, 1)
        }

    def test_no_flag_when_ambiguous(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """A corner 1 with three blank neighbors flags nothing."""
        cell = reveal(small_grid, scripted_surface, 0, 0, 1)
        assert cell.neighbors_to_flag() == frozenset()

    def test_exact_reveal_when_satisfied(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """A satisfied clue is exhausted and frees its blanks."""
        small_grid[0, 1].flag(scripted_surface, mark_on_surface=False)
        cell = reveal(small_grid, scripted_surface, 0, 0, 1)
        exhausted, to_reveal = cell.neighbors_to_reveal()
        assert exhausted is True
        assert positions(to_reveal) == {Position(1, 0), Position(1, 1)}

    def test_unsatisfied_clue_not_exhausted(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """A clue still missing mines is not exhausted."""
        cell = reveal(small_grid, scripted_surface, 0, 0, 1)
        exhausted, to_reveal = cell.neighbors_to_reveal()
        assert exhausted is False
        assert to_reveal == frozenset()


# ============================================================================
# Subset Rule Tests
# ============================================================================

class TestSubsetRules:
    """
    Test the two-cell rules on a 2x4 grid.

    Bottom row clues 1, 1, 2, 1 over a blank top row, matching mines at
    (0, 1) and (0, 3).
    """

    @pytest.fixture
    def clued_grid(self, wide_grid: CellGrid, scripted_surface) -> CellGrid:
        for col, digit in enumerate([1, 1, 2, 1]):
            reveal(wide_grid, scripted_surface, 1, col, digit)
        return wide_grid

    def test_subset_flag_from_wider_neighbor(self, clued_grid: CellGrid) -> None:
        """The 2's extra blank must hold its extra mine."""
        assert positions(clued_grid[1, 1].neighbors_to_flag()) == {
            Position(0, 3)
        }

    def test_subset_flag_on_right_edge(self, clued_grid: CellGrid) -> None:
        """The edge 1 sees the 2's extra blank on the other side."""
        assert positions(clued_grid[1, 3].neighbors_to_flag()) == {
            Position(0, 1)
        }

    def test_subset_reveal_from_contained_neighbor(
        self, clued_grid: CellGrid
    ) -> None:
        """The corner 1's blanks sit inside its neighbor's, same count."""
        exhausted, to_reveal = clued_grid[1, 0].neighbors_to_reveal()
        assert exhausted is False
        assert positions(to_reveal) == {Position(0, 2)}

    def test_subset_rules_are_sound(self, clued_grid: CellGrid) -> None:
        """No rule flags a safe cell or frees a mine."""
        mines = {Position(0, 1), Position(0, 3)}
        for col in range(4):
            cell = clued_grid[1, col]
            assert positions(cell.neighbors_to_flag()) <= mines
            _, to_reveal = cell.neighbors_to_reveal()
            assert not positions(to_reveal) & mines


# ============================================================================
# Cell Observation Value Tests
# ============================================================================

class TestCellObservationValue:
    """Test observation values used for rendering."""

    def test_blank_is_negative_one(self) -> None:
        """Blank cell should return -1."""
        assert Cell(Position(0, 0)).to_observation() == -1

    def test_mine_is_negative_two(self, scripted_surface) -> None:
        """Flagged cell should return -2."""
        cell = Cell(Position(0, 0))
        cell.flag(scripted_surface, mark_on_surface=False)
        assert cell.to_observation() == -2

    def test_number_is_its_clue(
        self, small_grid: CellGrid, scripted_surface
    ) -> None:
        """Revealed cell returns its clue."""
        assert reveal(small_grid, scripted_surface, 2, 2, 2).to_observation() == 2
