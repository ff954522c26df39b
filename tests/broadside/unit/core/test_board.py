import pytest

from broadside.core.board import BoardState
from broadside.core.errors import TargetingError
from broadside.core.fleet import build_board_from_fleet
from broadside.core.models import (
    AttackResult,
    CellState,
    Coord,
    Orientation,
    ShipPlacement,
    ShipType,
)


def test_board_can_place_and_reject_overlap_or_oob() -> None:
    board = BoardState()
    carrier = ShipPlacement(ShipType.CARRIER, Coord(0, 0), Orientation.HORIZONTAL)
    assert board.can_place(carrier)
    assert board.place_ship(carrier) == 0
    assert not board.can_place(ShipPlacement(ShipType.DESTROYER, Coord(0, 0), Orientation.HORIZONTAL))
    assert not board.can_place(ShipPlacement(ShipType.CARRIER, Coord(0, 8), Orientation.HORIZONTAL))
    with pytest.raises(ValueError):
        board.place_ship(ShipPlacement(ShipType.DESTROYER, Coord(0, 4), Orientation.VERTICAL))
    assert board.place_ship(ShipPlacement(ShipType.DESTROYER, Coord(2, 0), Orientation.VERTICAL)) == 1


def test_attack_reports_sunk_length_and_marks_ship_sunk() -> None:
    board = BoardState()
    board.place_ship(ShipPlacement(ShipType.CRUISER, Coord(3, 3), Orientation.VERTICAL))

    assert board.attack(Coord(3, 3)) == AttackResult.hit()
    assert board.cell_state(3, 3) is CellState.HIT
    assert board.cell_state(4, 3) is CellState.SHIP
    assert board.attack(Coord(0, 0)) == AttackResult.miss()
    assert board.cell_state(0, 0) is CellState.MISS
    board.attack(Coord(4, 3))
    assert not board.all_ships_sunk()
    assert board.attack(Coord(5, 3)) == AttackResult.sunk(3)
    assert [board.cell_state(row, 3) for row in (3, 4, 5)] == [CellState.SUNK] * 3
    assert board.all_ships_sunk()


def test_attack_rejects_repeat_and_out_of_bounds() -> None:
    board = BoardState()
    board.attack(Coord(2, 2))
    with pytest.raises(TargetingError):
        board.attack(Coord(2, 2))
    with pytest.raises(TargetingError):
        board.attack(Coord(-1, 0))
    with pytest.raises(TargetingError):
        board.attack(Coord(0, 10))


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (10, 0), (0, 10)])
def test_cell_state_rejects_out_of_bounds(valid_fleet, row: int, col: int) -> None:
    board = build_board_from_fleet(valid_fleet)
    with pytest.raises(TargetingError):
        board.cell_state(row, col)
    with pytest.raises(TargetingError):
        board.opponent_view().cell_state(row, col)


def test_cell_state_bounds_follow_board_size() -> None:
    board = BoardState(size=4)
    assert board.cell_state(3, 3) is CellState.EMPTY
    with pytest.raises(TargetingError):
        board.cell_state(4, 0)


def test_opponent_view_hides_unhit_ships() -> None:
    board = BoardState()
    board.place_ship(ShipPlacement(ShipType.DESTROYER, Coord(5, 5), Orientation.HORIZONTAL))
    view = board.opponent_view()
    assert view.size == 10
    assert view.cell_state(5, 5) is CellState.EMPTY
    board.attack(Coord(5, 5))
    assert view.cell_state(5, 5) is CellState.HIT
    assert view.cell_state(5, 6) is CellState.EMPTY


def test_empty_board_is_not_all_sunk() -> None:
    assert not BoardState().all_ships_sunk()
