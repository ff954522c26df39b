from broadside.core.models import (
    AttackResult,
    Coord,
    Orientation,
    ShipPlacement,
    ShipType,
    ShotResult,
    cells_for_placement,
    coord_key,
    default_fleet_lengths,
    in_bounds,
    to_classic_coord,
)


def test_to_classic_coord_uses_column_letter_and_one_based_row() -> None:
    assert to_classic_coord(Coord(0, 0)) == "A1"
    assert to_classic_coord(Coord(0, 9)) == "J1"
    assert to_classic_coord(Coord(9, 0)) == "A10"
    assert to_classic_coord(Coord(4, 1)) == "B5"
    assert to_classic_coord(Coord(6, 5)) == "F7"


def test_coord_key_packs_row_major() -> None:
    assert coord_key(Coord(0, 0)) == 0
    assert coord_key(Coord(3, 7)) == 37
    assert coord_key(Coord(9, 9)) == 99
    assert coord_key(Coord(1, 2), size=5) == 7


def test_coord_is_value_type() -> None:
    assert Coord(2, 3) == Coord(2, 3)
    assert len({Coord(2, 3), Coord(2, 3), Coord(3, 2)}) == 2


def test_in_bounds() -> None:
    assert in_bounds(0, 0)
    assert in_bounds(9, 9)
    assert not in_bounds(-1, 0)
    assert not in_bounds(0, 10)


def test_default_fleet_lengths() -> None:
    assert default_fleet_lengths() == (5, 4, 3, 3, 2)
    assert ShipType.SUBMARINE.size == 3


def test_attack_result_constructors() -> None:
    assert AttackResult.miss().outcome is ShotResult.MISS
    assert AttackResult.hit() == AttackResult(ShotResult.HIT, None)
    sunk = AttackResult.sunk(4)
    assert sunk.outcome is ShotResult.SUNK
    assert sunk.ship_length == 4
    assert AttackResult.sunk().ship_length is None


def test_cells_for_vertical_placement() -> None:
    placement = ShipPlacement(ShipType.CRUISER, Coord(2, 4), Orientation.VERTICAL)
    assert cells_for_placement(placement) == [Coord(2, 4), Coord(3, 4), Coord(4, 4)]
