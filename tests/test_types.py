from heurigomoku.game.types import Cell, InvalidCoordinateError, Player, Point


def test_player_other():
    assert Player.BLACK.other is Player.WHITE
    assert Player.WHITE.other is Player.BLACK


def test_player_str():
    assert str(Player.BLACK) == "Black"
    assert str(Player.WHITE) == "White"


def test_point_is_namedtuple():
    p = Point(3, 5)
    assert p.row == 3
    assert p.col == 5
    assert p == Point(3, 5)


def test_boundary_is_not_empty():
    assert Cell.BOUNDARY is not Cell.EMPTY
    assert Cell.BOUNDARY.value != Cell.EMPTY.value


def test_invalid_coordinate_error_is_value_error():
    err = InvalidCoordinateError(Point(15, 0), 15)
    assert isinstance(err, ValueError)
    assert err.point == Point(15, 0)
    assert "15x15" in str(err)
