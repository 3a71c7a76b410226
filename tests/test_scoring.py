"""Row completion and region bonus"""
import pytest

from tetris_scoring import completed_rows, connected_regions, line_score, region_bonus

RED = "#ff0000"
BLUE = "#0000ff"


@pytest.mark.parametrize("count,points", [(0, 0), (1, 10), (2, 60), (3, 120), (4, 200), (7, 200)])
def test_line_score(count, points):
    assert line_score(count) == points


class TestCompletedRows:
    def test_only_touched_rows_are_checked(self, board):
        for x in range(10):
            board.set(x, 19, RED)
        board.set(0, 18, RED)
        assert completed_rows(board, [18]) == []
        rows = completed_rows(board, [18, 19])
        assert [r.y for r in rows] == [19]
        assert rows[0].cells[3] == (3, 19, RED)

    def test_rows_are_not_removed(self, board):
        for x in range(10):
            board.set(x, 19, RED)
        completed_rows(board, [19])
        assert board.is_row_full(19)

    def test_duplicate_rows_counted_once(self, board):
        for x in range(10):
            board.set(x, 0, BLUE)
        assert len(completed_rows(board, [0, 0, 0])) == 1


class TestRegionBonus:
    def test_single_blob_at_level_two(self, board):
        for x, y in [(0, 19), (1, 19), (2, 19), (0, 18), (1, 18), (2, 18)]:
            board.set(x, y, RED)
        res = region_bonus(board, 2)
        assert res.total == 240
        assert len(res.regions) == 1
        assert res.regions[0].bonus == 240
        assert res.regions[0].centroid == (1.0, 18.5)

    def test_only_largest_region_per_color_counts(self, board):
        for x in range(3):
            board.set(x, 19, RED)
        board.set(8, 19, RED)
        board.set(9, 19, RED)
        for y in range(16, 20):
            board.set(5, y, BLUE)
        res = region_bonus(board, 1)
        assert res.total == (3 + 4) * 20
        by_color = {r.color: len(r.cells) for r in res.regions}
        assert by_color == {RED: 3, BLUE: 4}

    def test_diagonals_are_not_connected(self, board):
        board.set(0, 19, RED)
        board.set(1, 18, RED)
        assert len(connected_regions(board)) == 2
        assert region_bonus(board, 1).total == 20

    def test_colors_compare_by_value(self, board):
        board.set(0, 19, "".join(["#ff", "0000"]))
        board.set(1, 19, "".join(["#ff00", "00"]))
        assert len(connected_regions(board)) == 1

    def test_empty_board(self, board):
        res = region_bonus(board, 3)
        assert res.total == 0 and res.regions == []

    def test_full_board(self, board):
        board.fill(BLUE)
        assert region_bonus(board, 1).total == 200 * 20
