"""Board set-ups shared by the game tests."""


def fill_around_active(game, color="#00e5ff"):
    """Occupy every board cell except the ones under the active piece."""
    own = set(game.active_piece.cells())
    for y in range(game.board.height):
        for x in range(game.board.width):
            if (x, y) not in own:
                game.board.set(x, y, color)
