import pytest

from fishcore.benchmark_data import benchmark_games, default_commands


def _board_is_valid(board: str) -> bool:
    ranks = board.split("/")
    if len(ranks) != 8:
        return False
    for rank in ranks:
        width = sum(int(c) if c.isdigit() else 1 for c in rank)
        if width != 8:
            return False
    return board.count("K") == 1 and board.count("k") == 1


def _fens(commands):
    return [c for c in commands if "setoption" not in c]


def test_default_first_and_last_are_chess960_off():
    cmds = default_commands()
    assert cmds[0] == "setoption name UCI_Chess960 value false"
    assert cmds[-1] == "setoption name UCI_Chess960 value false"


def test_default_start_position_is_second():
    assert default_commands()[1] == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def test_default_setoption_entries():
    options = [c for c in default_commands() if "setoption" in c]
    assert options == [
        "setoption name UCI_Chess960 value false",
        "setoption name UCI_Chess960 value true",
        "setoption name UCI_Chess960 value false",
    ]


def test_chess960_positions_follow_enable():
    cmds = default_commands()
    on = cmds.index("setoption name UCI_Chess960 value true")
    assert cmds[on + 1].startswith("bbqnnrkr/pppppppp/8/8/8/8/PPPPPPPP/BBQNNRKR w HFhf")
    assert cmds[on + 2] == "nqbnrkrb/pppppppp/8/8/8/8/PPPPPPPP/NQBNRKRB w KQkq - 0 1"


def test_default_fens_have_valid_boards():
    for fen in _fens(default_commands()):
        board, side = fen.split()[:2]
        assert _board_is_valid(board), fen
        assert side in ("w", "b")


def test_default_fens_with_moves():
    with_moves = [f for f in _fens(default_commands()) if " moves " in f]
    assert "2K5/p7/7P/5pR1/8/5k2/r7/8 w - - 0 1 moves g5g6 f3e3 g6g5 e3f3" in with_moves
    for fen in with_moves:
        moves = fen.split(" moves ", 1)[1].split()
        assert moves
        assert all(len(m) == 4 for m in moves)


def test_default_commands_returns_fresh_copy():
    first = default_commands()
    first.clear()
    assert default_commands()[0] == "setoption name UCI_Chess960 value false"


def test_game_count_and_first_entries():
    games = benchmark_games()
    assert len(games) == 5
    assert games[0][0] == "rnbq1k1r/ppp1bppp/4pn2/8/2B5/2NP1N2/PPP2PPP/R1BQR1K1 b - - 2 8"
    assert games[-1][-1] == "8/8/5pk1/7p/3K3P/8/R4N1r/4b3 b - - 2 64"


@pytest.mark.parametrize("index, side", [(0, "b"), (1, "w"), (2, "b"), (3, "w"), (4, "b")])
def test_each_game_has_one_side_to_move(index, side):
    game = benchmark_games()[index]
    assert game
    assert {fen.split()[1] for fen in game} == {side}


def test_game_move_numbers_are_consecutive():
    for game in benchmark_games():
        numbers = [int(fen.split()[5]) for fen in game]
        assert numbers == list(range(numbers[0], numbers[0] + len(numbers)))


def test_game_positions_are_six_field_fens_with_valid_boards():
    for game in benchmark_games():
        for fen in game:
            fields = fen.split()
            assert len(fields) == 6, fen
            assert _board_is_valid(fields[0]), fen


def test_games_have_under_sixty_positions():
    for game in benchmark_games():
        assert 0 < len(game) < 60


def test_benchmark_games_returns_fresh_copy():
    games = benchmark_games()
    games[0].clear()
    games.pop()
    again = benchmark_games()
    assert len(again) == 5
    assert again[0][0] == "rnbq1k1r/ppp1bppp/4pn2/8/2B5/2NP1N2/PPP2PPP/R1BQR1K1 b - - 2 8"