from pathlib import Path
from unittest.mock import patch
from platformer.__main__ import DEFAULT_ASSETS, main, parse_args

def test_parse_args_defaults():
    args = parse_args([])
    assert args.assets == DEFAULT_ASSETS
    assert args.level is None
    assert args.seed is None
    assert not args.debug

def test_parse_args_values():
    args = parse_args(["--assets", "somewhere", "--level", "2", "--seed", "9", "--debug"])
    assert args.assets == Path("somewhere")
    assert (args.level, args.seed, args.debug) == (2, 9, True)

def test_main_runs_game():
    with patch('platformer.__main__.Game') as mock_game, \
         patch('platformer.__main__.Vibrator'):
        assert main(["--level", "4", "--seed", "3"]) == 0

    state = mock_game.call_args[0][0]
    assert mock_game.call_args[0][2] is state.event_bus
    assert state.current_level == 4
    assert state.config.random_seed == 3
    mock_game.return_value.run.assert_called_once()

def test_main_reports_bad_assets(tmp_path):
    with patch('platformer.__main__.Game') as mock_game, \
         patch('platformer.__main__.Vibrator'):
        assert main(["--assets", str(tmp_path)]) == 1

    mock_game.return_value.run.assert_not_called()
