from block_blast.__main__ import build_parser, main, run_demo


def test_demo_plays_and_prints(capsys):
    game = run_demo(5, seed=4)
    out = capsys.readouterr().out
    assert game.total_pieces_placed == 5
    assert game.score >= 5 * 10
    assert "slot" in out
    assert "█" in out


def test_main_runs_demo(capsys):
    main(["--seed", "1", "demo", "--moves", "2"])
    assert capsys.readouterr().out.count("score") == 2


def test_parser_defaults():
    args = build_parser().parse_args(["play"])
    assert args.settle_ms == 600
    assert args.highscore_file is None
