import demo


def test_rows_cover_both_ends():
    rows = list(demo.format_rows(demo.straight_line(), 4))

    assert len(rows) == 5
    assert rows[0].startswith("0.0,(0,0,0),")
    assert rows[-1].startswith("1.0,(0,1,0),")
    assert rows[2].startswith("0.5,(0,0.5,0),")


def test_main_prints_one_line_per_sample(capsys):
    demo.main(["--steps", "2"])

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert lines[1].split(",")[0] == "0.5"
