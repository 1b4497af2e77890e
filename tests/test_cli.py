import pytest

from optbatch.cli import main
from optbatch.dataset import SEED_COLUMNS

HEADER = ",".join(SEED_COLUMNS)


def test_default_seed(capsys):
    assert main(["--count", "1_000", "--chunk-size", "128"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 1
    assert out[0].startswith("Elapsed time:")
    assert out[0].endswith(" msec")


def test_mismatches_do_not_fail(tmp_path, capsys):
    seed = tmp_path / "seed.csv"
    seed.write_text(HEADER + "\n100,100,0.05,0,0.2,1.0,C,0,12.0\n")
    assert main(["--count", "3", "--runs", "2", "--seed-file", str(seed)]) == 0
    out = capsys.readouterr().out.splitlines()
    assert sum(ln.startswith("Error on") for ln in out) == 6


def test_no_check(tmp_path, capsys):
    seed = tmp_path / "seed.csv"
    seed.write_text(HEADER + "\n100,100,0.05,0,0.2,1.0,C,0,12.0\n")
    assert main(["--count", "3", "--no-check", "--seed-file", str(seed)]) == 0
    assert "Error on" not in capsys.readouterr().out


def test_missing_seed_file(tmp_path, capsys):
    assert main(["--count", "3", "--seed-file", str(tmp_path / "nope.csv")]) == 1
    assert capsys.readouterr().err.startswith("error:")


def test_malformed_seed_file(tmp_path, capsys):
    seed = tmp_path / "seed.csv"
    seed.write_text(HEADER + "\n100,100,0.05,0,0.2,1.0,X,0,12.0\n")
    assert main(["--seed-file", str(seed)]) == 1
    assert "option kind" in capsys.readouterr().err


def test_undecodable_seed_file(tmp_path, capsys):
    seed = tmp_path / "seed.csv"
    seed.write_bytes(b"\xff\xfe\x00s\x00p\x00o\x00t")
    assert main(["--count", "3", "--seed-file", str(seed)]) == 1
    assert capsys.readouterr().err.startswith("error:")


@pytest.mark.parametrize("argv", [
    ["--count", "0"],
    ["--runs", "-1"],
    ["--tolerance", "-0.1"],
    ["--count", "many"],
])
def test_bad_arguments(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2
