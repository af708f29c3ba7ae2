import pytest

from dockcore.errors import FileError, ParseError
from dockcore.split import (
    SplitModel,
    default_prefix,
    main,
    parse_multimodel_pdbqt,
    write_multimodel_pdbqt,
    write_pdbqt,
)

TWO_MODELS = [
    "MODEL 1",
    "REMARK VINA RESULT: first",
    "ROOT",
    "ATOM line a",
    "ENDROOT",
    "TORSDOF 0",
    "BEGIN_RES ALA A 1",
    "ATOM flex a",
    "END_RES ALA A 1",
    "ENDMDL",
    "MODEL 2",
    "ROOT",
    "ATOM line b",
    "ENDROOT",
    "ENDMDL",
]


def write_input(tmp_path, lines, name="in.pdbqt"):
    path = tmp_path / name
    path.write_text("\n".join(lines) + "\n")
    return str(path)


def test_default_prefix_strips_pdbqt():
    assert default_prefix("docked.pdbqt", "_ligand_") == "docked_ligand_"


def test_default_prefix_keeps_other_names():
    assert default_prefix("docked.pdb", "_flex_") == "docked.pdb_flex_"
    assert default_prefix("pdbqt", "_x") == "pdbqt_x"


def test_parse_separates_ligand_and_flex(tmp_path):
    models = parse_multimodel_pdbqt(write_input(tmp_path, TWO_MODELS))
    assert len(models) == 2
    assert models[0].ligand == TWO_MODELS[1:6]
    assert models[0].flex == TWO_MODELS[6:9]
    assert models[1].ligand == TWO_MODELS[11:14]
    assert models[1].flex == []


@pytest.mark.parametrize(
    "lines, reason, line",
    [
        (["MODEL 1", "MODEL 2"], "Misplaced MODEL tag", 2),
        (["ENDMDL"], "Misplaced ENDMDL tag", 1),
        (["REMARK x"], "Input occurs outside MODEL", 1),
        (["MODEL 1", "END_RES"], "Misplaced END_RES tag", 2),
        (["MODEL 1", "BEGIN_RES", "BEGIN_RES"], "Misplaced BEGIN_RES tag", 3),
        (["MODEL 1", "BEGIN_RES", "ENDMDL"], "Misplaced ENDMDL tag", 3),
        (["MODEL 1", "ATOM"], "Missing ENDMDL tag", 3),
    ],
)
def test_parse_errors(tmp_path, lines, reason, line):
    with pytest.raises(ParseError) as info:
        parse_multimodel_pdbqt(write_input(tmp_path, lines))
    assert info.value.reason == reason
    assert info.value.line == line


def test_parse_missing_file(tmp_path):
    with pytest.raises(FileError):
        parse_multimodel_pdbqt(str(tmp_path / "absent.pdbqt"))


def test_write_pdbqt_skips_empty(tmp_path):
    target = tmp_path / "empty.pdbqt"
    write_pdbqt([], str(target))
    assert not target.exists()
    write_pdbqt(["a", "b"], str(target))
    assert target.read_text().splitlines() == ["a", "b"]


def test_write_multimodel_pads_numbers(tmp_path):
    models = [SplitModel(ligand=[f"L{i}"]) for i in range(10)]
    models[0].flex = ["F0"]
    write_multimodel_pdbqt(models, str(tmp_path / "lig_"), str(tmp_path / "flex_"))
    assert (tmp_path / "lig_01.pdbqt").read_text().splitlines() == ["L0"]
    assert (tmp_path / "lig_10.pdbqt").read_text().splitlines() == ["L9"]
    assert (tmp_path / "flex_01.pdbqt").read_text().splitlines() == ["F0"]
    assert not (tmp_path / "flex_02.pdbqt").exists()


def test_round_trip_through_files(tmp_path):
    source = write_input(tmp_path, TWO_MODELS)
    models = parse_multimodel_pdbqt(source)
    write_multimodel_pdbqt(models, str(tmp_path / "l_"), str(tmp_path / "f_"))
    assert (tmp_path / "l_1.pdbqt").read_text().splitlines() == models[0].ligand
    assert (tmp_path / "f_1.pdbqt").read_text().splitlines() == models[0].flex


def test_main_uses_default_prefixes(tmp_path, capsys):
    source = write_input(tmp_path, TWO_MODELS)
    assert main(["--input", source]) == 0
    ligand_file = tmp_path / "in_ligand_2.pdbqt"
    assert ligand_file.read_text().splitlines() == TWO_MODELS[11:14]
    assert (tmp_path / "in_flex_1.pdbqt").exists()
    assert "Prefix for ligands will be" in capsys.readouterr().out


def test_main_explicit_prefixes(tmp_path):
    source = write_input(tmp_path, TWO_MODELS)
    lig = str(tmp_path / "L")
    flex = str(tmp_path / "F")
    assert main(["--input", source, f"--ligand={lig}", "--flex", flex]) == 0
    assert (tmp_path / "L1.pdbqt").exists()
    assert (tmp_path / "F1.pdbqt").exists()


def test_main_missing_input(capsys):
    assert main([]) == 1
    assert "Missing input." in capsys.readouterr().err


def test_main_unknown_option(capsys):
    assert main(["--bogus"]) == 1
    assert "Command line parse error" in capsys.readouterr().err


def test_main_no_abbreviations(tmp_path, capsys):
    source = write_input(tmp_path, TWO_MODELS)
    assert main(["--inp", source]) == 1
    assert "Command line parse error" in capsys.readouterr().err


def test_main_version(capsys):
    assert main(["--version"]) == 0
    assert "1.1.2" in capsys.readouterr().out


def test_main_parse_error_reported(tmp_path, capsys):
    source = write_input(tmp_path, ["REMARK outside"])
    assert main(["--input", source]) == 1
    err = capsys.readouterr().err
    assert "Parse error on line 1" in err
    assert "Input occurs outside MODEL" in err


def test_main_unreadable_input(tmp_path, capsys):
    assert main(["--input", str(tmp_path / "nope.pdbqt")]) == 1
    assert "for reading" in capsys.readouterr().err