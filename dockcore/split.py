"""Splitting a multi-model PDBQT file into one file per ligand and per flexible part."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from dockcore.errors import FileError, ParseError, open_input, open_output

VERSION_STRING = "PDBQT Split 1.1.2"
_SUFFIX = ".pdbqt"


def default_prefix(input_name: str, add: str) -> str:
    """``input_name`` without a trailing ``.pdbqt``, followed by ``add``."""
    if input_name.endswith(_SUFFIX):
        input_name = input_name[: -len(_SUFFIX)]
    return input_name + add


@dataclass
class SplitModel:
    """The ligand lines and the flexible side chain lines of one MODEL."""

    ligand: list[str] = field(default_factory=list)
    flex: list[str] = field(default_factory=list)


def parse_multimodel_pdbqt(input_name: str) -> list[SplitModel]:
    """Read a multi-model PDBQT file; raises ParseError on misplaced tags."""
    models: list[SplitModel] = []
    parsing_model = False
    parsing_ligand = True
    count = 0
    with open_input(input_name) as stream:
        for raw in stream:
            count += 1
            line = raw.rstrip("\n")
            if line.startswith("MODEL"):
                if parsing_model or not parsing_ligand:
                    raise ParseError(input_name, count, "Misplaced MODEL tag")
                models.append(SplitModel())
                parsing_model = True
            elif line.startswith("ENDMDL"):
                if not parsing_model or not parsing_ligand:
                    raise ParseError(input_name, count, "Misplaced ENDMDL tag")
                parsing_model = False
            elif line.startswith("BEGIN_RES"):
                if not parsing_model or not parsing_ligand:
                    raise ParseError(input_name, count, "Misplaced BEGIN_RES tag")
                parsing_ligand = False
                models[-1].flex.append(line)
            elif line.startswith("END_RES"):
                if not parsing_model or parsing_ligand:
                    raise ParseError(input_name, count, "Misplaced END_RES tag")
                parsing_ligand = True
                models[-1].flex.append(line)
            else:
                if not parsing_model:
                    raise ParseError(input_name, count, "Input occurs outside MODEL")
                target = models[-1].ligand if parsing_ligand else models[-1].flex
                target.append(line)
    if parsing_model:
        raise ParseError(input_name, count + 1, "Missing ENDMDL tag")
    return models


def write_pdbqt(lines: Sequence[str], name: str) -> None:
    """Write ``lines`` to ``name``; nothing is written if there are no lines."""
    if not lines:
        return
    with open_output(name) as out:
        out.writelines(f"{line}\n" for line in lines)


def write_multimodel_pdbqt(
    models: Sequence[SplitModel], ligand_prefix: str, flex_prefix: str
) -> None:
    """Write each model's parts as ``<prefix><zero-padded number>.pdbqt``."""
    width = len(str(len(models)))
    for counter, model in enumerate(models, start=1):
        add = f"{counter:0{width}d}{_SUFFIX}"
        write_pdbqt(model.ligand, ligand_prefix + add)
        write_pdbqt(model.flex, flex_prefix + add)


class _CommandLineError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise _CommandLineError(message)


def _build_parser() -> _Parser:
    parser = _Parser(prog="split", add_help=False, allow_abbrev=False)
    inputs = parser.add_argument_group("Input")
    inputs.add_argument("--input", help="input to split (PDBQT)")
    outputs = parser.add_argument_group(
        "Output (optional) - defaults are chosen based on the input file name"
    )
    outputs.add_argument("--ligand", help="prefix for ligands")
    outputs.add_argument("--flex", help="prefix for side chains")
    info = parser.add_argument_group("Information (optional)")
    info.add_argument("--help", action="store_true", help="print this message")
    info.add_argument("--version", action="store_true", help="print program version")
    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Command-line entry point; returns the process exit status."""
    parser = _build_parser()
    args_list = list(sys.argv[1:] if argv is None else argv)
    try:
        args = parser.parse_args(args_list)
    except _CommandLineError as exc:
        sys.stderr.write(
            f"Command line parse error: {exc}\n\nCorrect usage:\n{parser.format_help()}\n"
        )
        return 1
    if args.help:
        print(parser.format_help())
        return 0
    if args.version:
        print(VERSION_STRING)
        return 0
    if args.input is None:
        sys.stderr.write(f"Missing input.\n\nCorrect usage:\n{parser.format_help()}\n")
        return 1
    ligand_prefix = args.ligand
    if ligand_prefix is None:
        ligand_prefix = default_prefix(args.input, "_ligand_")
        print(f"Prefix for ligands will be {ligand_prefix}")
    flex_prefix = args.flex
    if flex_prefix is None:
        flex_prefix = default_prefix(args.input, "_flex_")
        print(f"Prefix for flexible side chains will be {flex_prefix}")
    try:
        models = parse_multimodel_pdbqt(args.input)
        write_multimodel_pdbqt(models, ligand_prefix, flex_prefix)
    except FileError as exc:
        action = "reading" if exc.reading else "writing"
        sys.stderr.write(f'\n\nError: could not open "{exc.name}" for {action}.\n')
        return 1
    except ParseError as exc:
        sys.stderr.write(
            f'\n\nParse error on line {exc.line} in file "{exc.file}": {exc.reason}\n'
        )
        return 1
    except OSError as exc:
        sys.stderr.write(f"\n\nFile system error: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())