"""Unit-test programs for the universal machine and a writer for them."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .instructions import (
    add,
    cmov,
    divide,
    halt,
    load_program,
    load_segment,
    loadval,
    map_segment,
    multiply,
    nand,
    read_input,
    store_segment,
    unmap_segment,
    write_output,
    write_program,
)

R0, R1, R2, R3, R4, R5, R6, R7 = range(8)


@dataclass(frozen=True)
class TestProgram:
    """A named test: its program, optional input and expected output."""

    __test__ = False

    name: str
    build: Callable[[], list[int]]
    test_input: str | None = None
    expected_output: str | None = ""


def build_halt_test() -> list[int]:
    return [halt()]


def build_lv_test() -> list[int]:
    return [loadval(R1, 6), halt()]


def build_verbose_halt_test() -> list[int]:
    program: list[int] = []
    for char in "Bad!\n":
        program += [loadval(R1, ord(char)), write_output(R1)]
    program.append(halt())
    return program


def build_add() -> list[int]:
    return [add(R1, R2, R3), halt()]


def build_add_print() -> list[int]:
    return [
        loadval(R1, 48),
        loadval(R2, 6),
        add(R3, R1, R2),
        write_output(R3),
        halt(),
    ]


def build_in_n_out() -> list[int]:
    return [read_input(R1), write_output(R1), halt()]


def build_multiply() -> list[int]:
    return [loadval(R1, 2), loadval(R2, 102), multiply(R3, R1, R2), halt()]


def build_multiply_big() -> list[int]:
    return [
        loadval(R1, 33554431),
        loadval(R2, 33554431),
        multiply(R3, R1, R2),
        halt(),
    ]


def build_divide() -> list[int]:
    return [
        loadval(R1, 130),
        loadval(R2, 2),
        loadval(R4, 131),
        divide(R3, R1, R2),
        write_output(R3),
        divide(R3, R4, R2),
        write_output(R3),
        halt(),
    ]


def build_bitnand() -> list[int]:
    return [loadval(R1, 2), loadval(R2, 10), nand(R3, R1, R2), halt()]


def build_bitnand_same() -> list[int]:
    return [loadval(R1, 1), loadval(R2, 1), nand(R3, R1, R2), halt()]


def build_store_segment() -> list[int]:
    return [
        loadval(R1, 1),
        loadval(R2, 2),
        map_segment(R1, R2),
        loadval(R3, 97),
        store_segment(R1, R2, R3),
        load_segment(R3, R1, R2),
        write_output(R3),
        halt(),
    ]


def build_load_program() -> list[int]:
    return [
        loadval(R1, 6),
        loadval(R2, 0),
        loadval(R3, 5),
        load_program(R2, R1),
        divide(R1, R3, R2),
        unmap_segment(R1),
        loadval(R1, 100),
        write_output(R1),
        halt(),
    ]


def build_map_and_unmap() -> list[int]:
    return [loadval(R1, 2), map_segment(R2, R1), unmap_segment(R2), halt()]


def build_everything() -> list[int]:
    return [
        loadval(R1, 3),
        load_program(R2, R1),
        halt(),
        loadval(R4, 96),
        map_segment(R5, R1),
        loadval(R6, 1),
        store_segment(R5, R6, R4),
        loadval(R4, 10),
        load_segment(R4, R5, R6),
        unmap_segment(R6),
        add(R2, R4, R6),
        write_output(R2),
        loadval(R2, 96),
        loadval(R3, 2),
        loadval(R7, 6),
        multiply(R1, R2, R3),
        divide(R0, R1, R7),
        write_output(R0),
        halt(),
    ]


def build_print_alphabet() -> list[int]:
    program = [loadval(R1, 97), loadval(R2, 1)]
    for _ in range(26):
        program += [write_output(R1), add(R1, R1, R2)]
    return program


def build_cmov() -> list[int]:
    return [
        loadval(R1, 97),
        loadval(R2, 103),
        cmov(R3, R1, R2),
        write_output(R3),
        cmov(R3, R2, R4),
        write_output(R3),
        halt(),
    ]


def build_map_unmap_remap() -> list[int]:
    return [
        loadval(R1, 3),
        map_segment(R2, R1),
        write_output(R2),
        map_segment(R4, R1),
        unmap_segment(R2),
        map_segment(R6, R1),
        loadval(R7, 90),
        add(R6, R6, R7),
        write_output(R6),
        halt(),
    ]


TESTS: tuple[TestProgram, ...] = (
    TestProgram("halt", build_halt_test),
    TestProgram("halt-verbose", build_verbose_halt_test),
    TestProgram("add", build_add),
    TestProgram("print-six", build_add_print),
    TestProgram("inNout", build_in_n_out),
    TestProgram("multiply", build_multiply),
    TestProgram("multiply_big", build_multiply_big),
    TestProgram("build_divide", build_divide),
    TestProgram("NAND", build_bitnand),
    TestProgram("NAND_same", build_bitnand_same),
    TestProgram("seg_store", build_store_segment),
    TestProgram("load_p", build_load_program),
    TestProgram("map_and_unmap", build_map_and_unmap),
    TestProgram("test_all", build_everything),
    TestProgram("print_abc", build_print_alphabet),
    TestProgram("build_cmov", build_cmov),
    TestProgram("map_unmap_remap", build_map_unmap_remap),
)


def _write_or_remove(path: Path, contents: str | None) -> None:
    if not contents:
        path.unlink(missing_ok=True)
    else:
        path.write_bytes(contents.encode())


def write_test_files(test: TestProgram, directory: str | Path = ".") -> Path:
    """Write ``<name>.um`` and the input and expected-output files of a test.

    The ``.0`` and ``.1`` files are removed when their contents are empty.
    Returns the path of the program file.
    """
    directory = Path(directory)
    binary = directory / f"{test.name}.um"
    with binary.open("wb") as stream:
        write_program(stream, test.build())
    _write_or_remove(directory / f"{test.name}.0", test.test_input)
    _write_or_remove(directory / f"{test.name}.1", test.expected_output)
    return binary


def main(argv: Sequence[str] | None = None) -> int:
    """Write the named tests, or all of them, into the current directory."""
    names = sys.argv[1:] if argv is None else list(argv)
    directory = Path.cwd()
    if not names:
        for test in TESTS:
            print(f"***** Writing test '{test.name}'.")
            write_test_files(test, directory)
        return 0

    failed = False
    for name in names:
        matches = [test for test in TESTS if test.name == name]
        if not matches:
            failed = True
            print(f"***** No test named {name} *****", file=sys.stderr)
        for test in matches:
            write_test_files(test, directory)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())