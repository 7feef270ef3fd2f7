"""Encoding of universal machine instructions."""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum
from typing import BinaryIO

_OP_WIDTH = 4
_OP_LSB = 28
_REG_WIDTH = 3
_LV_REG_LSB = 25
_LV_VALUE_WIDTH = 25


class Opcode(IntEnum):
    """Operation codes held in the top four bits of a word."""

    CMOV = 0
    SLOAD = 1
    SSTORE = 2
    ADD = 3
    MUL = 4
    DIV = 5
    NAND = 6
    HALT = 7
    ACTIVATE = 8
    INACTIVATE = 9
    OUT = 10
    IN = 11
    LOADP = 12
    LV = 13


def _field(value: int, width: int, lsb: int, name: str) -> int:
    if not 0 <= value < (1 << width):
        raise ValueError(f"{name} {value} does not fit in {width} bits")
    return value << lsb


def three_register(op: int, ra: int, rb: int, rc: int) -> int:
    """Encode an instruction that names three registers."""
    return (
        _field(int(op), _OP_WIDTH, _OP_LSB, "opcode")
        | _field(ra, _REG_WIDTH, 6, "register A")
        | _field(rb, _REG_WIDTH, 3, "register B")
        | _field(rc, _REG_WIDTH, 0, "register C")
    )


def loadval(ra: int, val: int) -> int:
    """Encode a load-value instruction putting ``val`` into register ``ra``."""
    return (
        _field(Opcode.LV, _OP_WIDTH, _OP_LSB, "opcode")
        | _field(ra, _REG_WIDTH, _LV_REG_LSB, "register A")
        | _field(val, _LV_VALUE_WIDTH, 0, "value")
    )


def halt() -> int:
    return three_register(Opcode.HALT, 0, 0, 0)


def cmov(a: int, b: int, c: int) -> int:
    return three_register(Opcode.CMOV, a, b, c)


def add(a: int, b: int, c: int) -> int:
    return three_register(Opcode.ADD, a, b, c)


def multiply(a: int, b: int, c: int) -> int:
    return three_register(Opcode.MUL, a, b, c)


def divide(a: int, b: int, c: int) -> int:
    return three_register(Opcode.DIV, a, b, c)


def nand(a: int, b: int, c: int) -> int:
    return three_register(Opcode.NAND, a, b, c)


def read_input(c: int) -> int:
    return three_register(Opcode.IN, 0, 0, c)


def write_output(c: int) -> int:
    return three_register(Opcode.OUT, 0, 0, c)


def load_segment(a: int, b: int, c: int) -> int:
    return three_register(Opcode.SLOAD, a, b, c)


def store_segment(a: int, b: int, c: int) -> int:
    return three_register(Opcode.SSTORE, a, b, c)


def map_segment(b: int, c: int) -> int:
    return three_register(Opcode.ACTIVATE, 0, b, c)


def unmap_segment(c: int) -> int:
    return three_register(Opcode.INACTIVATE, 0, 0, c)


def load_program(b: int, c: int) -> int:
    return three_register(Opcode.LOADP, 0, b, c)


def encode_program(instructions: Iterable[int]) -> bytes:
    """Return instructions as big-endian 32-bit words."""
    return b"".join(word.to_bytes(4, "big") for word in instructions)


def write_program(stream: BinaryIO, instructions: Iterable[int]) -> None:
    """Write instructions to a binary stream as big-endian words."""
    stream.write(encode_program(instructions))