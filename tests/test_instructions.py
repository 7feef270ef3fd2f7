import io

import pytest

from umachine import instructions as ins
from umachine.instructions import Opcode
from umachine.segments import words_from_bytes


def _fields(word):
    return word >> 28, (word >> 6) & 7, (word >> 3) & 7, word & 7


def test_halt_word():
    assert ins.halt() == 0x70000000


def test_halt_bytes():
    assert ins.encode_program([ins.halt()]) == b"\x70\x00\x00\x00"


def test_opcode_values_in_encoded_words():
    assert ins.cmov(0, 0, 0) >> 28 == 0
    assert ins.halt() >> 28 == 7
    assert ins.loadval(0, 0) >> 28 == 13
    assert ins.three_register(Opcode.HALT, 0, 0, 0) == ins.halt()


@pytest.mark.parametrize(
    "word, expected",
    [
        (ins.cmov(1, 2, 3), (Opcode.CMOV, 1, 2, 3)),
        (ins.add(3, 1, 2), (Opcode.ADD, 3, 1, 2)),
        (ins.multiply(3, 1, 2), (Opcode.MUL, 3, 1, 2)),
        (ins.divide(3, 4, 2), (Opcode.DIV, 3, 4, 2)),
        (ins.nand(3, 1, 2), (Opcode.NAND, 3, 1, 2)),
        (ins.read_input(1), (Opcode.IN, 0, 0, 1)),
        (ins.write_output(7), (Opcode.OUT, 0, 0, 7)),
        (ins.load_segment(3, 1, 2), (Opcode.SLOAD, 3, 1, 2)),
        (ins.store_segment(5, 6, 4), (Opcode.SSTORE, 5, 6, 4)),
        (ins.map_segment(2, 1), (Opcode.ACTIVATE, 0, 2, 1)),
        (ins.unmap_segment(6), (Opcode.INACTIVATE, 0, 0, 6)),
        (ins.load_program(2, 1), (Opcode.LOADP, 0, 2, 1)),
    ],
)
def test_three_register_fields(word, expected):
    assert _fields(word) == expected


def test_loadval_fields():
    word = ins.loadval(1, 33554431)
    assert word >> 28 == Opcode.LV
    assert (word >> 25) & 7 == 1
    assert word & ((1 << 25) - 1) == 33554431


def test_loadval_value_too_large():
    with pytest.raises(ValueError):
        ins.loadval(1, 1 << 25)


def test_register_out_of_range():
    with pytest.raises(ValueError):
        ins.add(8, 0, 0)
    with pytest.raises(ValueError):
        ins.loadval(8, 0)


def test_opcode_out_of_range():
    with pytest.raises(ValueError):
        ins.three_register(16, 0, 0, 0)


def test_encode_round_trip():
    program = [ins.loadval(1, 48), ins.loadval(2, 6), ins.add(3, 1, 2),
               ins.write_output(3), ins.halt()]
    data = ins.encode_program(program)
    assert len(data) == 4 * len(program)
    assert words_from_bytes(data) == program


def test_write_program_to_stream():
    program = [ins.loadval(1, 97), ins.write_output(1), ins.halt()]
    stream = io.BytesIO()
    ins.write_program(stream, program)
    assert stream.getvalue() == ins.encode_program(program)
    assert words_from_bytes(stream.getvalue()) == program