"""The universal machine: eight registers, segmented memory and a program counter."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from typing import BinaryIO

from .instructions import Opcode
from .segments import Memory, words_from_bytes

NUM_REGISTERS = 8
WORD_MASK = 0xFFFFFFFF

_OP_LSB = 28
_REG_MASK = 0b111
_LV_REG_LSB = 25
_LV_VALUE_MASK = (1 << 25) - 1


class MachineError(Exception):
    """Raised when the machine meets an instruction it cannot carry out."""


class Machine:
    """Executes a universal machine program held in segment 0."""

    def __init__(
        self,
        program: bytes | Iterable[int],
        stdin: BinaryIO | None = None,
        stdout: BinaryIO | None = None,
    ) -> None:
        if isinstance(program, (bytes, bytearray)):
            program = words_from_bytes(bytes(program))
        self.registers: list[int] = [0] * NUM_REGISTERS
        self.memory = Memory(program)
        self.pc = 0
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self._operations: dict[Opcode, Callable[[int, int, int], None]] = {
            Opcode.CMOV: self._conditional_move,
            Opcode.SLOAD: self._segment_load,
            Opcode.SSTORE: self._segment_store,
            Opcode.ADD: self._add,
            Opcode.MUL: self._multiply,
            Opcode.DIV: self._divide,
            Opcode.NAND: self._nand,
            Opcode.ACTIVATE: self._map_segment,
            Opcode.INACTIVATE: self._unmap_segment,
            Opcode.OUT: self._output,
            Opcode.IN: self._input,
            Opcode.LOADP: self._load_program,
        }

    def step(self) -> Opcode:
        """Execute the instruction at the program counter and return its opcode."""
        word = self.memory.instruction(self.pc)
        code = word >> _OP_LSB
        try:
            opcode = Opcode(code)
        except ValueError:
            raise MachineError(
                f"invalid opcode {code} at word {self.pc}"
            ) from None

        if opcode is Opcode.LV:
            register = (word >> _LV_REG_LSB) & _REG_MASK
            self.registers[register] = word & _LV_VALUE_MASK
        elif opcode is not Opcode.HALT:
            ra = (word >> 6) & _REG_MASK
            rb = (word >> 3) & _REG_MASK
            rc = word & _REG_MASK
            self._operations[opcode](ra, rb, rc)

        if opcode is not Opcode.LOADP:
            self.pc += 1
        return opcode

    def run(self) -> None:
        """Execute instructions until the program halts."""
        while self.step() is not Opcode.HALT:
            pass
        self.stdout.flush()

    def _conditional_move(self, ra: int, rb: int, rc: int) -> None:
        if self.registers[rc] != 0:
            self.registers[ra] = self.registers[rb]

    def _segment_load(self, ra: int, rb: int, rc: int) -> None:
        self.registers[ra] = self.memory.load(
            self.registers[rb], self.registers[rc]
        )

    def _segment_store(self, ra: int, rb: int, rc: int) -> None:
        self.memory.store(
            self.registers[ra], self.registers[rb], self.registers[rc]
        )

    def _add(self, ra: int, rb: int, rc: int) -> None:
        self.registers[ra] = (
            self.registers[rb] + self.registers[rc]
        ) & WORD_MASK

    def _multiply(self, ra: int, rb: int, rc: int) -> None:
        self.registers[ra] = (
            self.registers[rb] * self.registers[rc]
        ) & WORD_MASK

    def _divide(self, ra: int, rb: int, rc: int) -> None:
        divisor = self.registers[rc]
        if divisor == 0:
            raise MachineError(f"division by zero at word {self.pc}")
        self.registers[ra] = self.registers[rb] // divisor

    def _nand(self, ra: int, rb: int, rc: int) -> None:
        self.registers[ra] = ~(
            self.registers[rb] & self.registers[rc]
        ) & WORD_MASK

    def _map_segment(self, ra: int, rb: int, rc: int) -> None:
        self.registers[rb] = self.memory.map(self.registers[rc])

    def _unmap_segment(self, ra: int, rb: int, rc: int) -> None:
        self.memory.unmap(self.registers[rc])

    def _output(self, ra: int, rb: int, rc: int) -> None:
        value = self.registers[rc]
        if value > 0xFF:
            raise MachineError(f"cannot output value {value}")
        self.stdout.write(bytes((value,)))

    def _input(self, ra: int, rb: int, rc: int) -> None:
        data = self.stdin.read(1)
        self.registers[rc] = data[0] if data else WORD_MASK

    def _load_program(self, ra: int, rb: int, rc: int) -> None:
        segment_id = self.registers[rb]
        if segment_id != 0:
            self.memory.replace_program(segment_id)
        self.pc = self.registers[rc]