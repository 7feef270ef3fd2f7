# umachine

An emulator for the Universal Machine. The machine has eight 32-bit
registers, segmented word memory and fourteen instructions. A program is
a sequence of big-endian 32-bit words, and it is loaded into segment 0.

## Installing

```
pip install .
```

## Running a program

```python
import sys
from umachine.machine import Machine

with open("hello.um", "rb") as f:
    program = f.read()

Machine(program, sys.stdin.buffer, sys.stdout.buffer).run()
```

`Machine` accepts the program as raw bytes or as an iterable of words.
The `stdin` and `stdout` arguments are binary streams, and they default to
the process's standard streams. `Machine.step()` executes one instruction
and returns its `Opcode`. `Machine.run()` executes instructions until a
halt and then flushes `stdout`. The input instruction stores
`0xFFFFFFFF` when the input has ended.

Errors:

- `machine.MachineError` is raised for an invalid opcode, a division by
  zero, or output of a value greater than 255.
- `segments.SegmentError` is raised when the program uses an unmapped
  segment or an offset outside a segment. It is also raised when a
  program image ends three bytes into a word. One or two trailing bytes
  are dropped without an error.

`umachine.segments.Memory` holds the segments. `map`, `unmap`, `load`,
`store`, `replace_program` and `instruction` work on them. An unmapped
identifier is reused before a new one is allocated, the most recently
freed identifier first. `words_from_bytes` decodes a program image.

## Building programs

`umachine.instructions` encodes instructions:

```python
from umachine.instructions import loadval, write_output, halt, encode_program

data = encode_program([loadval(1, ord("A")), write_output(1), halt()])
```

The encoders are `three_register`, `loadval`, `halt`, `cmov`, `add`,
`multiply`, `divide`, `nand`, `read_input`, `write_output`,
`load_segment`, `store_segment`, `map_segment`, `unmap_segment` and
`load_program`. An encoder raises `ValueError` when a register or a value
does not fit its field. `encode_program` returns the words as bytes.
`write_program` writes the same bytes to a binary stream. `Opcode`
lists the operation codes.

## Writing the unit test programs

`umachine.labwrite` defines the built-in test programs as
`TestProgram` entries in `TESTS`. The command `umachine-labwrite` writes
them to the current directory:

```
umachine-labwrite              # every test
umachine-labwrite add NAND     # only the named tests
```

For each test the command writes `<name>.um`. An input file `<name>.0`
and an expected-output file `<name>.1` are written only when their
contents are non-empty. Otherwise an existing file of that name is
removed. None of the built-in tests has input or expected output, so
only the `.um` files are produced. When called with no names, the command
prints a line for each test it writes. The command exits with status 1
if any name given matches no test.

`write_test_files(test, directory)` writes one test into a chosen
directory and returns the path of the `.um` file.

## What it does not do

The package has no command for running a `.um` file. To run one, use
`Machine` from Python as shown above.