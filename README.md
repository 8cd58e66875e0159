# xvtools

Helpers for working with the data layouts of a small RISC-V teaching kernel,
a parser for its shell's command language, a simulated free-list heap
allocator, a Park–Miller random generator and an `echo` command. Everything
is plain Python with no runtime dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command-line tool

`xv-echo` prints its arguments separated by single spaces and ended by a
newline. Given no arguments, it prints nothing.

```
xv-echo hello world
```

## Library use

### Shell command parsing — `xvtools.shparse`

`parse_command(line)` turns a command line into a tree of `ExecCommand`,
`RedirCommand`, `PipeCommand`, `ListCommand` and `BackCommand`. It knows
`|`, `;`, `&`, parentheses, and the redirections `<`, `>` and `>>`. A
command may have at most nine arguments. Errors raise `ShellSyntaxError`;
when text is left over after a complete command, its `leftovers` attribute
holds that text.

```python
from xvtools.shparse import parse_command, tokenize

tree = parse_command("cat < in.txt | grep foo > out.txt; echo done &")
tokens = tokenize("ls >> log")   # Token(kind, text, start) tuples
```

`RedirCommand` carries the file name, the open mode (built from the
`O_RDONLY`, `O_WRONLY`, `O_CREATE` and `O_TRUNC` constants in the module)
and the file descriptor it replaces.

### Heap allocator — `xvtools.umalloc`

`Heap(limit)` simulates a first-fit, address-ordered circular free list with
a roving pointer. Memory is handed out in 16-byte units, each block preceded
by a one-unit header, and the heap grows by at least 4096 units at a time up
to `limit` bytes.

```python
from xvtools.umalloc import Heap

heap = Heap(1024 * 1024)
addr = heap.malloc(100)      # an address, or None when out of memory
heap.free(addr)              # ValueError for an address not allocated
print(heap.free_blocks())    # [(header address, length in bytes), ...]
```

### Random numbers — `xvtools.rand`

`do_rand(state)` performs one step of the Park–Miller minimal standard
generator and returns the new state. `ParkMiller(state=1)` keeps its own
state; `next()` returns the following number, and the object can be iterated
for an endless stream.

### Paging and memory layout — `xvtools.riscv`

Page rounding (`pg_round_up`, `pg_round_down`), Sv39 page-table entry
helpers (`pa2pte`, `pte2pa`, `pte_flags`, `px`), `make_satp`, `kstack`, the
PLIC per-hart register addresses (`plic_senable`, `plic_spriority`,
`plic_sclaim`), and constants for the physical memory layout, control
register bits and system parameters.

### ELF headers — `xvtools.elf`

`ElfHeader` and `ProgramHeader` dataclasses with `unpack(data)` and
`pack()` in the 64-bit little-endian layout; `ProgramHeader.is_loadable()`
tells loadable segments apart. `program_headers(data)` lists every program
header of an image. Malformed input raises `ElfFormatError`.

### Virtio structures — `xvtools.virtio`

`VirtqDesc`, `VirtqAvail`, `VirtqUsedElem`, `VirtqUsed` and `BlkRequest`,
each with `pack()` and `unpack(data)` in the on-device layout, plus the MMIO
register offsets, status bits and feature bits as constants.

## What this package does not do

- It parses shell command lines but does not run them: there is no
  interactive shell, no process creation and no redirection of real files.
- Apart from `xv-echo` it has no commands: nothing for copying, searching,
  counting, listing or finding files, creating or removing directories or
  links, or formatted printing.
- The allocator works on simulated addresses; it hands out no real memory.
- The layout modules describe and encode data; they do not drive devices or
  load programs.