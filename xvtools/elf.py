"""Reading and writing of 64-bit little-endian ELF headers."""

import struct
from dataclasses import dataclass
from typing import ClassVar, List

ELF_MAGIC = 0x464C457F

ELF_PROG_LOAD = 1

ELF_PROG_FLAG_EXEC = 1
ELF_PROG_FLAG_WRITE = 2
ELF_PROG_FLAG_READ = 4


class ElfFormatError(ValueError):
    """Raised when data is not a well-formed ELF image."""


@dataclass
class ElfHeader:
    """The ELF file header."""

    magic: int = ELF_MAGIC
    elf: bytes = bytes(12)
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = 0
    phentsize: int = 0
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<I12sHHIQQQIHHHHHH")

    @classmethod
    def unpack(cls, data):
        """Parse a header from the start of data."""
        if len(data) < cls.STRUCT.size:
            raise ElfFormatError("data too short for an ELF header")
        header = cls(*cls.STRUCT.unpack_from(data))
        if header.magic != ELF_MAGIC:
            raise ElfFormatError("bad ELF magic")
        return header

    def pack(self):
        """Serialise the header to bytes."""
        return self.STRUCT.pack(
            self.magic, bytes(self.elf), self.type, self.machine, self.version,
            self.entry, self.phoff, self.shoff, self.flags, self.ehsize,
            self.phentsize, self.phnum, self.shentsize, self.shnum, self.shstrndx,
        )


@dataclass
class ProgramHeader:
    """An ELF program section header."""

    type: int = 0
    flags: int = 0
    off: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    align: int = 0

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<IIQQQQQQ")

    @classmethod
    def unpack(cls, data):
        """Parse a program header from the start of data."""
        if len(data) < cls.STRUCT.size:
            raise ElfFormatError("data too short for a program header")
        return cls(*cls.STRUCT.unpack_from(data))

    def pack(self):
        """Serialise the program header to bytes."""
        return self.STRUCT.pack(
            self.type, self.flags, self.off, self.vaddr,
            self.paddr, self.filesz, self.memsz, self.align,
        )

    def is_loadable(self):
        """True if the segment is to be loaded into memory."""
        return self.type == ELF_PROG_LOAD


def program_headers(data) -> List[ProgramHeader]:
    """Return all program headers of an ELF image."""
    header = ElfHeader.unpack(data)
    size = ProgramHeader.STRUCT.size
    end = header.phoff + header.phnum * size
    if end > len(data):
        raise ElfFormatError("program headers extend past end of data")
    view = memoryview(data)
    return [
        ProgramHeader.unpack(view[off:off + size])
        for off in range(header.phoff, end, size)
    ]