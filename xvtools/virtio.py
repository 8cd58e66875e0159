"""Virtio MMIO register layout, descriptor rings and block requests."""

import struct
from dataclasses import dataclass, field
from typing import ClassVar, Tuple

# MMIO control registers.
VIRTIO_MMIO_MAGIC_VALUE = 0x000
VIRTIO_MMIO_VERSION = 0x004
VIRTIO_MMIO_DEVICE_ID = 0x008
VIRTIO_MMIO_VENDOR_ID = 0x00C
VIRTIO_MMIO_DEVICE_FEATURES = 0x010
VIRTIO_MMIO_DRIVER_FEATURES = 0x020
VIRTIO_MMIO_QUEUE_SEL = 0x030
VIRTIO_MMIO_QUEUE_NUM_MAX = 0x034
VIRTIO_MMIO_QUEUE_NUM = 0x038
VIRTIO_MMIO_QUEUE_READY = 0x044
VIRTIO_MMIO_QUEUE_NOTIFY = 0x050
VIRTIO_MMIO_INTERRUPT_STATUS = 0x060
VIRTIO_MMIO_INTERRUPT_ACK = 0x064
VIRTIO_MMIO_STATUS = 0x070
VIRTIO_MMIO_QUEUE_DESC_LOW = 0x080
VIRTIO_MMIO_QUEUE_DESC_HIGH = 0x084
VIRTIO_MMIO_DRIVER_DESC_LOW = 0x090
VIRTIO_MMIO_DRIVER_DESC_HIGH = 0x094
VIRTIO_MMIO_DEVICE_DESC_LOW = 0x0A0
VIRTIO_MMIO_DEVICE_DESC_HIGH = 0x0A4

# Status register bits.
VIRTIO_CONFIG_S_ACKNOWLEDGE = 1
VIRTIO_CONFIG_S_DRIVER = 2
VIRTIO_CONFIG_S_DRIVER_OK = 4
VIRTIO_CONFIG_S_FEATURES_OK = 8

# Device feature bits.
VIRTIO_BLK_F_RO = 5
VIRTIO_BLK_F_SCSI = 7
VIRTIO_BLK_F_CONFIG_WCE = 11
VIRTIO_BLK_F_MQ = 12
VIRTIO_F_ANY_LAYOUT = 27
VIRTIO_RING_F_INDIRECT_DESC = 28
VIRTIO_RING_F_EVENT_IDX = 29

NUM = 8

VRING_DESC_F_NEXT = 1
VRING_DESC_F_WRITE = 2

VIRTIO_BLK_T_IN = 0
VIRTIO_BLK_T_OUT = 1


def _check_length(data, size, what):
    if len(data) < size:
        raise ValueError(f"need {size} bytes for {what}, got {len(data)}")


@dataclass
class VirtqDesc:
    """A single descriptor."""

    addr: int = 0
    len: int = 0
    flags: int = 0
    next: int = 0

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<QIHH")

    def pack(self):
        return self.STRUCT.pack(self.addr, self.len, self.flags, self.next)

    @classmethod
    def unpack(cls, data):
        _check_length(data, cls.STRUCT.size, "a descriptor")
        return cls(*cls.STRUCT.unpack_from(data))


@dataclass
class VirtqAvail:
    """The available ring written by the driver."""

    flags: int = 0
    idx: int = 0
    ring: Tuple[int, ...] = field(default_factory=lambda: (0,) * NUM)
    unused: int = 0

    STRUCT: ClassVar[struct.Struct] = struct.Struct(f"<HH{NUM}HH")

    def __post_init__(self):
        self.ring = tuple(self.ring)
        if len(self.ring) != NUM:
            raise ValueError(f"avail ring must hold {NUM} entries")

    def pack(self):
        return self.STRUCT.pack(self.flags, self.idx, *self.ring, self.unused)

    @classmethod
    def unpack(cls, data):
        _check_length(data, cls.STRUCT.size, "an avail ring")
        flags, idx, *rest = cls.STRUCT.unpack_from(data)
        return cls(flags, idx, tuple(rest[:NUM]), rest[NUM])


@dataclass
class VirtqUsedElem:
    """One completion entry in the used ring."""

    id: int = 0
    len: int = 0

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<II")

    def pack(self):
        return self.STRUCT.pack(self.id, self.len)

    @classmethod
    def unpack(cls, data):
        _check_length(data, cls.STRUCT.size, "a used element")
        return cls(*cls.STRUCT.unpack_from(data))


@dataclass
class VirtqUsed:
    """The used ring written by the device."""

    flags: int = 0
    idx: int = 0
    ring: Tuple[VirtqUsedElem, ...] = field(
        default_factory=lambda: tuple(VirtqUsedElem() for _ in range(NUM))
    )

    HEAD: ClassVar[struct.Struct] = struct.Struct("<HH")
    SIZE: ClassVar[int] = HEAD.size + NUM * VirtqUsedElem.STRUCT.size

    def __post_init__(self):
        self.ring = tuple(self.ring)
        if len(self.ring) != NUM:
            raise ValueError(f"used ring must hold {NUM} entries")

    def pack(self):
        return self.HEAD.pack(self.flags, self.idx) + b"".join(
            elem.pack() for elem in self.ring
        )

    @classmethod
    def unpack(cls, data):
        _check_length(data, cls.SIZE, "a used ring")
        flags, idx = cls.HEAD.unpack_from(data)
        step = VirtqUsedElem.STRUCT.size
        ring = tuple(
            VirtqUsedElem(*VirtqUsedElem.STRUCT.unpack_from(data, cls.HEAD.size + k * step))
            for k in range(NUM)
        )
        return cls(flags, idx, ring)


@dataclass
class BlkRequest:
    """The first descriptor of a block-device request."""

    type: int = VIRTIO_BLK_T_IN
    reserved: int = 0
    sector: int = 0

    STRUCT: ClassVar[struct.Struct] = struct.Struct("<IIQ")

    def pack(self):
        return self.STRUCT.pack(self.type, self.reserved, self.sector)

    @classmethod
    def unpack(cls, data):
        _check_length(data, cls.STRUCT.size, "a block request")
        return cls(*cls.STRUCT.unpack_from(data))