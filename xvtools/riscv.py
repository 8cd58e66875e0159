"""Sv39 paging helpers, physical memory layout and system parameters."""

MASK64 = (1 << 64) - 1

# System parameters.
NPROC = 64
NCPU = 8
NOFILE = 16
NFILE = 100
NINODE = 50
NDEV = 10
ROOTDEV = 1
MAXARG = 32
MAXOPBLOCKS = 10
LOGSIZE = MAXOPBLOCKS * 3
NBUF = MAXOPBLOCKS * 3
FSSIZE = 2000
MAXPATH = 128
USERSTACK = 2

# Machine status register.
MSTATUS_MPP_MASK = 3 << 11
MSTATUS_MPP_M = 3 << 11
MSTATUS_MPP_S = 1 << 11
MSTATUS_MPP_U = 0 << 11
MSTATUS_MIE = 1 << 3

# Supervisor status register.
SSTATUS_SPP = 1 << 8
SSTATUS_SPIE = 1 << 5
SSTATUS_UPIE = 1 << 4
SSTATUS_SIE = 1 << 1
SSTATUS_UIE = 1 << 0

# Supervisor interrupt enable.
SIE_SEIE = 1 << 9
SIE_STIE = 1 << 5
SIE_SSIE = 1 << 1

MIE_STIE = 1 << 5

SATP_SV39 = 8 << 60

PGSIZE = 4096
PGSHIFT = 12

PTE_V = 1 << 0
PTE_R = 1 << 1
PTE_W = 1 << 2
PTE_X = 1 << 3
PTE_U = 1 << 4

PXMASK = 0x1FF

MAXVA = 1 << (9 + 9 + 9 + 12 - 1)

# Physical memory layout of the virt machine.
UART0 = 0x10000000
UART0_IRQ = 10
VIRTIO0 = 0x10001000
VIRTIO0_IRQ = 1
PLIC = 0x0C000000
PLIC_PRIORITY = PLIC + 0x0
PLIC_PENDING = PLIC + 0x1000
KERNBASE = 0x80000000
PHYSTOP = KERNBASE + 128 * 1024 * 1024

TRAMPOLINE = MAXVA - PGSIZE
TRAPFRAME = TRAMPOLINE - PGSIZE


def pg_round_up(sz):
    """Round a size up to the next page boundary."""
    return ((sz + PGSIZE - 1) & ~(PGSIZE - 1)) & MASK64


def pg_round_down(a):
    """Round an address down to its page boundary."""
    return a & ~(PGSIZE - 1) & MASK64


def pa2pte(pa):
    """Shift a physical address into the position it takes in a PTE."""
    return (pa >> 12) << 10


def pte2pa(pte):
    """Extract the physical address held in a PTE."""
    return (pte >> 10) << 12


def pte_flags(pte):
    """Return the low ten flag bits of a PTE."""
    return pte & 0x3FF


def _pxshift(level):
    return PGSHIFT + 9 * level


def px(level, va):
    """Return the 9-bit page-table index of a virtual address at a level."""
    return (va >> _pxshift(level)) & PXMASK


def make_satp(pagetable):
    """Build a satp value selecting Sv39 with the given root table."""
    return (SATP_SV39 | (pagetable >> 12)) & MASK64


def kstack(p):
    """Virtual address of the kernel stack of process slot p."""
    return TRAMPOLINE - (p + 1) * 2 * PGSIZE


def plic_senable(hart):
    """Address of a hart's supervisor interrupt-enable register."""
    return PLIC + 0x2080 + hart * 0x100


def plic_spriority(hart):
    """Address of a hart's supervisor priority threshold register."""
    return PLIC + 0x201000 + hart * 0x2000


def plic_sclaim(hart):
    """Address of a hart's supervisor claim register."""
    return PLIC + 0x201004 + hart * 0x2000