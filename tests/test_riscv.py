import pytest

from xvtools import riscv


def test_memory_layout_fixed_addresses():
    assert riscv.pg_round_up(riscv.TRAPFRAME + 1) == 0x3FFFFFF000
    assert riscv.pg_round_down(riscv.TRAMPOLINE + 1) == 0x3FFFFFF000
    assert riscv.kstack(0) + 2 * riscv.PGSIZE == 0x3FFFFFF000
    assert [riscv.px(level, riscv.TRAMPOLINE) for level in range(3)] == [511, 511, 255]
    assert [riscv.px(level, riscv.KERNBASE) for level in range(3)] == [0, 0, 2]


def test_params_for_util_lab():
    assert riscv.pg_round_up(riscv.USERSTACK * riscv.PGSIZE - 1) == 2 * riscv.PGSIZE
    assert riscv.pg_round_down(riscv.NBUF * riscv.PGSIZE) == 30 * riscv.PGSIZE


@pytest.mark.parametrize("sz", [0, 1, 4095, 4096, 4097, 123456])
def test_pg_round_up_invariants(sz):
    r = riscv.pg_round_up(sz)
    assert r % riscv.PGSIZE == 0
    assert sz <= r < sz + riscv.PGSIZE


def test_pg_round_up_exact():
    assert riscv.pg_round_up(0) == 0
    assert riscv.pg_round_up(1) == riscv.PGSIZE
    assert riscv.pg_round_up(riscv.PGSIZE) == riscv.PGSIZE


@pytest.mark.parametrize("a", [0, 1, 4095, 4096, 8191, 0x80001234])
def test_pg_round_down_invariants(a):
    r = riscv.pg_round_down(a)
    assert r % riscv.PGSIZE == 0
    assert r <= a < r + riscv.PGSIZE


@pytest.mark.parametrize("pa", [0, riscv.KERNBASE, riscv.PHYSTOP - riscv.PGSIZE])
def test_pte_round_trip(pa):
    pte = riscv.pa2pte(pa) | riscv.PTE_V | riscv.PTE_R | riscv.PTE_W
    assert riscv.pte2pa(pte) == pa
    assert riscv.pte_flags(pte) == riscv.PTE_V | riscv.PTE_R | riscv.PTE_W


@pytest.mark.parametrize("va", [0, 0x1234, riscv.KERNBASE + 0x5678, riscv.TRAMPOLINE])
def test_px_indices_rebuild_address(va):
    indices = [riscv.px(level, va) for level in range(3)]
    assert all(0 <= i <= riscv.PXMASK for i in indices)
    rebuilt = sum(i << (riscv.PGSHIFT + 9 * level) for level, i in enumerate(indices))
    assert rebuilt + (va & (riscv.PGSIZE - 1)) == va


def test_make_satp():
    satp = riscv.make_satp(riscv.KERNBASE)
    assert satp >> 60 == 8
    assert satp & ((1 << 44) - 1) == riscv.KERNBASE >> 12


def test_kstack_guard_pages():
    assert riscv.kstack(0) == riscv.TRAMPOLINE - 2 * riscv.PGSIZE
    assert riscv.kstack(0) - riscv.kstack(1) == 2 * riscv.PGSIZE


def test_plic_registers():
    assert riscv.plic_senable(0) == riscv.PLIC + 0x2080
    assert riscv.plic_senable(1) - riscv.plic_senable(0) == 0x100
    assert riscv.plic_sclaim(2) - riscv.plic_spriority(2) == 4
    assert riscv.plic_spriority(1) - riscv.plic_spriority(0) == 0x2000