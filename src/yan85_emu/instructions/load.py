# yan85_emu/instructions/load.py
"""
転送・スタック操作命令（IMM, STK, STM, LDM）の実装。
"""
from typing import TYPE_CHECKING

from .base import Imm, Ldm, Stk, Stm

if TYPE_CHECKING:
    from yan85_emu.core.cpu import Yan85Cpu

# --- IMM ---
# @intent:responsibility IMM命令を実行し、即値をレジスタに書き込みます。
def execute_imm(cpu: "Yan85Cpu", op: Imm) -> None:
    cpu.registers.write(op.dst, op.value)

# --- STK ---
# @intent:responsibility STK命令を実行します。pushを先に評価し、その後popします。
# @intent:rationale 両方指定された場合、Sは差し引き変化せず「スタック経由のレジスタ移動」となります。
def execute_stk(cpu: "Yan85Cpu", op: Stk) -> None:
    if op.push_src is not None:
        cpu.stack.push(cpu.registers, cpu.registers.read(op.push_src))
    if op.pop_dst is not None:
        cpu.registers.write(op.pop_dst, cpu.stack.pop(cpu.registers))

# --- STM ---
# @intent:responsibility STM命令を実行し、*addr = value を行います。
def execute_stm(cpu: "Yan85Cpu", op: Stm) -> None:
    cpu.memory.write(cpu.registers.read(op.addr), cpu.registers.read(op.value))

# --- LDM ---
# @intent:responsibility LDM命令を実行し、dst = *addr を行います。
def execute_ldm(cpu: "Yan85Cpu", op: Ldm) -> None:
    cpu.registers.write(op.dst, cpu.memory.read(cpu.registers.read(op.addr)))
