# yan85_emu/instructions/control.py
"""
制御命令（JMP, SYS）の実装。
"""
from typing import TYPE_CHECKING

from yan85_emu.common.types import Register
from .base import Jmp, Sys

if TYPE_CHECKING:
    from yan85_emu.core.cpu import Yan85Cpu

# --- JMP ---
# @intent:responsibility JMP命令を実行し、条件マスクがFと重なる場合にIを書き換えます。
# @intent:pre-condition Iはフェッチ時点で既に次の命令を指しているため、不成立時は何もしません。
def execute_jmp(cpu: "Yan85Cpu", op: Jmp) -> None:
    regs = cpu.registers
    if regs.read(Register.F) & op.condition:
        regs.write(Register.I, regs.read(op.target))

# --- SYS ---
# @intent:responsibility SYS命令を実行します。引数は命令のオペランドに関係なく常にA, B, Cから取ります。
def execute_sys(cpu: "Yan85Cpu", op: Sys) -> None:
    regs = cpu.registers
    a = regs.read(Register.A)
    b = regs.read(Register.B)
    c = regs.read(Register.C)
    regs.write(op.result, cpu.syscalls.dispatch(op.syscall, a, b, c))
