# yan85_emu/instructions/alu.py
"""
算術・比較命令（ADD, CMP）の実装。
"""
from typing import TYPE_CHECKING

from yan85_emu.common.types import Register
from yan85_emu.config.models import Constants
from .base import Add, Cmp

if TYPE_CHECKING:
    from yan85_emu.core.cpu import Yan85Cpu

# @intent:utility_function 2つの値の比較結果からFレジスタの値を計算します。
# @intent:rationale 以前のFとはORせず、毎回ゼロから計算します。
def compute_flags(constants: Constants, a: int, b: int) -> int:
    f = constants.flags
    flags = 0
    if a < b:
        flags |= f["L"] | f["N"]
    elif a > b:
        flags |= f["G"] | f["N"]
    else:
        flags |= f["E"]
    if a == 0 and b == 0:
        flags |= f["Z"]
    return flags

# --- ADD ---
# @intent:responsibility ADD命令を実行します。オーバーフローは折り返し、フラグは変化しません。
def execute_add(cpu: "Yan85Cpu", op: Add) -> None:
    regs = cpu.registers
    regs.write(op.a, (regs.read(op.a) + regs.read(op.b)) & 0xFF)

# --- CMP ---
# @intent:responsibility CMP命令を実行し、比較結果をFレジスタに格納します。
def execute_cmp(cpu: "Yan85Cpu", op: Cmp) -> None:
    regs = cpu.registers
    regs.write(Register.F, compute_flags(cpu.constants, regs.read(op.a), regs.read(op.b)))
