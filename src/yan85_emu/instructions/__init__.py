# src/yan85_emu/instructions/__init__.py
"""
Yan85命令セット実装パッケージ。
"""
from typing import TYPE_CHECKING

from yan85_emu.common.errors import DecodeError
from .base import Add, Cmp, Imm, Instruction, Jmp, Ldm, Stk, Stm, Sys
from .maps import EXECUTE_MAP

if TYPE_CHECKING:
    from yan85_emu.core.cpu import Yan85Cpu

# @intent:responsibility デコード済みの命令を実行します。
def execute_instruction(cpu: "Yan85Cpu", instruction: Instruction) -> None:
    """
    命令の型に対応する実行関数を呼び出し、CPUの状態を変更します。
    """
    executor = EXECUTE_MAP.get(type(instruction))
    if executor is None:
        raise DecodeError(f"no executor for instruction {instruction!r}")
    executor(cpu, instruction)

__all__ = [
    "Add", "Cmp", "Imm", "Instruction", "Jmp", "Ldm", "Stk", "Stm", "Sys",
    "execute_instruction",
]
