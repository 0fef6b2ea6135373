"""
Yan85逆アセンブラモジュール。

デコード済みの命令を、人が読めるアセンブリ表記の文字列に変換します。
"""
from typing import List, Sequence, Tuple

from yan85_emu.common.types import OptionalRegister
from yan85_emu.config.models import Constants
from yan85_emu.instructions.base import Add, Cmp, Imm, Instruction, Jmp, Ldm, Stk, Stm, Sys


def _reg(register: OptionalRegister) -> str:
    return "NONE" if register is None else register.value

# @intent:responsibility 1命令をニーモニック形式の文字列に変換します。
# @intent:rationale フラグ名やシステムコール名はConstantsに依存するため、引数で受け取ります。
def format_instruction(instruction: Instruction, constants: Constants) -> str:
    if isinstance(instruction, Imm):
        return f"IMM {_reg(instruction.dst)} = {instruction.value:#04x}"
    if isinstance(instruction, (Add, Cmp)):
        return f"{instruction.mnemonic} {_reg(instruction.a)} {_reg(instruction.b)}"
    if isinstance(instruction, Stk):
        return f"STK {_reg(instruction.pop_dst)} {_reg(instruction.push_src)}"
    if isinstance(instruction, Stm):
        return f"STM *{_reg(instruction.addr)} = {_reg(instruction.value)}"
    if isinstance(instruction, Ldm):
        return f"LDM {_reg(instruction.dst)} = *{_reg(instruction.addr)}"
    if isinstance(instruction, Jmp):
        # 条件が空の場合は無条件ジャンプにはならない（Fとの積が常に0）
        condition = "".join(constants.flag_names(instruction.condition)) or "-"
        return f"JMP {condition} {_reg(instruction.target)}"
    if isinstance(instruction, Sys):
        name = constants.syscall_name(instruction.syscall) or f"{instruction.syscall:#04x}"
        return f"SYS {name} {_reg(instruction.result)}"
    return repr(instruction)

# @intent:responsibility 命令列を逆アセンブルし、(インデックス, ニーモニック) のタプルリストを返します。
def disassemble(program: Sequence[Instruction], constants: Constants) -> List[Tuple[int, str]]:
    return [(index, format_instruction(ins, constants)) for index, ins in enumerate(program)]
