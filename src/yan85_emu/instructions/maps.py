"""
命令型と実装関数のマッピング定義。
"""
from . import load
from . import alu
from . import control
from .base import Add, Cmp, Imm, Jmp, Ldm, Stk, Stm, Sys

# @intent:map 命令型から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Load/Store
    Imm: load.execute_imm,
    Stk: load.execute_stk,
    Stm: load.execute_stm,
    Ldm: load.execute_ldm,

    # ALU
    Add: alu.execute_add,
    Cmp: alu.execute_cmp,

    # Control
    Jmp: control.execute_jmp,
    Sys: control.execute_sys,
}
