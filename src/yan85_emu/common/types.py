"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用されるレジスタ名、フラグ名、システムコール名などを定義します。
"""
from enum import Enum
from typing import Dict, Optional


# @intent:data_structure Yan85の7本のレジスタ。
# @intent:rationale 「オペランドなし」はメンバーとして持たず、Optional[Register] の None で表現します。
class Register(Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    S = "S"  # Stack Pointer
    I = "I"  # Instruction Pointer
    F = "F"  # Flags


# 「オペランドなし」を許容するレジスタ位置（STKのpop/push）の型エイリアス。
OptionalRegister = Optional[Register]

# @intent:constant フラグ名。L(less), G(greater), E(equal), Z(both zero), N(not equal)。
FLAG_NAMES = ("L", "G", "E", "Z", "N")

# @intent:constant システムコール名。
SYSCALL_NAMES = ("OPEN", "READ_CODE", "READ_MEMORY", "WRITE", "SLEEP", "EXIT")

# @intent:constant オペコード名（命令ニーモニック）。
OPCODE_NAMES = ("IMM", "ADD", "STK", "STM", "LDM", "CMP", "JMP", "SYS")

# @intent:constant 生の命令バイト列における各フィールド名。
LAYOUT_FIELDS = ("op", "a", "b")

# 1命令のバイト長
INSTRUCTION_SIZE = 3

# メモリ/スタックのサイズ（8bitアドレス空間）
ADDRESS_SPACE_SIZE = 0x100

# 名前から値への対応表の型エイリアス。
BindingMap = Dict[str, int]
