# yan85_emu/instructions/base.py
"""
Yan85命令の型定義。

8種類のオペコードそれぞれを不変のデータクラスとして表現します。
デコード後の命令は変更されず、実行エンジンが順序付きのシーケンスとして保持します。
"""
from dataclasses import dataclass
from typing import ClassVar

from yan85_emu.common.errors import InvalidOperand
from yan85_emu.common.types import OptionalRegister, Register


def _check_byte(mnemonic: str, field: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise InvalidOperand(f"{mnemonic} {field} must be a byte value, got {value}")

# @intent:responsibility 全命令の基底クラス。mnemonicでオペコードを識別します。
@dataclass(frozen=True)
class Instruction:
    mnemonic: ClassVar[str] = ""

# @intent:responsibility IMM: dst := value
@dataclass(frozen=True)
class Imm(Instruction):
    mnemonic: ClassVar[str] = "IMM"
    dst: Register
    value: int

    def __post_init__(self):
        _check_byte(self.mnemonic, "value", self.value)

# @intent:responsibility ADD: a := (a + b) mod 256
@dataclass(frozen=True)
class Add(Instruction):
    mnemonic: ClassVar[str] = "ADD"
    a: Register
    b: Register

# @intent:responsibility STK: push_srcをpushしてから、pop_dstへpopします。どちらもNone（オペランドなし）を取り得ます。
@dataclass(frozen=True)
class Stk(Instruction):
    mnemonic: ClassVar[str] = "STK"
    pop_dst: OptionalRegister
    push_src: OptionalRegister

# @intent:responsibility STM: memory[addr] := value （間接ストア）
@dataclass(frozen=True)
class Stm(Instruction):
    mnemonic: ClassVar[str] = "STM"
    addr: Register
    value: Register

# @intent:responsibility LDM: dst := memory[addr] （間接ロード）
@dataclass(frozen=True)
class Ldm(Instruction):
    mnemonic: ClassVar[str] = "LDM"
    dst: Register
    addr: Register

# @intent:responsibility CMP: aとbを比較し、Fレジスタを再計算します。
@dataclass(frozen=True)
class Cmp(Instruction):
    mnemonic: ClassVar[str] = "CMP"
    a: Register
    b: Register

# @intent:responsibility JMP: F & condition != 0 の場合に I := target
@dataclass(frozen=True)
class Jmp(Instruction):
    mnemonic: ClassVar[str] = "JMP"
    condition: int
    target: Register

    def __post_init__(self):
        _check_byte(self.mnemonic, "condition", self.condition)

# @intent:responsibility SYS: システムコールを実行し、戻り値をresultへ格納します。
@dataclass(frozen=True)
class Sys(Instruction):
    mnemonic: ClassVar[str] = "SYS"
    syscall: int
    result: Register

    def __post_init__(self):
        _check_byte(self.mnemonic, "syscall", self.syscall)
