# yan85_emu/core/state.py
"""
Core Layer (レジスタファイル)

このモジュールは、Yan85の7本の1バイトレジスタを保持するレジスタファイルを定義します。
"""
from typing import Dict, Optional

from yan85_emu.common.errors import InvalidOperand
from yan85_emu.common.types import Register
from yan85_emu.config.models import Constants

# @intent:responsibility 7本の1バイトレジスタを、名前でアドレスされる固定長配列として保持します。
# @intent:rationale 記憶スロットはConstantsで割り当てられたビット値のビット位置（末尾の0の数）で決まります。
#                  Constants側で「1レジスタ1ビット」の不変条件が検証済みであることを前提とします。
class Registers:
    """
    Yan85のレジスタファイル。全て0で初期化されます。
    """
    def __init__(self, constants: Constants):
        self._constants = constants
        self._slots: Dict[Register, int] = {reg: constants.register_slot(reg) for reg in Register}
        self._cells = bytearray(max(self._slots.values()) + 1)

    def _slot(self, register: Optional[Register]) -> int:
        if register is None:
            raise InvalidOperand("a real register is required, got no operand")
        return self._slots[register]

    def read(self, register: Register) -> int:
        return self._cells[self._slot(register)]

    def write(self, register: Register, value: int) -> None:
        slot = self._slot(register)
        if not 0 <= value <= 0xFF:
            raise InvalidOperand(f"Data {value} is not an 8-bit value.")
        self._cells[slot] = value

    # @intent:responsibility トレース表示用に、現在のレジスタ値を辞書形式で返します（コピー）。
    def as_dict(self) -> Dict[str, int]:
        return {reg.value: self._cells[slot] for reg, slot in self._slots.items()}

    # @intent:responsibility Fレジスタ内で立っているフラグを名前で返します。
    def get_flag_state(self) -> Dict[str, bool]:
        f = self.read(Register.F)
        return {name: bool(f & bit) for name, bit in self._constants.flags.items()}

    def __repr__(self) -> str:
        regs = " ".join(f"{name}={value:#04x}" for name, value in self.as_dict().items())
        return f"Registers({regs})"
