# yan85_emu/config/models.py
"""
アーキテクチャ記述（定数テーブル）のデータモデル。

Yan85はレジスタ・フラグ・システムコール・オペコードのビット割り当てが
バイナリごとに異なるため、それらを不変のConstantsオブジェクトとして保持します。
不正な割り当ては実行開始前（構築時）に拒否します。
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from yan85_emu.common.errors import ConstantsError
from yan85_emu.common.types import (
    FLAG_NAMES, LAYOUT_FIELDS, OPCODE_NAMES, SYSCALL_NAMES, Register,
)

# @intent:constant 定数テーブルが指定されない場合の既定値。
DEFAULT_REGISTERS: Dict[str, int] = {
    "A": 0x20, "B": 0x40, "C": 0x08, "D": 0x02, "S": 0x10, "I": 0x04, "F": 0x01,
}
DEFAULT_FLAGS: Dict[str, int] = {
    "L": 0x08, "G": 0x01, "E": 0x04, "Z": 0x02, "N": 0x10,
}
DEFAULT_SYSCALLS: Dict[str, int] = {
    "OPEN": 0x08, "READ_CODE": 0x01, "READ_MEMORY": 0x10,
    "WRITE": 0x04, "SLEEP": 0x02, "EXIT": 0x20,
}
DEFAULT_OPCODES: Dict[str, int] = {
    "IMM": 0x80, "ADD": 0x08, "STK": 0x40, "STM": 0x20,
    "LDM": 0x01, "CMP": 0x04, "JMP": 0x10, "SYS": 0x02,
}
DEFAULT_LAYOUT: Dict[str, int] = {"op": 0, "a": 1, "b": 2}


def _check_keys(section: str, mapping: Mapping[str, int], expected) -> None:
    missing = [name for name in expected if name not in mapping]
    unknown = [name for name in mapping if name not in expected]
    if missing:
        raise ConstantsError(f"{section}: missing entries {', '.join(missing)}")
    if unknown:
        raise ConstantsError(f"{section}: unknown entries {', '.join(unknown)}")


def _check_bytes(section: str, mapping: Mapping[str, int], distinct: bool) -> None:
    seen: Dict[int, str] = {}
    for name, value in mapping.items():
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 0xFF:
            raise ConstantsError(f"{section}: {name} = {value!r} is not a byte value")
        if distinct and value in seen:
            raise ConstantsError(f"{section}: {name} and {seen[value]} share the value {value:#04x}")
        seen[value] = name


# @intent:responsibility アーキテクチャ記述（名前 → ビット値）を不変に保持し、構築時に検証します。
@dataclass(frozen=True)
class Constants:
    """
    Yan85のエンコーディング定数。

    registers: レジスタ名 → 1ビットだけ立ったバイト値（7エントリ、互いに異なる）
    flags:     フラグ名 → バイト値
    syscalls:  システムコール名 → 番号
    opcodes:   命令ニーモニック → オペコード値
    layout:    生の3バイト命令における op / a / b のバイト位置
    """
    registers: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_REGISTERS))
    flags: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_FLAGS))
    syscalls: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_SYSCALLS))
    opcodes: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_OPCODES))
    layout: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_LAYOUT))

    # @intent:pre-condition 全てのテーブルが検証を通過した場合のみインスタンスが生成されます。
    # @intent:rationale frozenなdataclassでも内部のdictは変更可能なため、読み取り専用ビューに置き換えます。
    def __post_init__(self):
        _check_keys("registers", self.registers, [r.value for r in Register])
        _check_bytes("registers", self.registers, distinct=True)
        for name, value in self.registers.items():
            # 記憶位置はビット位置で決まるため、ちょうど1ビットだけ立っている必要がある
            if value == 0 or value & (value - 1):
                raise ConstantsError(f"registers: {name} = {value:#04x} is not a single bit")

        _check_keys("flags", self.flags, FLAG_NAMES)
        _check_bytes("flags", self.flags, distinct=False)
        _check_keys("syscalls", self.syscalls, SYSCALL_NAMES)
        _check_bytes("syscalls", self.syscalls, distinct=True)
        _check_keys("opcodes", self.opcodes, OPCODE_NAMES)
        _check_bytes("opcodes", self.opcodes, distinct=True)

        _check_keys("layout", self.layout, LAYOUT_FIELDS)
        if sorted(self.layout.values()) != [0, 1, 2]:
            raise ConstantsError(f"layout: {dict(self.layout)} is not a permutation of byte positions 0-2")

        for name in ("registers", "flags", "syscalls", "opcodes", "layout"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    # @intent:rationale MappingProxyTypeはハッシュ不可のため、各テーブルの内容からハッシュ値を計算します。
    def __hash__(self):
        return hash(tuple(
            tuple(sorted(getattr(self, name).items()))
            for name in ("registers", "flags", "syscalls", "opcodes", "layout")
        ))

    # @intent:responsibility レジスタの記憶スロット（立っているビットの位置）を返します。
    def register_slot(self, register: Register) -> int:
        return self.registers[register.value].bit_length() - 1

    # @intent:responsibility バイト値からレジスタを逆引きします。0は「オペランドなし」としてNoneを返します。
    def register_for_value(self, value: int) -> Optional[Register]:
        if value == 0:
            return None
        for name, bound in self.registers.items():
            if bound == value:
                return Register(name)
        raise ConstantsError(f"no register is bound to {value:#04x}")

    def opcode_name(self, value: int) -> str:
        for name, bound in self.opcodes.items():
            if bound == value:
                return name
        raise ConstantsError(f"no opcode is bound to {value:#04x}")

    def syscall_name(self, code: int) -> Optional[str]:
        for name, bound in self.syscalls.items():
            if bound == code:
                return name
        return None

    # @intent:responsibility マスクに含まれるフラグ名をFLAG_NAMESの順で返します（逆アセンブル用）。
    def flag_names(self, mask: int) -> List[str]:
        return [name for name in FLAG_NAMES if self.flags[name] & mask]
