# yan85_emu/transport/memory.py
"""
Transport Layer (メモリとスタック)

このモジュールは、Yan85の256バイトのフラットなメモリ空間と、
S レジスタで指されるもう一つの256バイト空間（スタック）を提供します。
エンジンからの全てのアクセスを記録し、Snapshotに含める責務も負います。
"""
from dataclasses import dataclass
from enum import Enum
from typing import List

from yan85_emu.common.errors import OutOfBounds, StackOverflow, StackUnderflow
from yan85_emu.common.types import ADDRESS_SPACE_SIZE, Register
from yan85_emu.core.state import Registers

# @intent:responsibility アクセスを記録するためのタイプを定義します。
class AccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のメモリ/スタックアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class MemoryAccess:
    """
    メモリまたはスタック上で行われた単一のアクセスを記録するデータクラス。
    """
    space: str # "memory" or "stack"
    address: int
    data: int # 8bit value
    access_type: AccessType

# @intent:responsibility 8bitアドレスで指定される256バイトの記憶領域を提供します。
class Memory:
    """
    Yan85のメインメモリ。256個の1バイトセルからなり、0で初期化されます。
    """
    space = "memory"

    def __init__(self, size: int = ADDRESS_SPACE_SIZE):
        if not isinstance(size, int) or size <= 0:
            raise ValueError(f"{type(self).__name__} size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size
        self._activity_log: List[MemoryAccess] = []

    def _check_address(self, address: int) -> None:
        if not 0 <= address < self._size:
            raise OutOfBounds(f"Address {address} out of bounds for {self.space} of size {self._size}.")

    # @intent:responsibility 範囲アクセスが領域内に収まることを確認します。
    # @intent:pre-condition start + length <= size であること。超える場合はOutOfBoundsを送出します。
    def _check_range(self, start: int, length: int) -> None:
        if start < 0 or length < 0 or start + length > self._size:
            raise OutOfBounds(
                f"Range {start:#04x}+{length} out of bounds for {self.space} of size {self._size}."
            )

    def _log_access(self, address: int, data: int, access_type: AccessType) -> None:
        self._activity_log.append(MemoryAccess(self.space, address, data, access_type))

    # @intent:responsibility 記録されたアクセスログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[MemoryAccess]:
        log = self._activity_log
        self._activity_log = []
        return log

    def read(self, address: int) -> int:
        self._check_address(address)
        data = self._memory[address]
        self._log_access(address, data, AccessType.READ)
        return data

    def write(self, address: int, data: int) -> None:
        self._check_address(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data
        self._log_access(address, data, AccessType.WRITE)

    # @intent:responsibility ログを記録せずに値を読み出します。テストやトレース表示用。
    def peek(self, address: int) -> int:
        self._check_address(address)
        return self._memory[address]

    def read_range(self, start: int, length: int) -> bytes:
        self._check_range(start, length)
        data = bytes(self._memory[start:start + length])
        for offset, value in enumerate(data):
            self._log_access(start + offset, value, AccessType.READ)
        return data

    def write_range(self, start: int, data: bytes) -> None:
        self._check_range(start, len(data))
        self._memory[start:start + len(data)] = data
        for offset, value in enumerate(data):
            self._log_access(start + offset, value, AccessType.WRITE)

    # @intent:responsibility 実行前の初期データを配置するためのバックドアメソッドです（ログなし）。
    def load(self, start: int, data: bytes) -> None:
        self._check_range(start, len(data))
        self._memory[start:start + len(data)] = data

    # @intent:responsibility startから最初のNULバイトの手前まで（またはメモリ末尾まで）を読み出します。
    def read_c_string(self, start: int) -> bytes:
        self._check_address(start)
        end = self._memory.find(0, start)
        if end == -1:
            end = self._size
        return self.read_range(start, end - start)

    def get_size(self) -> int:
        return self._size

# @intent:responsibility Sレジスタでアドレスされるスタック領域を提供し、push/popを実装します。
# @intent:rationale 既定ではオーバーフロー/アンダーフローを例外として検出します。
#                  wrap=Trueの場合のみ、Sを256で折り返す従来の挙動を再現します。
class Stack(Memory):
    """
    Yan85のスタック。メインメモリとは独立した256バイトの領域で、push時に上位方向へ伸びます。
    """
    space = "stack"

    def __init__(self, size: int = ADDRESS_SPACE_SIZE, wrap: bool = False):
        super().__init__(size)
        self.wrap = wrap

    # @intent:responsibility 現在のSの位置に値を書き込み、Sを1進めます。
    # @intent:post-condition 例外送出時はスタックもSも変更されません。
    def push(self, registers: Registers, value: int) -> None:
        sp = registers.read(Register.S)
        if sp + 1 > 0xFF and not self.wrap:
            raise StackOverflow(f"push with stack pointer at {sp:#04x} would overflow the stack")
        self.write(sp, value)
        registers.write(Register.S, (sp + 1) & 0xFF)

    # @intent:responsibility Sを1戻し、その位置の値を読み出します。
    def pop(self, registers: Registers) -> int:
        sp = registers.read(Register.S)
        if sp == 0 and not self.wrap:
            raise StackUnderflow("pop with an empty stack")
        sp = (sp - 1) & 0xFF
        registers.write(Register.S, sp)
        return self.read(sp)
