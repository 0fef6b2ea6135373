# yan85_emu/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1ステップ実行後のレジスタ・メモリアクセスの状態を記録した
不変のデータ構造を定義します。トレース出力と、テスト時の状態検証に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from yan85_emu.instructions.base import Instruction
from yan85_emu.transport.memory import MemoryAccess

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計ステップ数、逆アセンブル結果など）を記録するデータクラス。
    """
    step_count: int
    index: int # 命令のプログラム内インデックス（フェッチ時のI）
    disassembly: str = ""

# @intent:responsibility ある一時点におけるレジスタと、そのステップのメモリアクセスを不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    1命令実行直後の状態を記録した不変のデータ構造。
    registersは実行後のレジスタ値のコピーであり、以後のステップで変化しません。
    """
    registers: Dict[str, int]
    instruction: Instruction
    metadata: Metadata
    memory_activity: List[MemoryAccess] = field(default_factory=list)
    exit_code: Optional[int] = None # EXITシステムコールで終了した場合のみ設定

    @property
    def halted(self) -> bool:
        return self.exit_code is not None
