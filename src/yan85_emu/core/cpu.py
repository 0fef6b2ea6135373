# yan85_emu/core/cpu.py
"""
Core Layer (Yan85 CPU)

このモジュールは、Yan85の実行エンジン（フェッチ → I更新 → 観測 → ディスパッチ）を提供します。
具体的な命令の振る舞いはinstructionsパッケージに、ホストI/OはSyscallBridgeに移譲されます。
"""
import logging
from typing import Callable, Dict, List, Optional, Sequence

from yan85_emu.common.errors import Halt, OutOfBounds, ProgramCounterOutOfRange, StepLimitExceeded
from yan85_emu.common.types import ADDRESS_SPACE_SIZE, Register
from yan85_emu.config.models import Constants
from yan85_emu.core.snapshot import Metadata, Snapshot
from yan85_emu.core.state import Registers
from yan85_emu.disassembler import format_instruction
from yan85_emu.instructions import Instruction, execute_instruction
from yan85_emu.syscall.bridge import SyscallBridge
from yan85_emu.transport.memory import Memory, Stack

logger = logging.getLogger(__name__)

# フェッチした命令を実行前に受け取るコールバック（逆アセンブル表示など）
Observer = Callable[[Instruction], None]

# @intent:responsibility Yan85 CPUのエミュレーションロジック（フェッチ、実行、スナップショット生成）を提供します。
class Yan85Cpu:
    """
    Yan85 CPUをエミュレートするクラス。
    レジスタ・メモリ・スタック・Constantsはインスタンスごとに独立して所有されます。
    """
    # @intent:responsibility CPUの状態とプログラムを初期化します。
    # @intent:pre-condition constantsは構築時に検証済みであるため、不正な定義はここに到達しません。
    def __init__(
        self,
        constants: Constants,
        program: Sequence[Instruction],
        memory: Optional[Memory] = None,
        wrap_stack: bool = False,
        observer: Optional[Observer] = None,
    ):
        self.constants = constants
        self._program: List[Instruction] = list(program)
        self.registers = Registers(constants)
        self.memory = memory if memory is not None else Memory()
        self.stack = Stack(wrap=wrap_stack)
        self.syscalls = SyscallBridge(constants, self.memory, self.write_code, self.check_code_placement)
        self._observer = observer
        self._step_count = 0
        self._halt: Optional[Halt] = None

    @property
    def program(self) -> List[Instruction]:
        return list(self._program)

    @property
    def halted(self) -> bool:
        return self._halt is not None

    @property
    def exit_code(self) -> Optional[int]:
        return self._halt.code if self._halt is not None else None

    def get_register_map(self) -> Dict[str, int]:
        return self.registers.as_dict()

    # @intent:responsibility プログラムのstart番目から命令を書き込みます（READ_CODEシステムコール用）。
    # @intent:pre-condition startは現在のプログラム長以下であり、書き込み後の長さは256を超えないこと。
    def write_code(self, start: int, instructions: List[Instruction]) -> None:
        self.check_code_placement(start, len(instructions))
        self._program[start:start + len(instructions)] = instructions

    # @intent:responsibility start番目からcount個の命令を配置できるかを、ホストから読み込む前に確認します。
    def check_code_placement(self, start: int, count: int) -> None:
        if start > len(self._program) or start + count > ADDRESS_SPACE_SIZE:
            raise OutOfBounds(
                f"cannot place {count} instructions at {start:#04x} "
                f"in a program of {len(self._program)} instructions"
            )

    # @intent:responsibility I が指す命令をフェッチします。
    def _fetch(self) -> Instruction:
        pc = self.registers.read(Register.I)
        if pc >= len(self._program):
            raise ProgramCounterOutOfRange(pc, len(self._program))
        return self._program[pc]

    # @intent:responsibility CPUを1命令進め、その結果のスナップショットを返します。
    # @intent:flow フェッチ -> I更新 -> 観測者への通知 -> 実行 -> スナップショット生成 の順序で処理を行います。
    def step(self) -> Snapshot:
        """
        1命令を実行し、実行後の状態を記録したSnapshotを返します。
        EXITシステムコールを実行した場合、Snapshot.exit_codeが設定され、以後のstep()はHaltを送出します。
        エミュレータの異常はYan85Errorとしてそのまま送出されます。
        """
        if self._halt is not None:
            raise self._halt

        # 前サイクルまでの残存ログを破棄
        self.memory.get_and_clear_activity_log()
        self.stack.get_and_clear_activity_log()

        index = self.registers.read(Register.I)
        instruction = self._fetch()
        self.registers.write(Register.I, (index + 1) & 0xFF)

        if self._observer is not None:
            self._observer(instruction)

        exit_code = None
        try:
            execute_instruction(self, instruction)
        except Halt as halt:
            self._halt = halt
            exit_code = halt.code

        self._step_count += 1
        disassembly = format_instruction(instruction, self.constants)
        logger.debug("%#04x: %s %r", index, disassembly, self.registers)

        return Snapshot(
            registers=self.registers.as_dict(),
            instruction=instruction,
            metadata=Metadata(step_count=self._step_count, index=index, disassembly=disassembly),
            memory_activity=self.memory.get_and_clear_activity_log() + self.stack.get_and_clear_activity_log(),
            exit_code=exit_code,
        )

    # @intent:responsibility Haltになるまで命令を実行し、終了コードを返します。
    def run(self, max_steps: Optional[int] = None) -> int:
        """
        プログラムがEXITするまで実行を続け、終了コードを返します。
        max_stepsを超えても終了しない場合はStepLimitExceededを送出します。
        """
        while self._halt is None:
            if max_steps is not None and self._step_count >= max_steps:
                raise StepLimitExceeded(max_steps)
            self.step()
        return self._halt.code

    # @intent:responsibility プログラムがOPENで開いたホスト記述子を解放します。
    def close(self) -> None:
        self.syscalls.close_all()

    def __enter__(self) -> "Yan85Cpu":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
