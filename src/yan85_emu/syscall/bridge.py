# yan85_emu/syscall/bridge.py
"""
システムコールブリッジ。

SYS命令のシステムコール番号を、ホスト側のファイル操作・スリープ・終了処理に対応付けます。
引数は常に A(第1) / B(第2) / C(第3) レジスタの値として渡されます。
"""
import logging
import os
import time
from typing import Callable, Dict, List

from yan85_emu.common.errors import (
    FileDescriptorOverflow, Halt, HostIoError, OutOfBounds, UnsupportedSyscall,
)
from yan85_emu.common.types import INSTRUCTION_SIZE
from yan85_emu.config.models import Constants
from yan85_emu.instructions.base import Instruction
from yan85_emu.loader.decoder import decode_program
from yan85_emu.transport.memory import Memory

logger = logging.getLogger(__name__)

# READ_CODEで読み込んだ命令をプログラムへ書き込むコールバック (start, instructions)
CodeWriter = Callable[[int, List[Instruction]], None]
# 配置先 (start, count) が範囲内かを確認し、範囲外ならOutOfBoundsを送出するコールバック
CodeChecker = Callable[[int, int], None]

# @intent:responsibility システムコールを実行し、ホストのファイル記述子の所有権を管理します。
# @intent:rationale OPENで得た記述子は、後続のREAD/WRITEでホストと同じ番号を使い続けるため、
#                  実行中は閉じずに所有テーブルで保持します。close_all()で明示的に解放します。
class SyscallBridge:
    """
    Yan85のシステムコールをホストOSの操作に橋渡しするクラス。
    """
    def __init__(self, constants: Constants, memory: Memory, write_code: CodeWriter, check_code: CodeChecker):
        self._constants = constants
        self._memory = memory
        self._write_code = write_code
        self._check_code = check_code
        # ホスト記述子 → パス。エミュレートされたプログラムがOPENで取得したもののみ。
        self._descriptors: Dict[int, str] = {}
        self._handlers: Dict[int, Callable[[int, int, int], int]] = {
            constants.syscalls["OPEN"]: lambda a, b, c: self.open(a),
            constants.syscalls["READ_CODE"]: self.read_code,
            constants.syscalls["READ_MEMORY"]: self.read_memory,
            constants.syscalls["WRITE"]: self.write,
            constants.syscalls["SLEEP"]: lambda a, b, c: self.sleep(a),
            constants.syscalls["EXIT"]: lambda a, b, c: self.exit(a),
        }

    @property
    def descriptors(self) -> Dict[int, str]:
        """
        現在所有しているホスト記述子のコピーを返します。
        """
        return dict(self._descriptors)

    # @intent:responsibility システムコール番号に対応する処理を呼び出し、戻り値（1バイト）を返します。
    # @intent:post-condition 未対応の番号は黙って無視せず、UnsupportedSyscallを送出します。
    def dispatch(self, code: int, a: int, b: int, c: int) -> int:
        handler = self._handlers.get(code)
        if handler is None:
            raise UnsupportedSyscall(code)
        logger.debug("syscall %s(%#04x, %#04x, %#04x)", self._constants.syscall_name(code), a, b, c)
        return handler(a, b, c)

    # --- OPEN ---
    def open(self, path_address: int) -> int:
        """
        メモリ上のpath_addressから始まるNUL終端文字列をパスとして、ホストのファイルを読み込み用に開きます。
        """
        path = os.fsdecode(self._memory.read_c_string(path_address))
        try:
            fd = os.open(path, os.O_RDONLY)
        except OSError as e:
            raise HostIoError(f"open({path!r}) failed: {e.strerror}", e.errno) from e

        if fd > 0xFF:
            os.close(fd)
            raise FileDescriptorOverflow(fd)

        self._descriptors[fd] = path
        logger.debug("opened %r as fd %d", path, fd)
        return fd

    # --- READ_CODE ---
    def read_code(self, fd: int, start: int, count: int) -> int:
        """
        fdから最大count個の命令を読み込み、デコードしてプログラムのstart番目から配置します。
        読み込んだ命令数を返します。
        """
        # 範囲外の場合はホストから読み込む前に失敗させ、記述子のデータを消費しない
        self._check_code(start, count)
        data = self._read_host(fd, count * INSTRUCTION_SIZE)
        instructions = decode_program(data, self._constants)
        self._write_code(start, instructions)
        return len(instructions)

    # --- READ_MEMORY ---
    def read_memory(self, fd: int, start: int, count: int) -> int:
        """
        fdから最大countバイトをメモリのstart番地から読み込みます。実際に読み込んだバイト数（EOFでは0）を返します。
        """
        if start + count > self._memory.get_size():
            raise OutOfBounds(f"read of {count} bytes at {start:#04x} exceeds memory")
        data = self._read_host(fd, count)
        self._memory.write_range(start, data)
        return len(data)

    # --- WRITE ---
    # @intent:rationale 書き込み元は常にメインメモリとします（スタック領域からは読みません）。
    def write(self, fd: int, start: int, size: int) -> int:
        """
        メモリのstart番地からsizeバイトをfdへ書き込みます。書き込んだバイト数を返します。
        """
        data = self._memory.read_range(start, size)
        try:
            return os.write(fd, data)
        except OSError as e:
            raise HostIoError(f"write to fd {fd} failed: {e.strerror}", e.errno) from e

    # --- SLEEP ---
    # @intent:rationale ブロッキングスリープであり、キャンセルやタイムアウトはありません。
    def sleep(self, seconds: int) -> int:
        time.sleep(seconds)
        return 0

    # --- EXIT ---
    def exit(self, code: int) -> int:
        """
        プログラムを終了させます。ホストプロセスは終了せず、Haltを送出して呼び出し元へ伝えます。
        """
        raise Halt(code)

    def _read_host(self, fd: int, count: int) -> bytes:
        try:
            return os.read(fd, count)
        except OSError as e:
            raise HostIoError(f"read from fd {fd} failed: {e.strerror}", e.errno) from e

    # @intent:responsibility OPENで取得した全ての記述子を閉じます。プログラムが開いていない記述子（0, 1, 2など）は閉じません。
    def close_all(self) -> None:
        while self._descriptors:
            fd, path = self._descriptors.popitem()
            try:
                os.close(fd)
            except OSError as e:
                logger.warning("failed to close fd %d (%s): %s", fd, path, e)
