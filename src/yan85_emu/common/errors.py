# yan85_emu/common/errors.py
"""
エミュレータ例外の定義。

1ステップの実行中に発生し得る全ての失敗をここで型として定義します。
エンジン内部では回復処理を行わず、呼び出し元（ドライバ）がどう扱うかを決めます。
"""
from typing import Optional


# @intent:responsibility 全てのエミュレータ失敗の基底クラス。
class Yan85Error(Exception):
    """
    Yan85エミュレータが送出する全てのエラーの基底クラス。
    """


# @intent:responsibility 命令バイト列や定数テーブルのバインディング不正を表します。
class DecodeError(Yan85Error):
    """
    不正なオペコード・レジスタ・フラグのバインディングを検出した場合に送出されます。
    """


# @intent:responsibility 定数テーブルそのものの不正（構築時に検出）を表します。
class ConstantsError(DecodeError):
    """
    不正なConstants（重複ビット、2の冪でないレジスタ値など）を表します。
    """


# @intent:responsibility メモリ/スタックの範囲外アクセスを表します。
# @intent:rationale 既存コードとの互換のため、IndexErrorとしても捕捉できるようにします。
class OutOfBounds(Yan85Error, IndexError):
    pass


class StackOverflow(Yan85Error):
    pass


class StackUnderflow(Yan85Error):
    pass


# @intent:responsibility 実レジスタが必要な位置で「オペランドなし」が使われたことを表します。
class InvalidOperand(Yan85Error, ValueError):
    pass


class UnsupportedSyscall(Yan85Error):
    def __init__(self, code: int):
        super().__init__(f"unsupported syscall: {code:#04x}")
        self.code = code


# @intent:responsibility ホストのファイル記述子が1バイトに収まらないことを表します。
class FileDescriptorOverflow(Yan85Error):
    def __init__(self, fd: int):
        super().__init__(f"host file descriptor {fd} does not fit in a byte")
        self.fd = fd


# @intent:responsibility ホストI/Oの失敗をラップします。元のOSErrorは__cause__に保持されます。
class HostIoError(Yan85Error):
    """
    ホスト側のファイル操作（open/read/write）が失敗した場合に送出されます。
    """
    def __init__(self, message: str, errno: Optional[int] = None):
        super().__init__(message)
        self.errno = errno


# @intent:responsibility 命令ポインタがプログラム長を超えたことを表します。
class ProgramCounterOutOfRange(Yan85Error, IndexError):
    def __init__(self, pc: int, length: int):
        super().__init__(f"instruction pointer {pc:#04x} is outside the program ({length} instructions)")
        self.pc = pc
        self.length = length


class StepLimitExceeded(Yan85Error):
    def __init__(self, max_steps: int):
        super().__init__(f"program did not halt within {max_steps} steps")
        self.max_steps = max_steps


# @intent:responsibility EXITシステムコールによる正常終了を表します。
# @intent:rationale Yan85Errorを継承しないため、「正常終了」と「エミュレータの異常」を型で区別できます。
class Halt(Exception):
    """
    EXITシステムコールによってプログラムが終了したことを表す終端結果。
    エラーではありません。
    """
    def __init__(self, code: int):
        super().__init__(f"program halted with exit code {code}")
        self.code = code
