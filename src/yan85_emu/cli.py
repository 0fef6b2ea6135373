# yan85_emu/cli.py
"""
コマンドラインのエントリポイント。
バイトコードファイルと定数テーブルを読み込み、エミュレータを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from yan85_emu.common.errors import Yan85Error
from yan85_emu.config.loader import ConstantsLoader
from yan85_emu.config.models import Constants
from yan85_emu.core.cpu import Yan85Cpu
from yan85_emu.disassembler import format_instruction
from yan85_emu.loader.decoder import decode_program


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="yan85-emu", description="Run a Yan85 bytecode program.")
    parser.add_argument("program", help="path to the raw bytecode file (3 bytes per instruction)")
    parser.add_argument("-c", "--constants", help="YAML file with the register/flag/syscall/opcode bindings")
    parser.add_argument("-d", "--disassemble", action="store_true", help="print each instruction before it executes")
    parser.add_argument("--wrap-stack", action="store_true", help="let the stack pointer wrap instead of failing")
    parser.add_argument("--max-steps", type=int, default=None, help="abort after this many instructions")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser

# @intent:responsibility 引数を解析してエミュレーションを実行し、Haltの終了コードを返します。
# @intent:rationale エミュレータの異常（Yan85Error）は診断を表示して終了コード1とし、正常終了と区別します。
def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        constants = ConstantsLoader().load_from_file(args.constants) if args.constants else Constants()
        with open(args.program, 'rb') as f:
            program = decode_program(f.read(), constants)
    except (OSError, Yan85Error) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    observer = None
    if args.disassemble:
        observer = lambda instruction: print(format_instruction(instruction, constants), flush=True)

    with Yan85Cpu(constants, program, wrap_stack=args.wrap_stack, observer=observer) as cpu:
        try:
            return cpu.run(max_steps=args.max_steps)
        except Yan85Error as e:
            print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
            print(f"Registers: {cpu.registers!r}", file=sys.stderr)
            return 1

# @intent:responsibility プロセスのエントリポイント。
def main():
    sys.exit(run())

if __name__ == '__main__':
    main()
