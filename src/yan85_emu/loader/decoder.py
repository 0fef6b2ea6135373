# yan85_emu/loader/decoder.py
"""
命令デコーダモジュール。

3バイトの生の命令列を、Constantsのバイト配置とビット割り当てに従って
Instructionオブジェクトへ変換します（およびその逆変換）。
プログラムのロードとREAD_CODEシステムコールの両方がこのデコーダを使用します。
"""
from typing import Callable, Dict, List

from yan85_emu.common.errors import ConstantsError, DecodeError
from yan85_emu.common.types import INSTRUCTION_SIZE, OptionalRegister, Register
from yan85_emu.config.models import Constants
from yan85_emu.instructions.base import Add, Cmp, Imm, Instruction, Jmp, Ldm, Stk, Stm, Sys


def _register(constants: Constants, value: int) -> OptionalRegister:
    try:
        return constants.register_for_value(value)
    except ConstantsError as e:
        raise DecodeError(str(e)) from e


def _required_register(constants: Constants, value: int, mnemonic: str) -> Register:
    register = _register(constants, value)
    if register is None:
        raise DecodeError(f"{mnemonic}: register operand is required")
    return register


def _decode_imm(c: Constants, a: int, b: int) -> Instruction:
    return Imm(_required_register(c, a, "IMM"), b)

def _decode_add(c: Constants, a: int, b: int) -> Instruction:
    return Add(_required_register(c, a, "ADD"), _required_register(c, b, "ADD"))

def _decode_stk(c: Constants, a: int, b: int) -> Instruction:
    return Stk(_register(c, a), _register(c, b))

def _decode_stm(c: Constants, a: int, b: int) -> Instruction:
    return Stm(_required_register(c, a, "STM"), _required_register(c, b, "STM"))

def _decode_ldm(c: Constants, a: int, b: int) -> Instruction:
    return Ldm(_required_register(c, a, "LDM"), _required_register(c, b, "LDM"))

def _decode_cmp(c: Constants, a: int, b: int) -> Instruction:
    return Cmp(_required_register(c, a, "CMP"), _required_register(c, b, "CMP"))

def _decode_jmp(c: Constants, a: int, b: int) -> Instruction:
    return Jmp(a, _required_register(c, b, "JMP"))

def _decode_sys(c: Constants, a: int, b: int) -> Instruction:
    return Sys(a, _required_register(c, b, "SYS"))

# @intent:map ニーモニックからデコード関数へのマッピングテーブル。
DECODE_MAP: Dict[str, Callable[[Constants, int, int], Instruction]] = {
    "IMM": _decode_imm,
    "ADD": _decode_add,
    "STK": _decode_stk,
    "STM": _decode_stm,
    "LDM": _decode_ldm,
    "CMP": _decode_cmp,
    "JMP": _decode_jmp,
    "SYS": _decode_sys,
}

# @intent:responsibility 3バイトの生の命令を1つのInstructionにデコードします。
# @intent:pre-condition rawの長さはINSTRUCTION_SIZEであること。
def decode_instruction(raw: bytes, constants: Constants) -> Instruction:
    if len(raw) != INSTRUCTION_SIZE:
        raise DecodeError(f"an instruction is {INSTRUCTION_SIZE} bytes, got {len(raw)}")

    layout = constants.layout
    op, a, b = raw[layout["op"]], raw[layout["a"]], raw[layout["b"]]
    try:
        mnemonic = constants.opcode_name(op)
    except ConstantsError as e:
        raise DecodeError(f"unknown opcode {op:#04x} in {raw.hex()}") from e
    return DECODE_MAP[mnemonic](constants, a, b)

# @intent:responsibility バイト列全体を命令列にデコードします。
# @intent:post-condition 末尾に不完全な命令が残る場合はDecodeErrorを送出します。
def decode_program(data: bytes, constants: Constants) -> List[Instruction]:
    if len(data) % INSTRUCTION_SIZE:
        raise DecodeError(
            f"program length {len(data)} is not a multiple of the instruction size ({INSTRUCTION_SIZE})"
        )
    return [
        decode_instruction(data[i:i + INSTRUCTION_SIZE], constants)
        for i in range(0, len(data), INSTRUCTION_SIZE)
    ]


def _register_value(constants: Constants, register: OptionalRegister) -> int:
    return 0 if register is None else constants.registers[register.value]

# @intent:responsibility Instructionを3バイトの生の命令へエンコードします（テストやプログラム生成用）。
def encode_instruction(instruction: Instruction, constants: Constants) -> bytes:
    reg = lambda r: _register_value(constants, r)
    if isinstance(instruction, Imm):
        a, b = reg(instruction.dst), instruction.value
    elif isinstance(instruction, (Add, Cmp)):
        a, b = reg(instruction.a), reg(instruction.b)
    elif isinstance(instruction, Stk):
        a, b = reg(instruction.pop_dst), reg(instruction.push_src)
    elif isinstance(instruction, Stm):
        a, b = reg(instruction.addr), reg(instruction.value)
    elif isinstance(instruction, Ldm):
        a, b = reg(instruction.dst), reg(instruction.addr)
    elif isinstance(instruction, Jmp):
        a, b = instruction.condition, reg(instruction.target)
    elif isinstance(instruction, Sys):
        a, b = instruction.syscall, reg(instruction.result)
    else:
        raise DecodeError(f"cannot encode {instruction!r}")

    raw = bytearray(INSTRUCTION_SIZE)
    layout = constants.layout
    raw[layout["op"]] = constants.opcodes[instruction.mnemonic]
    raw[layout["a"]] = a
    raw[layout["b"]] = b
    return bytes(raw)


def encode_program(instructions: List[Instruction], constants: Constants) -> bytes:
    return b"".join(encode_instruction(i, constants) for i in instructions)
