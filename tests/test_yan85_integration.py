# tests/test_yan85_integration.py
"""
ファイルのOPEN → READ_MEMORY → WRITE → EXIT を通しで実行する結合テスト。
"""
import os

from yan85_emu.common.types import Register
from yan85_emu.config.loader import ConstantsLoader
from yan85_emu.core.cpu import Yan85Cpu
from yan85_emu.instructions import Add, Imm, Stm, Sys
from yan85_emu.loader.decoder import decode_program, encode_program

A, B, C, D = Register.A, Register.B, Register.C, Register.D


def _store_string(text: bytes, start: int):
    """
    textをメモリのstart番地から書き込み、NUL終端する命令列を生成します。
    """
    program = [Imm(D, start), Imm(B, 1)]
    for byte in text + b"\x00":
        program += [Imm(C, byte), Stm(D, C), Add(D, B)]
    return program


def test_cat_flag(tmp_path, monkeypatch):
    flag = tmp_path / "flag"
    flag.write_bytes(b"pwn.college{yan85}\n")
    monkeypatch.chdir(tmp_path)
    constants = ConstantsLoader().parse({})
    s = constants.syscalls

    program = _store_string(b"flag", 0x80)
    program += [
        Imm(A, 0x80), Sys(s["OPEN"], A),                           # a = open(path)
        Imm(B, 0x00), Imm(C, 0x40), Sys(s["READ_MEMORY"], C),      # c = read(a, 0x00, 0x40)
    ]
    read_fd, write_fd = os.pipe()
    program += [
        Imm(A, write_fd), Sys(s["WRITE"], D),                     # write(pipe, 0x00, c)
        Imm(A, 0), Sys(s["EXIT"], A),
    ]
    assert len(program) < 256

    # バイト列を経由してロードし、デコーダとエンジンの両方を通す
    decoded = decode_program(encode_program(program, constants), constants)
    traced = []
    try:
        with Yan85Cpu(constants, decoded, observer=traced.append) as cpu:
            assert cpu.run() == 0
            assert len(cpu.syscalls.descriptors) == 1
            assert cpu.registers.read(D) == len(flag.read_bytes())
        assert cpu.syscalls.descriptors == {}
        assert os.read(read_fd, 64) == b"pwn.college{yan85}\n"
        assert traced == decoded
    finally:
        os.close(read_fd)
        os.close(write_fd)
