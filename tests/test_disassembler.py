# tests/test_disassembler.py
"""
yan85_emu.disassemblerモジュールの単体テスト。
"""
from yan85_emu.common.types import Register
from yan85_emu.config.models import Constants
from yan85_emu.disassembler import disassemble, format_instruction
from yan85_emu.instructions import Add, Cmp, Imm, Jmp, Ldm, Stk, Stm, Sys

A, B, C, D = Register.A, Register.B, Register.C, Register.D


class TestDisassembler:
    def test_format_each_instruction(self):
        c = Constants()
        f = c.flags
        assert format_instruction(Imm(A, 0x2A), c) == "IMM A = 0x2a"
        assert format_instruction(Add(A, B), c) == "ADD A B"
        assert format_instruction(Stk(None, C), c) == "STK NONE C"
        assert format_instruction(Stm(A, D), c) == "STM *A = D"
        assert format_instruction(Ldm(B, A), c) == "LDM B = *A"
        assert format_instruction(Cmp(C, D), c) == "CMP C D"
        assert format_instruction(Jmp(f["L"] | f["N"], D), c) == "JMP LN D"
        assert format_instruction(Jmp(0, D), c) == "JMP - D"
        assert format_instruction(Sys(c.syscalls["WRITE"], A), c) == "SYS WRITE A"

    def test_unknown_syscall_shown_as_number(self):
        c = Constants()
        unused = next(code for code in range(0x100) if code not in c.syscalls.values())
        assert format_instruction(Sys(unused, A), c) == f"SYS {unused:#04x} A"

    def test_disassemble_program(self):
        c = Constants()
        assert disassemble([Imm(A, 1), Add(A, A)], c) == [(0, "IMM A = 0x01"), (1, "ADD A A")]
