# tests/config/test_constants_loader.py
"""
yan85_emu.config.loaderモジュールの単体テスト。
YAML形式の定数テーブルの読み込みを検証します。
"""
import pytest

from yan85_emu.common.errors import ConstantsError
from yan85_emu.common.types import Register
from yan85_emu.config.loader import ConstantsLoader
from yan85_emu.config.models import DEFAULT_OPCODES, DEFAULT_SYSCALLS


class TestConstantsLoader:
    @pytest.fixture
    def loader(self):
        return ConstantsLoader()

    def test_load_full_file(self, loader, tmp_path):
        path = tmp_path / "constants.yaml"
        path.write_text(
            "registers:\n"
            "  a: 0x01\n  b: 0x02\n  c: 0x04\n  d: 0x08\n  s: 0x10\n  i: 0x20\n  f: 0x40\n"
            "flags:\n"
            "  L: 0x01\n  G: 0x02\n  E: 0x04\n  Z: 0x08\n  N: 0x10\n"
            "syscalls:\n"
            "  open: 1\n  read_code: 2\n  read_memory: 3\n  write: 4\n  sleep: 5\n  exit: 6\n"
            "opcodes:\n"
            "  IMM: 0x01\n  ADD: 0x02\n  STK: 0x04\n  STM: 0x08\n"
            "  LDM: 0x10\n  CMP: 0x20\n  JMP: 0x40\n  SYS: 0x80\n"
            "layout:\n"
            "  op: 2\n  a: 0\n  b: 1\n"
        )
        constants = loader.load_from_file(str(path))

        assert constants.registers["I"] == 0x20
        assert constants.register_slot(Register.F) == 6
        assert constants.syscalls["EXIT"] == 6
        assert constants.opcodes["SYS"] == 0x80
        assert constants.layout == {"op": 2, "a": 0, "b": 1}

    # @intent:test_case_defaults 省略されたセクションが既定値で補われることを検証します。
    def test_missing_sections_use_defaults(self, loader, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("flags: {L: 1, G: 2, E: 4, Z: 8, N: 16}\n")
        constants = loader.load_from_file(str(path))
        assert constants.flags["Z"] == 8
        assert dict(constants.syscalls) == DEFAULT_SYSCALLS
        assert dict(constants.opcodes) == DEFAULT_OPCODES

    def test_empty_file(self, loader, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        constants = loader.load_from_file(str(path))
        assert constants.registers["A"] == 0x20

    def test_invalid_integer(self, loader):
        with pytest.raises(ConstantsError, match="Invalid integer format"):
            loader.parse({"flags": {"L": "lots", "G": 2, "E": 4, "Z": 8, "N": 16}})

    def test_invalid_section_type(self, loader):
        with pytest.raises(ConstantsError):
            loader.parse({"registers": [1, 2, 3]})

    def test_malformed_bindings_rejected(self, loader):
        data = {"registers": {"A": 1, "B": 1, "C": 4, "D": 8, "S": 16, "I": 32, "F": 64}}
        with pytest.raises(ConstantsError):
            loader.parse(data)
