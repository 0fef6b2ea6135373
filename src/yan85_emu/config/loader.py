import yaml
from typing import Any, Dict

from yan85_emu.common.errors import ConstantsError
from .models import (
    Constants, DEFAULT_FLAGS, DEFAULT_LAYOUT, DEFAULT_OPCODES, DEFAULT_REGISTERS, DEFAULT_SYSCALLS,
)

# @intent:responsibility YAML形式の定数テーブルを読み込み、検証済みのConstantsを生成します。
# @intent:rationale 省略されたセクションは既定値で補い、部分的な定義ファイルも扱えるようにします。
class ConstantsLoader:
    def load_from_file(self, path: str) -> Constants:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self.parse(data or {})

    def parse(self, data: Dict[str, Any]) -> Constants:
        if not isinstance(data, dict):
            raise ConstantsError(f"constants must be a mapping, got {type(data).__name__}")

        return Constants(
            registers=self._parse_section(data, "registers", DEFAULT_REGISTERS, upper=True),
            flags=self._parse_section(data, "flags", DEFAULT_FLAGS, upper=True),
            syscalls=self._parse_section(data, "syscalls", DEFAULT_SYSCALLS, upper=True),
            opcodes=self._parse_section(data, "opcodes", DEFAULT_OPCODES, upper=True),
            layout=self._parse_section(data, "layout", DEFAULT_LAYOUT, upper=False),
        )

    def _parse_section(self, data: Dict[str, Any], name: str, default: Dict[str, int], upper: bool) -> Dict[str, int]:
        section = data.get(name)
        if section is None:
            return dict(default)
        if not isinstance(section, dict):
            raise ConstantsError(f"{name}: expected a mapping, got {type(section).__name__}")

        parsed = {}
        for key, value in section.items():
            key = str(key).upper() if upper else str(key).lower()
            parsed[key] = self._parse_int(value)
        return parsed

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ConstantsError(f"Invalid integer format: {value}")
