"""
Yan85 エミュレータパッケージ。

8bit トイCPU (Yan85) のレジスタ、メモリ、スタック、命令セット、
およびホストI/Oへのシステムコールブリッジを提供します。
"""
from yan85_emu.common.types import Register
from yan85_emu.common.errors import Halt, Yan85Error
from yan85_emu.config.models import Constants
from yan85_emu.core.cpu import Yan85Cpu

__all__ = ["Constants", "Halt", "Register", "Yan85Cpu", "Yan85Error"]
