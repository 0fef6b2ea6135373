from .bridge import SyscallBridge

__all__ = ["SyscallBridge"]
