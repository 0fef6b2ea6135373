from .decoder import decode_instruction, decode_program, encode_instruction, encode_program

__all__ = ["decode_instruction", "decode_program", "encode_instruction", "encode_program"]
