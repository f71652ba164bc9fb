from typing import Dict, Sequence, Tuple

import numpy as np

from errors import CorruptContainerError

DEFAULT_CHUNK = 1 << 16  # symbols gathered per packing step

def as_symbols(data) -> np.ndarray:
    """View bytes-like input (or a uint8 array) as a flat uint8 array."""
    if isinstance(data, np.ndarray):
        if data.dtype != np.uint8:
            raise ValueError(f"Input array must be uint8, got {data.dtype}")
        return data.ravel()
    return np.frombuffer(data, dtype=np.uint8)

def payload_size(nbits: int) -> int:
    return (nbits + 7) // 8

class BitReader:
    def __init__(self, data: bytes, nbits: int):
        if nbits < 0:
            raise CorruptContainerError(f"Negative bit count: {nbits}")
        need = payload_size(nbits)
        if len(data) < need:
            raise CorruptContainerError(
                f"Payload too short: {len(data)} bytes for {nbits} bits"
            )
        self.data = bytes(data[:need])
        self.nbits = nbits
        self.i = 0  # logical bit index; bit i is bit (i % 8) of byte i // 8

    @property
    def remaining(self) -> int:
        return self.nbits - self.i

    def read_bit(self) -> int:
        if self.i >= self.nbits:
            raise CorruptContainerError("Unexpected end of bitstream")
        b = (self.data[self.i >> 3] >> (self.i & 7)) & 1
        self.i += 1
        return b

def codeword_matrix(codebook: Dict[int, Sequence[int]]):
    """
    Returns:
      mat: uint8 (256, maxlen) codeword bits, left-aligned, zero padded
      lens: int64 (256,) codeword lengths
      present: bool (256,) symbols that have a codeword
    """
    width = max([len(c) for c in codebook.values()] + [1])
    mat = np.zeros((256, width), dtype=np.uint8)
    lens = np.zeros(256, dtype=np.int64)
    present = np.zeros(256, dtype=bool)
    for s, code in codebook.items():
        mat[s, :len(code)] = code
        lens[s] = len(code)
        present[s] = True
    return mat, lens, present

def pack_symbols(data, codebook: Dict[int, Sequence[int]], chunk_size: int = DEFAULT_CHUNK) -> Tuple[bytes, int]:
    """
    Concatenate the codeword of every input symbol and pack LSB-first:
    bit i of the stream goes to bit (i % 8) of byte i // 8.
    Returns (payload, nbits).
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be >= 1")
    syms = as_symbols(data)
    mat, lens, present = codeword_matrix(codebook)

    known = present[syms]
    if not known.all():
        missing = int(syms[~known][0])
        raise ValueError(f"Symbol {missing} not in codebook")

    cols = np.arange(mat.shape[1])
    parts = []
    for i in range(0, syms.size, chunk_size):
        chunk = syms[i:i + chunk_size]
        mask = cols < lens[chunk][:, None]
        parts.append(mat[chunk][mask])  # row-major: symbol order, then bit order

    bits = np.concatenate(parts) if parts else np.zeros(0, dtype=np.uint8)
    return np.packbits(bits, bitorder="little").tobytes(), int(bits.size)
