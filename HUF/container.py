import struct
from typing import Dict

from bitpack import payload_size
from errors import CorruptContainerError

# Header (big-endian):
# encoded_bit_count(i32) symbol_count(i32)
HDR_FMT = ">ii"
HDR_SIZE = struct.calcsize(HDR_FMT)

# Frequency table entry:
# symbol(u8) freq(i32)
TBL_FMT = ">Bi"
TBL_SIZE = struct.calcsize(TBL_FMT)

I32_MAX = 2**31 - 1
MAX_SYMBOLS = 256

def header_size(symbol_count: int) -> int:
    return HDR_SIZE + TBL_SIZE * symbol_count

def write_header(f, *, nbits: int, symbol_count: int):
    if not (0 <= nbits <= I32_MAX):
        raise ValueError(f"encoded bit count out of int32 range: {nbits}")
    if not (1 <= symbol_count <= MAX_SYMBOLS):
        raise ValueError(f"symbol count out of range (1..256): {symbol_count}")
    f.write(struct.pack(HDR_FMT, nbits, symbol_count))

def read_header(f):
    data = f.read(HDR_SIZE)
    if len(data) != HDR_SIZE:
        raise CorruptContainerError("Malformed stream: header too short")
    nbits, symbol_count = struct.unpack(HDR_FMT, data)
    if nbits < 0:
        raise CorruptContainerError(f"Negative encoded bit count: {nbits}")
    if not (1 <= symbol_count <= MAX_SYMBOLS):
        raise CorruptContainerError(f"Symbol count out of range (1..256): {symbol_count}")
    return dict(nbits=nbits, symbol_count=symbol_count)

def write_table(f, freqs: Dict[int, int]):
    for sym in sorted(freqs):
        freq = freqs[sym]
        if not (0 <= sym <= 255): raise ValueError("symbol out of range")
        if not (1 <= freq <= I32_MAX): raise ValueError("frequency out of range (1..2**31-1)")
        f.write(struct.pack(TBL_FMT, sym, freq))

def read_table(f, symbol_count: int) -> Dict[int, int]:
    size = TBL_SIZE * symbol_count
    data = f.read(size)
    if len(data) != size:
        raise CorruptContainerError(
            f"Malformed stream: table truncated ({len(data)} of {size} bytes for {symbol_count} symbols)"
        )
    freqs: Dict[int, int] = {}
    for sym, freq in struct.iter_unpack(TBL_FMT, data):
        if sym in freqs:
            raise CorruptContainerError(f"Duplicate symbol in table: {sym:#04x}")
        if freq <= 0:
            raise CorruptContainerError(f"Non-positive frequency {freq} for symbol {sym:#04x}")
        freqs[sym] = freq
    if sum(freqs.values()) > I32_MAX:
        raise CorruptContainerError("Frequency total exceeds int32 range")
    return freqs

def write_container(f, *, nbits: int, freqs: Dict[int, int], payload: bytes):
    if len(payload) != payload_size(nbits):
        raise ValueError(f"payload is {len(payload)} bytes, expected {payload_size(nbits)} for {nbits} bits")
    write_header(f, nbits=nbits, symbol_count=len(freqs))
    write_table(f, freqs)
    f.write(payload)

def read_container(f):
    """
    Parse a whole container from a binary stream.
    Returns dict(nbits, freqs, payload); nothing may follow the payload.
    """
    h = read_header(f)
    freqs = read_table(f, h["symbol_count"])
    n = payload_size(h["nbits"])
    payload = f.read(n)
    if len(payload) != n:
        raise CorruptContainerError(
            f"Malformed stream: payload truncated ({len(payload)} of {n} bytes)"
        )
    if f.read(1):
        raise CorruptContainerError("Malformed stream: trailing bytes after payload")
    return dict(nbits=h["nbits"], freqs=freqs, payload=payload)
