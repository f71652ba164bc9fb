import io
import time
from typing import Dict

import container
from bitpack import DEFAULT_CHUNK, BitReader, pack_symbols
from container import read_container, write_container
from errors import CorruptContainerError, InputTooLargeError
from huffman import build_codebook, build_tree, count_frequencies, decode_symbols, weighted_length

def huffman_encode(data, *, chunk_size: int = DEFAULT_CHUNK):
    """
    Returns:
      freqs: dict symbol -> count, ascending by symbol
      payload: packed codeword bits (LSB-first)
      nbits: number of meaningful bits in payload
      meta: dict (symbols, distinct, max_code_len, timings)
    """
    timings = {}
    t = time.perf_counter()

    # 1) Frequency table
    freqs = count_frequencies(data)
    t = _lap(timings, "freq table", t)

    # 2) Tree + codebook
    tree = build_tree(freqs)
    t = _lap(timings, "huffman tree", t)
    codes = build_codebook(tree)
    t = _lap(timings, "symbol table", t)

    # header fields are int32: refuse before packing anything
    _check_limits(freqs, weighted_length(freqs, codes))

    # 3) Pack payload bits in input order
    payload, nbits = pack_symbols(data, codes, chunk_size=chunk_size)
    _lap(timings, "encoded bits", t)

    meta = {
        "symbols": sum(freqs.values()),
        "distinct": len(freqs),
        "max_code_len": max(len(c) for c in codes.values()),
        "timings": timings,
    }
    return freqs, payload, nbits, meta

def huffman_decode(payload: bytes, *, nbits: int, freqs: Dict[int, int]) -> bytes:
    # Rebuild the same tree from the stored table
    tree = build_tree(freqs)
    expected = weighted_length(freqs, build_codebook(tree))
    if nbits != expected:
        raise CorruptContainerError(
            f"Bit count mismatch: header says {nbits}, frequency table implies {expected}"
        )
    br = BitReader(payload, nbits)
    return decode_symbols(tree, br, sum(freqs.values()))

def serialize(freqs: Dict[int, int], payload: bytes, nbits: int) -> bytes:
    """Whole container as bytes; nothing reaches a file until this succeeds."""
    buf = io.BytesIO()
    write_container(buf, nbits=nbits, freqs=freqs, payload=payload)
    return buf.getvalue()

def compress(data, *, chunk_size: int = DEFAULT_CHUNK) -> bytes:
    freqs, payload, nbits, _ = huffman_encode(data, chunk_size=chunk_size)
    return serialize(freqs, payload, nbits)

def decompress(blob: bytes) -> bytes:
    c = read_container(io.BytesIO(blob))
    return huffman_decode(c["payload"], nbits=c["nbits"], freqs=c["freqs"])

def _check_limits(freqs, nbits):
    limit = container.I32_MAX
    if nbits > limit:
        raise InputTooLargeError(f"Encoded bit count {nbits} exceeds int32 range")
    if sum(freqs.values()) > limit:
        raise InputTooLargeError(f"Input of {sum(freqs.values())} bytes exceeds int32 range")

def _lap(timings, stage, start):
    now = time.perf_counter()
    timings[stage] = now - start
    return now
