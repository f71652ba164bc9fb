import numpy as np

from container import header_size

def entropy(freqs) -> float:
    """Shannon entropy of the symbol distribution, bits per symbol."""
    f = np.array(list(freqs.values()), dtype=np.float64)
    p = f / f.sum()
    return float(-(p * np.log2(p)).sum())

def average_code_length(freqs, codebook) -> float:
    f = np.array([freqs[s] for s in freqs], dtype=np.float64)
    L = np.array([len(codebook[s]) for s in freqs], dtype=np.float64)
    return float((f * L).sum() / f.sum())

def compression_ratio(original_size: int, compressed_size: int) -> float:
    if compressed_size == 0:
        return float("inf")
    return float(original_size) / float(compressed_size)

def container_overhead(symbol_count: int, payload_len: int) -> float:
    """Fraction of the container taken by header and frequency table."""
    hdr = header_size(symbol_count)
    return float(hdr) / float(hdr + payload_len)
