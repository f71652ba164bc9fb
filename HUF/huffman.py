from __future__ import annotations
import heapq
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from bitpack import BitReader, as_symbols
from errors import CorruptContainerError, EmptyInputError

Code = Tuple[int, ...]  # root-to-leaf path, 0 = left, 1 = right

@dataclass(frozen=True)
class Node:
    freq: int
    sym: Optional[int] = None
    left: Optional["Node"] = None
    right: Optional["Node"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

def count_frequencies(data) -> Dict[int, int]:
    """Occurrence count of every byte value present in data, ascending by symbol."""
    syms = as_symbols(data)
    if syms.size == 0:
        raise EmptyInputError("Cannot count frequencies of an empty buffer")
    counts = np.bincount(syms, minlength=256)
    return {int(s): int(counts[s]) for s in np.flatnonzero(counts)}

def build_tree(freqs: Dict[int, int]) -> Node:
    """
    Huffman tree by repeated minimum-weight merging.

    Heap key is (freq, seq): leaves use their symbol as seq, merged nodes take
    256, 257, ... in creation order. The first node popped becomes the left
    child. Equal frequencies therefore always merge in the same order, no
    matter how freqs is ordered.
    """
    if not freqs:
        raise EmptyInputError("Cannot build a tree from an empty frequency table")
    pq = []
    for s in sorted(freqs):
        f = int(freqs[s])
        if not (0 <= s <= 255):
            raise ValueError(f"symbol out of range: {s}")
        if f <= 0:
            raise ValueError(f"frequency must be positive, got {f} for symbol {s}")
        pq.append((f, s, Node(freq=f, sym=s)))
    heapq.heapify(pq)

    seq = 256
    while len(pq) > 1:
        fa, _, a = heapq.heappop(pq)
        fb, _, b = heapq.heappop(pq)
        heapq.heappush(pq, (fa + fb, seq, Node(freq=fa + fb, left=a, right=b)))
        seq += 1
    return pq[0][2]

def build_codebook(root: Node) -> Dict[int, Code]:
    """Map each leaf symbol to its path from the root (a single leaf gets ())."""
    code: Dict[int, Code] = {}
    stack: List[Tuple[Node, Code]] = [(root, ())]
    while stack:
        node, prefix = stack.pop()
        if node.is_leaf:
            code[node.sym] = prefix
        else:
            stack.append((node.right, prefix + (1,)))
            stack.append((node.left, prefix + (0,)))
    return {s: code[s] for s in sorted(code)}

def code_lengths(codebook: Dict[int, Code]) -> Dict[int, int]:
    return {s: len(c) for s, c in codebook.items()}

def weighted_length(freqs: Dict[int, int], codebook: Dict[int, Code]) -> int:
    """Sum of freq * codeword length, i.e. the number of encoded bits."""
    return sum(f * len(codebook[s]) for s, f in freqs.items())

def describe_tree(root: Node) -> str:
    lines = []
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        pad = "    " * depth
        if node.is_leaf:
            lines.append(f"{pad}{node.freq}: {node.sym:#04x} {_printable(node.sym)}")
        else:
            lines.append(f"{pad}{node.freq}")
            stack.append((node.right, depth + 1))
            stack.append((node.left, depth + 1))
    return "\n".join(lines)

def decode_symbols(root: Node, reader: BitReader, count: int) -> bytes:
    """
    Walk the tree once per output symbol until `count` symbols are emitted.
    The reader must be exhausted exactly when the last symbol is emitted.
    """
    if root.is_leaf:
        # empty codeword: nothing to read, repeat the only symbol
        if reader.nbits != 0:
            raise CorruptContainerError("Single-symbol stream must not carry payload bits")
        return bytes([root.sym]) * count

    out = bytearray(count)
    for k in range(count):
        node = root
        while not node.is_leaf:
            node = node.right if reader.read_bit() else node.left
        out[k] = node.sym
    if reader.remaining:
        raise CorruptContainerError(
            f"Corrupt stream: {reader.remaining} bits left after {count} symbols"
        )
    return bytes(out)

def _printable(sym: int) -> str:
    ch = chr(sym)
    return repr(ch) if ch.isprintable() else ""
