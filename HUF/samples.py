import os
import numpy as np

def uniform_bytes(size=4096, seed=0) -> bytes:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=size, dtype=np.uint8).tobytes()

def skewed_bytes(size=4096, seed=0, p=0.3) -> bytes:
    """Geometric distribution over byte values: few symbols dominate."""
    rng = np.random.default_rng(seed)
    x = rng.geometric(p, size=size) - 1
    return np.clip(x, 0, 255).astype(np.uint8).tobytes()

def text_like_bytes(size=4096, seed=0) -> bytes:
    rng = np.random.default_rng(seed)
    alphabet = np.frombuffer(b"etaoinshrdlu ,.\n", dtype=np.uint8)
    # Zipf-ish weights over the alphabet
    w = 1.0 / np.arange(1, alphabet.size + 1)
    idx = rng.choice(alphabet.size, size=size, p=w / w.sum())
    return alphabet[idx].tobytes()

def single_symbol_bytes(size=4096, sym=0x61) -> bytes:
    return bytes([sym]) * size

def save_sample(path="data/sample.bin", size=65536, seed=0, kind="text"):
    makers = {
        "uniform": lambda: uniform_bytes(size, seed),
        "skewed": lambda: skewed_bytes(size, seed),
        "text": lambda: text_like_bytes(size, seed),
        "single": lambda: single_symbol_bytes(size),
    }
    if kind not in makers:
        raise ValueError(f"Unknown sample kind: {kind}")
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "wb") as f:
        f.write(makers[kind]())
    return path

if __name__ == "__main__":
    p = save_sample()
    print("Saved:", p)
