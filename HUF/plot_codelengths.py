import argparse, os
import numpy as np
import matplotlib.pyplot as plt

from huffman import build_codebook, build_tree, count_frequencies
from metrics import average_code_length, entropy

def main(argv=None):
    ap = argparse.ArgumentParser(description="Plot symbol frequency against Huffman codeword length.")
    ap.add_argument("--input", required=True, help="path to any file")
    ap.add_argument("--output", default="results/fig_codelengths.png")
    ap.add_argument("--show", action="store_true")
    args = ap.parse_args(argv)

    with open(args.input, "rb") as f:
        data = f.read()
    freqs = count_frequencies(data)
    codes = build_codebook(build_tree(freqs))

    syms = np.array(list(freqs.keys()))
    f = np.array(list(freqs.values()), dtype=np.float64)
    L = np.array([len(codes[s]) for s in syms])

    plt.figure(figsize=(10, 3))
    plt.subplot(1, 2, 1)
    plt.bar(syms, f / f.sum(), width=1.0)
    plt.yscale("log")
    plt.xlim(-1, 256)
    plt.xlabel("byte value")
    plt.title("Symbol probability", fontsize=9)

    plt.subplot(1, 2, 2)
    plt.scatter(-np.log2(f / f.sum()), L, s=8)
    plt.xlabel("-log2 p")
    plt.ylabel("codeword length")
    plt.title(f"H={entropy(freqs):.3f}  avg L={average_code_length(freqs, codes):.3f}", fontsize=9)

    plt.tight_layout()
    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    plt.savefig(args.output, dpi=300)
    print(f"[plot] wrote {args.output}")
    if args.show:
        plt.show()

if __name__ == "__main__":
    main()
