import argparse, os, sys, time
from pathlib import Path

from codec import huffman_decode
from container import read_container
from errors import CorruptContainerError
from huffman import build_tree, describe_tree

def default_output(path) -> Path:
    return Path(path).with_suffix(".txt")

def main(argv=None):
    ap = argparse.ArgumentParser(description="Decompress a .huffman container.")
    ap.add_argument("--input", required=True, help="path to .huffman")
    ap.add_argument("--output", default=None, help="path to decoded file (default: input with .txt suffix)")
    ap.add_argument("--show-tree", action="store_true", help="print the rebuilt Huffman tree")
    ap.add_argument("--verbose", action="store_true", help="print per-stage timings")
    args = ap.parse_args(argv)

    out = Path(args.output) if args.output else default_output(args.input)
    if out.resolve() == Path(args.input).resolve():
        ap.error("output would overwrite the input file")

    timings = {}
    t = time.perf_counter()
    try:
        with open(args.input, "rb") as f:
            c = read_container(f)
        timings["read container"] = time.perf_counter() - t

        t = time.perf_counter()
        data = huffman_decode(c["payload"], nbits=c["nbits"], freqs=c["freqs"])
        timings["decode"] = time.perf_counter() - t
    except CorruptContainerError as e:
        print(f"[decode] error: {e}", file=sys.stderr)
        return 1

    if args.show_tree:
        print(describe_tree(build_tree(c["freqs"])))

    t = time.perf_counter()
    os.makedirs(out.parent, exist_ok=True)
    with open(out, "wb") as f:
        f.write(data)
    timings["write file"] = time.perf_counter() - t

    print(f"[decode] wrote {out} bytes={len(data)} distinct={len(c['freqs'])} bits={c['nbits']}")
    if args.verbose:
        for stage, sec in timings.items():
            print(f"[decode] {stage}: {sec * 1000:.1f} ms")
    return 0

if __name__ == "__main__":
    sys.exit(main())
