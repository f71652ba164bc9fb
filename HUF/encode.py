import argparse, os, sys, time
from pathlib import Path

from bitpack import DEFAULT_CHUNK
from codec import huffman_encode, serialize
from errors import HuffmanError
from metrics import compression_ratio, container_overhead, entropy

def default_output(path) -> Path:
    return Path(path).with_suffix(".huffman")

def main(argv=None):
    ap = argparse.ArgumentParser(description="Compress a file with static Huffman coding.")
    ap.add_argument("--input", required=True, help="path to file to compress")
    ap.add_argument("--output", default=None, help="path to .huffman (default: input with .huffman suffix)")
    ap.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK, help="symbols packed per step")
    ap.add_argument("--verbose", action="store_true", help="print per-stage timings")
    args = ap.parse_args(argv)

    if args.chunk_size < 1:
        ap.error("--chunk-size must be >= 1")
    out = Path(args.output) if args.output else default_output(args.input)
    if out.resolve() == Path(args.input).resolve():
        ap.error("output would overwrite the input file")

    t = time.perf_counter()
    with open(args.input, "rb") as f:
        data = f.read()
    t_read = time.perf_counter() - t

    try:
        freqs, payload, nbits, meta = huffman_encode(data, chunk_size=args.chunk_size)
        t = time.perf_counter()
        blob = serialize(freqs, payload, nbits)
        meta["timings"]["header"] = time.perf_counter() - t
    except HuffmanError as e:
        print(f"[encode] error: {e}", file=sys.stderr)
        return 1

    t = time.perf_counter()
    os.makedirs(out.parent, exist_ok=True)
    with open(out, "wb") as f:
        f.write(blob)
    t_write = time.perf_counter() - t

    print(f"[encode] wrote {out}")
    print(f"[encode] symbols={meta['symbols']} distinct={meta['distinct']} bits={nbits} "
          f"max_len={meta['max_code_len']} entropy={entropy(freqs):.3f} b/sym "
          f"ratio={compression_ratio(len(data), len(blob)):.3f} "
          f"overhead={container_overhead(len(freqs), len(payload)):.1%}")
    if args.verbose:
        stages = {"read file": t_read, **meta["timings"], "write file": t_write}
        for stage, sec in stages.items():
            print(f"[encode] {stage}: {sec * 1000:.1f} ms")
    return 0

if __name__ == "__main__":
    sys.exit(main())
