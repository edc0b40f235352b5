
from __future__ import annotations

import argparse
import tracemalloc
import numpy as np
from source2d import Dual, SourceBlob, SourcePoint, dualize, seed_position, seed_strength


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--N", type=int, default=20000)
    ap.add_argument("--blobs", action="store_true")
    ap.add_argument("--op", choices=["dualize", "position", "strength"], default="strength")
    args = ap.parse_args()

    rng = np.random.default_rng(0)
    z = rng.uniform(-0.5, 0.5, size=args.N) + 1j * rng.uniform(-0.5, 0.5, size=args.N)
    q = rng.normal(0.0, 1.0, size=(args.N,)); q -= q.mean()

    if args.blobs:
        elements = [SourceBlob(complex(zi), float(qi), 0.03) for zi, qi in zip(z, q)]
    else:
        elements = [SourcePoint(complex(zi), float(qi)) for zi, qi in zip(z, q)]

    tracemalloc.start()
    if args.op == "dualize":
        _ = dualize(Dual, elements)
    elif args.op == "position":
        _ = seed_position(Dual, elements, args.N // 2)
    else:
        _ = seed_strength(Dual, elements, args.N // 2)
    current, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    print(f"{args.op}(N={args.N}, blobs={args.blobs}) peak={peak/1e6:.1f} MB")

if __name__ == "__main__":
    main()
