import argparse
from typing import List, Optional, Sequence

import numpy as np

from batchloader import BatchIterator, ncycle


def make_regression(n: int, features: int, *, seed: int = 0):
    """Synthetic linear data laid out observation-last: X is [features, n], y is [n]."""
    rng = np.random.default_rng(seed)
    w_true = rng.standard_normal(features).astype("float32")
    x = rng.uniform(-1, 1, size=(features, n)).astype("float32")
    y = w_true @ x + 0.5 + 0.01 * rng.standard_normal(n).astype("float32")
    return x, y


def main(argv: Optional[Sequence[str]] = None) -> List[float]:
    parser = argparse.ArgumentParser(description="batchloader demo: mini-batch SGD on linear data")
    parser.add_argument("--epochs", type=int, default=50)
    parser.add_argument("--batch-size", type=int, default=32)
    parser.add_argument("--lr", type=float, default=0.1)
    parser.add_argument("--log-every", type=int, default=10)
    parser.add_argument("--samples", type=int, default=200)
    parser.add_argument("--features", type=int, default=4)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--no-shuffle", action="store_true")
    parser.add_argument("--drop-last", action="store_true", help="Skip the final short batch")
    args = parser.parse_args(argv)

    x, y = make_regression(args.samples, args.features, seed=args.seed)
    loader = BatchIterator(
        (x, y),
        batch_size=args.batch_size,
        shuffle=not args.no_shuffle,
        partial=not args.drop_last,
        rng=args.seed,
    )
    print(f"{loader}: {len(loader)} batches per epoch")

    w = np.zeros(args.features, dtype="float32")
    b = np.float32(0.0)
    history: List[float] = []
    epoch_loss = 0.0
    num_batches = 0

    for step, (xb, yb) in enumerate(ncycle(loader, args.epochs), start=1):
        err = w @ xb + b - yb
        w -= args.lr * 2 * (xb @ err) / yb.shape[0]
        b -= args.lr * 2 * err.mean()
        epoch_loss += float((err ** 2).mean())
        num_batches += 1

        if step % len(loader) == 0:
            epoch = step // len(loader)
            avg_loss = epoch_loss / max(1, num_batches)
            history.append(avg_loss)
            if args.log_every and epoch % args.log_every == 0:
                print(f"Epoch {epoch}: loss={avg_loss:.6f}")
            epoch_loss = 0.0
            num_batches = 0

    print("Training done.")
    return history


if __name__ == "__main__":
    main()
