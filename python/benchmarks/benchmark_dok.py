import argparse
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import scipy.sparse as sp

# ---------- Builders ----------


def build_coordinates(
    m: int, n: int, density: float, seed: int
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    rs = np.random.RandomState(seed)
    A_coo = sp.random(m, n, density=density, format="coo", random_state=rs)
    return (
        A_coo.row.astype(np.int64),
        A_coo.col.astype(np.int64),
        A_coo.data.astype(np.float64),
    )


def build_scipy_dok(m: int, n: int, i: np.ndarray, j: np.ndarray, x: np.ndarray) -> sp.dok_matrix:
    D = sp.dok_matrix((m, n), dtype=np.float64)
    for r, c, v in zip(i.tolist(), j.tolist(), x.tolist()):
        D[r, c] = v
    return D


def build_dokmat(i: np.ndarray, j: np.ndarray, x: np.ndarray):
    try:
        from dokmat.sparse import DOK
    except Exception:
        return None
    return DOK.from_arrays(i, j, x)


def build_points(m: int, n: int, count: int, seed: int) -> List[Tuple[int, int]]:
    rs = np.random.RandomState(seed)
    rows = rs.randint(0, m, size=count)
    cols = rs.randint(0, n, size=count)
    return list(zip(rows.tolist(), cols.tolist()))


# ---------- Timing helpers ----------


def time_op(fn: Callable[[], Any], warmup: int, repeat: int) -> List[float]:
    for _ in range(warmup):
        fn()
    times: List[float] = []
    for _ in range(repeat):
        t0 = time.perf_counter()
        fn()
        t1 = time.perf_counter()
        times.append(t1 - t0)
    return times


def summarize(name: str, times: List[float], ops: float) -> Optional[Dict[str, float]]:
    if not times:
        return None
    arr = np.array(times, dtype=np.float64)
    return {
        "name": name,
        "min_ms": float(arr.min() * 1e3),
        "median_ms": float(np.median(arr) * 1e3),
        "mean_ms": float(arr.mean() * 1e3),
        "mops": float((ops / arr.min()) / 1e6) if ops > 0 else 0.0,
    }


def same_triples(out, ref, row_offset: int, col_offset: int) -> bool:
    rows, cols, vals = out
    ref_rows, ref_cols, ref_vals = ref
    # scipy reports coordinates relative to the slice, in no particular order
    ref_rows = np.asarray(ref_rows, dtype=np.int64) + row_offset
    ref_cols = np.asarray(ref_cols, dtype=np.int64) + col_offset
    order = np.lexsort((ref_cols, ref_rows))
    return (
        rows.size == ref_rows.size
        and np.array_equal(rows, ref_rows[order])
        and np.array_equal(cols, ref_cols[order])
        and np.allclose(vals, np.asarray(ref_vals)[order])
    )


# ---------- Ops (per backend) ----------


class Backend:
    SCIPY = "scipy.dok"
    DOKMAT = "dokmat"


def run_get_scipy(D: sp.dok_matrix, points: List[Tuple[int, int]]) -> float:
    total = 0.0
    for r, c in points:
        total += D[r, c]
    return float(total)


def run_get_dokmat(A: Any, points: List[Tuple[int, int]]) -> float:
    total = 0.0
    for key in points:
        total += A.get(key)
    return total


def run_range_scipy(D: sp.dok_matrix, rows: slice, cols: slice) -> np.ndarray:
    return D[rows, cols].toarray()


def run_range_dokmat(A: Any, rows: slice, cols: slice) -> np.ndarray:
    return A.get_range(rows, cols)


def run_range_sparse_scipy(D: sp.dok_matrix, rows: slice, cols: slice):
    B = D[rows, cols].tocoo()
    return B.row, B.col, B.data


def run_range_sparse_dokmat(A: Any, rows: slice, cols: slice):
    return A.get_range_sparse(rows, cols)


def run_transpose_scipy(D: sp.dok_matrix) -> sp.dok_matrix:
    return D.transpose()


def run_transpose_dokmat(A: Any) -> Any:
    A.transpose()
    return A


# ---------- Main ----------


def main():
    p = argparse.ArgumentParser(description="DOK benchmarks: dokmat vs scipy.sparse.dok_matrix")
    p.add_argument("--m", type=int, default=2048)
    p.add_argument("--n", type=int, default=2048)
    p.add_argument("--density", type=float, default=0.001)
    p.add_argument("--points", type=int, default=100000, help="Number of point reads")
    p.add_argument("--block", type=int, default=256, help="Edge of the range read")
    p.add_argument("--warmup", type=int, default=1)
    p.add_argument("--repeat", type=int, default=5)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--no_scipy", action="store_true")
    p.add_argument("--no_dokmat", action="store_true")
    p.add_argument("--validate", action="store_true")
    p.add_argument(
        "--ops",
        type=str,
        default="all",
        help="Comma-separated ops: build, get, range, range_sparse, transpose",
    )

    args = p.parse_args()

    i, j, x = build_coordinates(args.m, args.n, args.density, args.seed)
    nnz = int(x.size)
    # pin the shape so both backends agree
    i = np.append(i, args.m - 1)
    j = np.append(j, args.n - 1)
    x = np.append(x, 1.0)

    D = None if args.no_scipy else build_scipy_dok(args.m, args.n, i, j, x)
    A = None if args.no_dokmat else build_dokmat(i, j, x)

    points = build_points(args.m, args.n, args.points, args.seed + 1)
    rows = slice(0, min(args.block, args.m))
    cols = slice(0, min(args.block, args.n))

    wanted = {op.strip().lower() for op in (args.ops.split(",") if args.ops else [])}
    if "all" in wanted or not wanted:
        wanted = {"build", "get", "range", "range_sparse", "transpose"}

    results: List[Dict[str, float]] = []

    # ---- build ----
    if "build" in wanted:
        ops = float(x.size)
        if D is not None:
            times = time_op(lambda: build_scipy_dok(args.m, args.n, i, j, x), args.warmup, args.repeat)
            results.append(summarize(Backend.SCIPY + ":build", times, ops))
        if A is not None:
            times = time_op(lambda: build_dokmat(i, j, x), args.warmup, args.repeat)
            results.append(summarize(Backend.DOKMAT + ":build", times, ops))

    # ---- point get ----
    if "get" in wanted:
        ops = float(len(points))
        ref = None
        if D is not None:
            times = time_op(lambda: run_get_scipy(D, points), args.warmup, args.repeat)
            results.append(summarize(Backend.SCIPY + ":get", times, ops))
            ref = run_get_scipy(D, points)
        if A is not None:
            times = time_op(lambda: run_get_dokmat(A, points), args.warmup, args.repeat)
            results.append(summarize(Backend.DOKMAT + ":get", times, ops))
            if args.validate and ref is not None:
                if not np.isclose(run_get_dokmat(A, points), ref):
                    raise AssertionError("Validation failed: dokmat get vs scipy")

    # ---- dense range ----
    if "range" in wanted:
        ops = float((rows.stop - rows.start) * (cols.stop - cols.start))
        ref = None
        if D is not None:
            times = time_op(lambda: run_range_scipy(D, rows, cols), args.warmup, args.repeat)
            results.append(summarize(Backend.SCIPY + ":range", times, ops))
            ref = run_range_scipy(D, rows, cols)
        if A is not None:
            times = time_op(lambda: run_range_dokmat(A, rows, cols), args.warmup, args.repeat)
            results.append(summarize(Backend.DOKMAT + ":range", times, ops))
            if args.validate and ref is not None:
                if not np.allclose(run_range_dokmat(A, rows, cols), ref):
                    raise AssertionError("Validation failed: dokmat range vs scipy")

    # ---- sparse range ----
    if "range_sparse" in wanted:
        ops = float((rows.stop - rows.start) * (cols.stop - cols.start))
        if D is not None:
            times = time_op(lambda: run_range_sparse_scipy(D, rows, cols), args.warmup, args.repeat)
            results.append(summarize(Backend.SCIPY + ":range_sparse", times, ops))
        if A is not None:
            times = time_op(lambda: run_range_sparse_dokmat(A, rows, cols), args.warmup, args.repeat)
            results.append(summarize(Backend.DOKMAT + ":range_sparse", times, ops))
            if args.validate and D is not None:
                out = run_range_sparse_dokmat(A, rows, cols)
                ref = run_range_sparse_scipy(D, rows, cols)
                if not same_triples(out, ref, rows.start, cols.start):
                    raise AssertionError("Validation failed: dokmat range_sparse vs scipy")

    # ---- transpose ----
    if "transpose" in wanted:
        ops = float(nnz)
        if D is not None:
            times = time_op(lambda: run_transpose_scipy(D), args.warmup, args.repeat)
            results.append(summarize(Backend.SCIPY + ":transpose", times, ops))
        if A is not None:
            times = time_op(lambda: run_transpose_dokmat(A), args.warmup, args.repeat)
            results.append(summarize(Backend.DOKMAT + ":transpose", times, ops))

    # ---- print summary ----
    print(f"DOK Benchmarks: m={args.m} n={args.n} density={args.density} nnz={nnz}")
    for r in results:
        if not r:
            continue
        print(
            f"{r['name']:>24}: min {r['min_ms']:.3f} ms | median {r['median_ms']:.3f} ms | mean {r['mean_ms']:.3f} ms | {r['mops']:.2f} Mops/s"
        )


if __name__ == "__main__":
    main()
