"""
Minimal benchmark runner for skewpf.
Run with: python3 -m benchmarks.run [--heavy]
"""
import argparse
import time

from benchmarks import benchmark_pfaffian
from skewpf.common.flog import get_global_logger, log_timing_summary

def main():
    parser = argparse.ArgumentParser(description="Run skewpf benchmarks.")
    parser.add_argument("--heavy", action="store_true", help="Run heavy benchmarks (longer duration).")
    args = parser.parse_args()

    log = get_global_logger()
    log.title(f"Running skewpf Benchmarks (Heavy={args.heavy})", 80, '=')

    start_total = time.perf_counter()
    results = benchmark_pfaffian.run_benchmarks(heavy=args.heavy)
    end_total = time.perf_counter()

    print(f"{'Benchmark Name':<36} | {'Time (s)':<10} | {'Details'}")
    print("-" * 80)
    for res in results:
        details = ", ".join(f"{k}={v}" for k, v in res.items() if k not in ['name', 'duration'])
        print(f"{res['name']:<36} | {res['duration']:<10.4f} | {details}")
    print("-" * 80)

    log_timing_summary(log,
                    {res['name']: res['duration'] for res in results},
                    total_duration=end_total - start_total,
                    title="Timing Summary")

if __name__ == "__main__":
    main()
