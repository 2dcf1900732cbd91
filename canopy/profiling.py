"""
Per-phase timing for the growth loop.

Objects that want their methods timed expose a `profiler` attribute; methods
decorated with @profiled record into it when it is set and enabled.
"""

import time
from functools import wraps
from collections import defaultdict
from typing import Dict, List


class PhaseProfiler:
    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.stats: Dict[str, Dict] = defaultdict(lambda: {
            'calls': 0,
            'total_time': 0.0,
            'max_time': 0.0
        })

    def record(self, name: str, elapsed: float):
        if not self.enabled:
            return
        entry = self.stats[name]
        entry['calls'] += 1
        entry['total_time'] += elapsed
        entry['max_time'] = max(entry['max_time'], elapsed)

    def report(self) -> List[str]:
        """Table rows sorted by total time, slowest phase first."""
        if not self.stats:
            return []

        lines = [
            "=" * 70,
            "GROWTH PHASE TIMINGS",
            "=" * 70,
            f"{'Phase':<35} {'Calls':>8} {'Total(s)':>10} {'Avg(ms)':>7} {'Max(ms)':>7}",
            "-" * 70,
        ]
        sorted_stats = sorted(self.stats.items(), key=lambda x: x[1]['total_time'], reverse=True)
        for name, data in sorted_stats:
            calls = data['calls']
            total = data['total_time']
            avg_ms = (total / calls * 1000) if calls > 0 else 0
            lines.append(f"{name:<35} {calls:>8} {total:>10.3f} {avg_ms:>7.3f} {data['max_time'] * 1000:>7.3f}")
        lines.append("=" * 70)
        return lines

    def print_stats(self):
        for line in self.report():
            print(line)

    def reset(self):
        self.stats.clear()


def profiled(name: str):
    def decorator(func):
        @wraps(func)
        def wrapper(self, *args, **kwargs):
            profiler = getattr(self, 'profiler', None)
            if profiler is None or not profiler.enabled:
                return func(self, *args, **kwargs)
            start = time.perf_counter()
            result = func(self, *args, **kwargs)
            profiler.record(name, time.perf_counter() - start)
            return result
        return wrapper
    return decorator


class profile_block:
    def __init__(self, profiler: PhaseProfiler, name: str):
        self.profiler = profiler
        self.name = name
        self.start = None

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args):
        if self.profiler is not None:
            self.profiler.record(self.name, time.perf_counter() - self.start)
