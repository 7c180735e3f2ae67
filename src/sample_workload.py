"""
A small workload to try the profiler on, see etc/config.properties.
"""

import time
from typing import List


def fibonacci(n: int) -> int:
    if n < 2:
        return n
    return fibonacci(n - 1) + fibonacci(n - 2)


def sort_words(words: List[str]) -> List[str]:
    return sorted(words, key=lambda word: (len(word), word))


def wait(seconds: float) -> None:
    time.sleep(seconds)


def build_table(rows: int) -> List[List[int]]:
    def make_row(i: int) -> List[int]:
        return [i * j for j in range(rows)]

    return [make_row(i) for i in range(rows)]


def run() -> None:
    wait(0.01)
    fibonacci(15)
    build_table(50)
    sort_words(["profiler", "call", "return", "hook", "report", "session"])
