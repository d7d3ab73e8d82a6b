# pylint: disable=invalid-name
"""Profile a small workload and write ProFi.txt next to this script."""

from pathlib import Path

import pyprofi


def fib(n):
    return n if n < 2 else fib(n - 1) + fib(n - 2)


def build_table(size):
    return {str(i): i * i for i in range(size)}


def counter(limit):
    for i in range(limit):
        yield build_table(i)


pyprofi.set_sort_method("count")
pyprofi.start("once")
fib(18)
for _table in counter(50):
    pass
pyprofi.stop()

# Ignored: the run-once session has already finished
pyprofi.start("once")

report = pyprofi.write_report(Path(__file__).with_name("ProFi.txt"))
print(report.read_text())
