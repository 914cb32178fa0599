"""Threads that each print a greeting a number of times with a pause."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from dataclasses import dataclass
from typing import Iterable, TextIO


@dataclass
class Greeter:
    """Writes ``message`` ``times`` times, pausing ``delay`` milliseconds after each."""

    message: str = ""
    delay: int = 0
    times: int = 0

    def run(self, out: TextIO) -> None:
        """Write the greeting to ``out`` once per repetition."""
        for _ in range(self.times):
            out.write(self.message + "\n")
            time.sleep(self.delay / 1000)


def run_greeters(greeters: Iterable[Greeter], out: TextIO) -> None:
    """Run every greeter in its own thread and wait for all of them."""
    threads = [
        threading.Thread(target=greeter.run, args=(out,)) for greeter in greeters
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def main(argv: list[str] | None = None) -> int:
    """Run four concurrent greeters."""
    parser = argparse.ArgumentParser(description="Concurrent greeters")
    parser.parse_args(argv)
    out = sys.stdout

    greeters = [
        Greeter("Soy 1", 100, 10),
        Greeter("\tSoy 2", 150, 15),
        Greeter("\t\tSoy 3", 10, 40),
    ]
    fourth = Greeter()
    fourth.message, fourth.delay, fourth.times = "\t\t\tSoy 4", 2, 12
    greeters.append(fourth)
    out.write(f"veces: {fourth.times}\n")

    run_greeters(greeters, out)
    return 0