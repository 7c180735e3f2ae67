"""
Helpers to profile a callable with callprof.

This module provides two main functionalities:
1. collect(): Run a callable under a profiling session and write the report
2. display(): Print the head of a saved report

Usage Example:
    # Collect performance data
    collect(main, output_file="profiler.log")

    # Display analysis results
    display("profiler.log")

Notes:
- Running collect() overwrites the report file
- Console output goes through tqdm.write so it does not break progress bars
"""

from __future__ import annotations
import logging
import traceback
from typing import Callable, List, Optional

from tqdm import tqdm

from callprof.ProfilerSystem.Session import Session


def collect(
    target: Callable[[], object],
    output_file: str = "profiler.log",
    verbose: bool = False,
    repeat: int = 1,
    show_progress: bool = False,
    session: Optional[Session] = None,
    print_function: Optional[Callable[[str], None]] = tqdm.write,
) -> Session:
    """
    Run ``target`` ``repeat`` times in one session and write the report.

    Args:
        target: callable run without arguments
        output_file: report file
        verbose: mirror every report row to print_function
        repeat: number of runs
        show_progress: show a progress bar over the runs
        session: session to use, a new one by default
        print_function: receives the mirrored report lines, None to disable

    Returns:
        the stopped session, with its records
    """
    session = session or Session()
    session.attach_print_function(print_function, verbose)

    try:
        if show_progress:
            with tqdm(total=repeat, desc="Profiling", unit="run") as pbar:
                session.start()
                for _ in range(repeat):
                    target()
                    # Keep tqdm out of the report.
                    session.suspend()
                    pbar.update(1)
                    session.resume()
                session.stop()
        else:
            session.start()
            for _ in range(repeat):
                target()
            session.stop()
    except Exception as e:
        session.stop()
        logging.error(
            f"Profiled target failed: {str(e)}\n{traceback.format_exc()}",
            exc_info=True,
        )
        raise e

    session.report(output_file)
    return session


def display(output_file: str = "profiler.log", limit: Optional[int] = 20) -> List[str]:
    """
    Print the header and the first ``limit`` rows of a report.

    Returns:
        the printed lines
    """
    with open(output_file, "r", encoding="utf-8") as f:
        lines = [line.rstrip("\n") for line in f]

    # Total time, divider, header and divider come first.
    head, rows = lines[:4], lines[4:]
    if limit is not None and len(rows) > limit:
        rows = rows[:limit] + [head[1]]
    shown = head + rows
    for line in shown:
        print(line)
    return shown
