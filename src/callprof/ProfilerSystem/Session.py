from __future__ import annotations
import logging
import os
import sys
import time
from typing import Callable, Optional

from callprof.ProfilerSystem.EventHook import EventHook
from callprof.ProfilerSystem.FunctionIdentity import IdentityNormalizer
from callprof.ProfilerSystem.ProfileEvent import ProfileEvent
from callprof.ProfilerSystem.RecordStore import RecordStore
from callprof.ProfilerSystem.ReportGenerator import ReportGenerator
from callprof.ProfilerSystem.ReportLayout import ReportLayout

# Directory of the callprof package, used to keep the profiler out of its own
# reports.
PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Session:
    """
    One profiling session: start() installs the event hook, stop() removes it
    and report() writes the collected records to a file.

    The session state is not synchronised. Only the thread that called start()
    is profiled, and a session must not be driven from several threads at once.

    Example::

        session = Session()
        session.attach_print_function(print, verbose=True)
        session.start()
        run_code()
        session.stop()
        session.report("profiler.log")
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.perf_counter,
        set_hook: Callable[[Optional[Callable]], None] = sys.setprofile,
        root: Optional[str] = None,
        self_label: Optional[str] = None,
        layout: Optional[ReportLayout] = None,
    ) -> None:
        """
        Args:
            clock: returns the current time in seconds
            set_hook: installs a profile function, or removes it when given None
            root: source paths below this directory are reported relative to it
            self_label: records whose source label contains it are also left out
                of reports; functions of the callprof package always are
            layout: column widths of the report
        """
        self.clock = clock
        self.set_hook = set_hook
        self.layout = layout or ReportLayout()
        self.normalizer = IdentityNormalizer(root, self.layout, excluded_dir=PACKAGE_DIR)
        self.records = RecordStore(self.normalizer)
        self.hook = EventHook(self.records, clock)
        self.report_generator = ReportGenerator(
            self_label or "", self.layout, self.normalizer.excluded
        )

        self.start_time: Optional[float] = None
        self.stop_time: Optional[float] = None
        self.print_function: Optional[Callable[[str], None]] = None
        self.verbose: bool = False

    @property
    def running(self) -> bool:
        return self.start_time is not None and self.stop_time is None

    @property
    def self_label(self) -> str:
        return self.report_generator.self_label

    def attach_print_function(
        self, print_function: Optional[Callable[[str], None]], verbose: bool = False
    ) -> None:
        """
        Mirror report lines to ``print_function``. The total time and the save
        notice are always mirrored, table rows only when ``verbose`` is set.
        """
        self.print_function = print_function
        self.verbose = verbose

    def start(self) -> None:
        """Discard any previous data and start profiling."""
        if self.running:
            self.set_hook(None)
            logging.info("Profiler restarted, previous measurements discarded")
        else:
            logging.debug("Profiler started")
        self.records.reset()
        self.normalizer.clear_cache()
        self.stop_time = None
        self.start_time = self.clock()
        self.set_hook(self.hook)

    def stop(self) -> None:
        """Stop profiling. Calling it again keeps the first stop time."""
        self.set_hook(None)
        if self.stop_time is None:
            self.stop_time = self.clock()
            logging.debug(f"Profiler stopped, {len(self.records)} functions recorded")

    def suspend(self) -> None:
        """Remove the hook without ending the session, see resume()."""
        self.set_hook(None)

    def resume(self) -> None:
        """Reinstall the hook after suspend(), keeping the records."""
        if self.running:
            self.set_hook(self.hook)

    def dispatch(self, event: ProfileEvent) -> None:
        """Feed an event to the hook directly, without the interpreter."""
        self.hook.handle(event)

    def report(self, filename: str = "profiler.log") -> str:
        """
        Write the report, stopping the session first if it is still running.

        Returns:
            the report filename

        Raises:
            OSError: the report file cannot be written
        """
        if self.stop_time is None:
            self.stop()
        start_time = self.start_time if self.start_time is not None else self.stop_time
        self.report_generator.generate(
            self.records.all(),
            start_time,
            self.stop_time,
            filename,
            self.print_function,
            self.verbose,
        )
        return filename

    def __enter__(self) -> Session:
        self.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.stop()
