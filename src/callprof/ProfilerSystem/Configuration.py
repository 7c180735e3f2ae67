from __future__ import annotations
import configparser
import time
from typing import Callable, Dict, Optional

from callprof.ProfilerSystem.ReportLayout import ReportLayout

CLOCKS: Dict[str, Callable[[], float]] = {
    "perf_counter": time.perf_counter,
    "process_time": time.process_time,
    "monotonic": time.monotonic,
}


class Configuration:
    """
    Class to hold the configuration parameters of a profiling run. Call
    Configuration.make() first to create a singleton configuration object, then
    call Configuration.get() to retrieve the singleton.
    """

    _instance = None

    SECTION = "callprof"

    @classmethod
    def make(cls, **kwargs) -> Configuration:
        """Create the configuration instance"""
        if cls._instance is None:
            cls._instance = cls(**kwargs)
        return cls._instance

    @classmethod
    def get(cls) -> Configuration:
        """Get the configuration instance"""
        if cls._instance is None:
            raise RuntimeError("Configuration has not been initialized")
        return cls._instance

    @classmethod
    def read_properties(cls, path: str) -> Dict[str, object]:
        """
        Read a configuration file with a [callprof] section into the keyword
        arguments of make().

        Raises:
            FileNotFoundError: the file does not exist
            configparser.Error: the section or the target is missing
            ValueError: a value cannot be converted
        """
        config = configparser.ConfigParser()
        if not config.read(path):
            raise FileNotFoundError(f"Configuration file not found: {path}")
        section = cls.SECTION

        self_label = config.get(section, "self_label", fallback="").strip()
        return dict(
            target=config.get(section, "target").strip(),
            output_file=config.get(section, "output_file", fallback="profiler.log").strip(),
            verbose=config.getboolean(section, "verbose", fallback=False),
            logging=config.getboolean(section, "logging", fallback=False),
            clock=config.get(section, "clock", fallback="perf_counter").strip(),
            repeat=config.getint(section, "repeat", fallback=1),
            show_progress=config.getboolean(section, "show_progress", fallback=False),
            self_label=self_label or None,
            file_width=config.getint(section, "file_width", fallback=20),
            function_width=config.getint(section, "function_width", fallback=28),
            line_width=config.getint(section, "line_width", fallback=7),
            time_width=config.getint(section, "time_width", fallback=7),
            relative_width=config.getint(section, "relative_width", fallback=6),
            count_width=config.getint(section, "count_width", fallback=5),
        )

    @classmethod
    def from_properties(cls, path: str) -> Configuration:
        """Build a configuration from a file without registering it."""
        return cls(**cls.read_properties(path))

    def __init__(self, **kwargs):
        # Dotted path of the callable to profile, e.g. "package.module.function"
        self.target: str = kwargs["target"]

        # The report file, overwritten on every run.
        self.output_file: str = kwargs.get("output_file", "profiler.log")

        # Mirror every report row to the console, not only the summary lines.
        self.verbose: bool = kwargs.get("verbose", False)
        self.logging_enabled: bool = kwargs.get("logging", False)

        self.clock_name: str = kwargs.get("clock", "perf_counter")
        if self.clock_name not in CLOCKS:
            raise ValueError(
                f"Unknown clock '{self.clock_name}', expected one of {sorted(CLOCKS)}"
            )

        # Number of times the target is run within one session.
        self.repeat: int = kwargs.get("repeat", 1)
        if self.repeat < 1:
            raise ValueError(f"repeat must be at least 1, got {self.repeat}")
        self.show_progress: bool = kwargs.get("show_progress", False)

        # None means the location of the callprof package.
        self.self_label: Optional[str] = kwargs.get("self_label")

        self.layout = ReportLayout(
            file_width=kwargs.get("file_width", 20),
            function_width=kwargs.get("function_width", 28),
            line_width=kwargs.get("line_width", 7),
            time_width=kwargs.get("time_width", 7),
            relative_width=kwargs.get("relative_width", 6),
            count_width=kwargs.get("count_width", 5),
        )

    @property
    def clock(self) -> Callable[[], float]:
        return CLOCKS[self.clock_name]
