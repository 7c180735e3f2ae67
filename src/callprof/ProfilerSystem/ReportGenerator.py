from __future__ import annotations
import logging
from typing import Callable, Collection, Iterable, List, Optional

from callprof.ProfilerSystem.FunctionIdentity import FunctionIdentity
from callprof.ProfilerSystem.FunctionRecord import FunctionRecord
from callprof.ProfilerSystem.ReportLayout import ReportLayout


class ReportGenerator:
    """
    Writes the profile report: records ordered by cumulative time, one row per
    function that was called during the session.

    Rows whose time rounds to 0.0000 are moved below an extra divider and show
    ``~`` for time and percentage, as they ran too fast to be measured. The
    profiler's own functions (the ``excluded`` identities, or sources matching
    ``self_label``) and builtins are left out of the table.
    """

    def __init__(
        self,
        self_label: str = "",
        layout: Optional[ReportLayout] = None,
        excluded: Collection[FunctionIdentity] = (),
    ) -> None:
        self.self_label = self_label
        self.layout = layout or ReportLayout()
        self.excluded = excluded

    def is_reported(self, record: FunctionRecord, total_time: float) -> bool:
        if record.call_count <= 0 or record.cumulative_time > total_time:
            return False
        if record.identity in self.excluded:
            return False
        if self.self_label and self.self_label in record.identity.source_label:
            return False
        return not record.identity.is_native

    def lines(self, records: Iterable[FunctionRecord], total_time: float) -> List[str]:
        """
        Table rows, including the divider in front of the first unmeasurable
        row. The header and the closing divider are not part of the result.
        """
        layout = self.layout
        output: List[str] = []
        divide = False
        for record in sorted(records, key=lambda r: r.cumulative_time, reverse=True):
            if not self.is_reported(record, total_time):
                continue
            count = layout.count_template % record.call_count
            timer = layout.time_template % record.cumulative_time
            if total_time:
                relative = layout.relative_template % (
                    record.cumulative_time / total_time * 100
                )
            else:
                relative = layout.relative_template % 0.0
            if timer == ReportLayout.NIL_TIME:
                if not divide:
                    output.append(layout.divider)
                    divide = True
                timer = ReportLayout.EMPTY_TO_THIS
                relative = ReportLayout.EMPTY_TO_THIS
            output.append(layout.row(record.title, timer, relative, count))
        return output

    def generate(
        self,
        records: Iterable[FunctionRecord],
        start_time: float,
        stop_time: float,
        filename: str,
        print_function: Optional[Callable[[str], None]] = None,
        verbose: bool = False,
    ) -> None:
        """
        Write the report to ``filename``, overwriting it.

        Args:
            records: snapshot of the session records, in any order
            start_time: clock reading when the session started
            stop_time: clock reading when the session stopped
            filename: destination of the report
            print_function: receives the total time line and the save notice
            verbose: also pass every table row to print_function

        Raises:
            OSError: the file cannot be opened for writing
        """
        layout = self.layout
        total_time = stop_time - start_time
        with open(filename, "w", encoding="utf-8") as writer:
            total_time_output = layout.total_time(total_time)
            writer.write(total_time_output)
            if print_function is not None:
                print_function(total_time_output.rstrip("\n"))
            writer.write(layout.divider)
            writer.write(layout.header)
            writer.write(layout.divider)
            for output in self.lines(records, total_time):
                writer.write(output)
                if (
                    print_function is not None
                    and verbose
                    and output != layout.divider
                ):
                    print_function(output.rstrip("\n"))
            writer.write(layout.divider)

        logging.info(f"Profile report written to {filename}")
        if print_function is not None:
            print_function(f"{ReportLayout.REPORT_SAVED}'{filename}'")
