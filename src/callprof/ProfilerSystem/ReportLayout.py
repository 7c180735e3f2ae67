class ReportLayout:
    """
    Column widths and printf-style templates of the report table. Identity
    titles and report rows are both built from one layout so that the header
    and the rows line up.
    """

    NIL_TIME = "0.0000"  # time too small to measure at this precision
    EMPTY_TO_THIS = "~"
    NATIVE_SOURCE = "[C]"
    ANONYMOUS = "Anon"
    REPORT_SAVED = "> Report saved to: "

    def __init__(
        self,
        file_width: int = 20,
        function_width: int = 28,
        line_width: int = 7,
        time_width: int = 7,
        relative_width: int = 6,
        count_width: int = 5,
    ) -> None:
        self.file_width = file_width
        self.function_width = function_width
        self.line_width = line_width
        self.time_width = time_width
        self.relative_width = relative_width
        self.count_width = count_width

        self.header_template = (
            f"| %-{file_width}s: %-{function_width}s: %-{line_width}s"
            f": %-{time_width}s: %-{relative_width}s: %-{count_width}s|\n"
        )
        self.title_template = (
            f"%-{file_width}.{file_width}s: "
            f"%-{function_width}.{function_width}s: %-{line_width}s"
        )
        self.row_template = (
            f"| %s: %-{time_width}s: %-{relative_width}s: %-{count_width}s|\n"
        )
        self.total_time_template = "> Total time: %f s\n"
        self.line_template = f"%{line_width - 2}i"
        self.time_template = "%04.4f"
        self.relative_template = "%03.1f"
        self.count_template = f"%{count_width - 1}i"

        self.header = self.header_template % (
            "FILE",
            "FUNCTION",
            "LINE",
            "TIME",
            "%",
            "#",
        )
        self.divider = "-" * (len(self.header) - 1) + "\n"

    def title(self, source_label: str, symbol_name: str, definition_line: int) -> str:
        return self.title_template % (
            source_label,
            symbol_name,
            self.line_template % definition_line,
        )

    def total_time(self, total_time: float) -> str:
        return self.total_time_template % total_time

    def row(self, title: str, timer: str, relative: str, count: str) -> str:
        return self.row_template % (title, timer, relative, count)
