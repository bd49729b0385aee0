"""
Validated page intervals shared by source documents, extracts and rotations
"""


class PageRange:
    """
    An inclusive, 1-based [start, end] interval inside a document of page_count pages.

    Edits that would break 1 <= start <= end <= page_count are rejected and the
    previous value is kept. Setters report whether the change applied instead of
    raising, so a caller can feed raw user input straight in.
    """

    def __init__(self, page_count, on_change=None):
        if not isinstance(page_count, int) or page_count < 1:
            raise ValueError(f"page_count must be a positive integer, got {page_count!r}")
        self.page_count = page_count
        self._start = 1
        self._end = page_count
        # Called as on_change(field_name, new_value) after an accepted edit
        self.on_change = on_change

    @property
    def start(self):
        return self._start

    @property
    def end(self):
        return self._end

    def set_start(self, value):
        """Move the first page of the range. Returns True if the value changed."""
        if not _is_page_number(value) or value == self._start:
            return False
        if value > self.page_count or value <= 0 or value > self._end:
            return False
        self._start = value
        self._notify('start', value)
        return True

    def set_end(self, value):
        """Move the last page of the range. Returns True if the value changed."""
        if not _is_page_number(value) or value == self._end:
            return False
        if value > self.page_count or value <= 0 or value < self._start:
            return False
        self._end = value
        self._notify('end', value)
        return True

    def set(self, start, end):
        """
        Apply both bounds, or neither if [start, end] is not a valid range.

        Returns True if the range now equals [start, end].
        """
        if not (_is_page_number(start) and _is_page_number(end)):
            return False
        if not 1 <= start <= end <= self.page_count:
            return False
        # Order the edits so the intermediate range stays valid
        if start > self._end:
            self.set_end(end)
            self.set_start(start)
        else:
            self.set_start(start)
            self.set_end(end)
        return True

    def pages(self):
        """1-based page numbers covered by the range, ascending"""
        return range(self._start, self._end + 1)

    def _notify(self, field, value):
        if self.on_change is not None:
            self.on_change(field, value)

    def __len__(self):
        return self._end - self._start + 1

    def __iter__(self):
        return iter(self.pages())

    def __repr__(self):
        return f"PageRange({self._start}-{self._end} of {self.page_count})"


def _is_page_number(value):
    # bool is an int subclass but never a page number
    return isinstance(value, int) and not isinstance(value, bool)


def parse_range(range_string):
    """
    Parse a page range from text.

    Supports: "4" (single page) and "3-7" (inclusive range).

    Args:
        range_string (str): Text to parse

    Returns:
        tuple: (start, end) as 1-based integers

    Raises:
        ValueError: If the text is not a single page or a start-end pair
    """
    part = range_string.strip()
    if '-' in part:
        start, end = part.split('-', 1)
        start = int(start.strip())
        end = int(end.strip())
    else:
        start = end = int(part)
    if start < 1 or end < start:
        raise ValueError(f"Invalid page range '{range_string}'")
    return start, end


def split_path_and_range(argument):
    """
    Split a command-line argument of the form "file.pdf:3-7" into its parts.

    Returns:
        tuple: (path, (start, end)) or (path, None) when no range is attached
    """
    path, sep, tail = argument.rpartition(':')
    # "C:\\file.pdf" has a colon but no range after it
    if sep and tail and tail[0].isdigit() and path:
        return path, parse_range(tail)
    return argument, None
