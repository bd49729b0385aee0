"""
Exceptions raised by the page-assembly operations
"""


class AssemblyError(Exception):
    """Base class for failures that abort an assembly operation"""


class SourceOpenError(AssemblyError):
    """A source path is missing, unreadable, or not a usable PDF"""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not open '{path}': {reason}")


class SaveError(AssemblyError):
    """Writing an output document failed"""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not save '{path}': {reason}")


class DuplicateDestinationError(AssemblyError):
    """Two extracts of one split target the same output file"""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Destination '{path}' is already used by another extract")


class PageRefReusedError(AssemblyError):
    """A page reference was appended to an output more than once"""
