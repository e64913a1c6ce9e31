"""Table construction and parsing errors."""


class GlazeError(Exception):
    """Base class for glaze errors."""
    pass


class MalformedTable(GlazeError):
    """Table data is inconsistent with its declared grid size.

    Fatal to that table only. No partial table is ever produced.
    """
    pass


class CubeParseError(MalformedTable):
    """A .cube source could not be turned into a 3D table."""
    pass
