class FetchFailure(Exception):
    """A remote call failed. `str(exc)` is a message fit for the user."""


class ExtractionFailure(FetchFailure):
    """A page was fetched but no readable text could be extracted from it."""


class MarkReadFailure(FetchFailure):
    pass
