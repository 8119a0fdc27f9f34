"""Exceptions raised by the rugby club core."""


class UnreadableDocumentError(Exception):
    """An uploaded schedule could not be decoded at all.

    Raised when a PDF cannot be opened or yields no readable text, or when
    a plain-text upload is not valid UTF-8. Individual lines that fail to
    parse never raise; they are dropped.
    """
