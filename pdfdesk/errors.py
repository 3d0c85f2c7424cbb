"""Error kinds raised by the storage and transform layers.

Filesystem failures are not wrapped: they propagate as the builtin ``OSError``
family (``FileNotFoundError``, ``PermissionError`` ...).
"""


class PdfDeskError(Exception):
    """Base class for pdfdesk errors."""


class InvalidFileName(PdfDeskError):
    """A file name does not denote an entry of the managed directory."""


class RenameError(PdfDeskError):
    """The new name sanitizes to nothing or the destination already exists."""


class DestinationExists(RenameError):
    """A rename target is already taken."""


class NoValidRangesError(PdfDeskError):
    """No page range survived parsing."""


class NoPagesSelectedError(PdfDeskError):
    """An extraction was requested with no pages."""


class NoImagesError(PdfDeskError):
    """An image conversion was requested with no images."""


class NotEnoughDocumentsError(PdfDeskError):
    """A merge needs at least two source documents."""


class SignatureNotFound(PdfDeskError):
    """No saved signature has the requested id."""


class RenderError(PdfDeskError):
    """The HTML-to-PDF renderer failed to produce a file."""
