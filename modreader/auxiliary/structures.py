class ModReaderError(Exception):
    """Exception raised for errors in modreader library.

    Attributes
    ----------
    message : str
        Error message.
    """

    def __init__(self, msg, *values):
        super(ModReaderError, self).__init__(msg, *values)
        self.message = msg
        self.values = values

    def __str__(self):
        if not self.values:
            return "modreader error, message: %s" % (repr(self.message),)
        else:
            return "modreader error, message: %s %r" % (repr(self.message), self.values)


class DataAccessError(ModReaderError):
    """Raised when an ontology source cannot be read or parsed.

    An index that fails to build is never returned half-filled, so this error
    means the reader cannot be used at all.

    Attributes
    ----------
    cause : Exception or None
        The underlying exception, also available as ``__cause__``
        when raised with ``raise ... from``.
    """

    def __init__(self, msg, cause=None):
        if cause is None:
            super(DataAccessError, self).__init__(msg)
        else:
            super(DataAccessError, self).__init__(msg, cause)
        self.cause = cause


class RemapWarning(UserWarning):
    """Issued when a PSI-MOD obsolete chain or parent hierarchy
    cannot be walked to the end (loops, missing terms, too deep)."""
