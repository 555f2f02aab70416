#
# UCD_errors.py - error types raised while reading the Unicode Character
# Database (UCD).
#
#
# Licensed under Open Software License 3.0.
#
#
import os.path
from contextlib import contextmanager


class UCDError(Exception):
    """
    Base class of all UCD ingestion errors.

    An error may be located at a particular input line; the location is
    attached by the line reader once the error propagates out of the code
    decoding that line.
    """
    def __init__(self, message, filename=None, line_no=None, line=None):
        Exception.__init__(self, message)
        self.message = message
        self.filename = filename
        self.line_no = line_no
        self.line = line

    def locate(self, filename, line_no=None, line=None):
        if self.filename is None:
            self.filename = filename
            self.line_no = line_no
            self.line = line
        return self

    def __str__(self):
        if self.filename is None:
            return self.message
        name = os.path.basename(str(self.filename))
        if self.line_no is None:
            return "%s: %s" % (name, self.message)
        return "%s:%i: %s" % (name, self.line_no, self.message)


# wrong field count or unparsable token
class MalformedLine(UCDError):
    pass


# <..., First> without matching <..., Last> (or the reverse)
class UnpairedRangeMarker(UCDError):
    pass


# lo > hi, bound outside [0, 0x10FFFF], or overlap within one stream
class InvalidRange(UCDError):
    pass


class UnknownPropertyValue(UCDError):
    pass


class UnknownProperty(UnknownPropertyValue):
    pass


# read or write fault other than a broken pipe
class IoFailure(UCDError):
    pass


#
#  located attaches the location of a source line (path, line_no, text)
#  to any UCDError raised in its block.  A source of None attaches nothing.
#
@contextmanager
def located(source):
    try:
        yield source
    except UCDError as e:
        if source is not None: e.locate(source.path, source.line_no, source.text)
        raise
