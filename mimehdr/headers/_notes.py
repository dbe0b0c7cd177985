"""
Common header-related Notes.
"""

from mimehdr.speak import Note, categories, levels


class SINGLE_HEADER_REPEAT(Note):
    category = categories.GENERAL
    level = levels.BAD
    summary = "Only one %(field_name)s header is allowed in a message."
    text = """\
This header is designed to only occur once in a message. When it occurs more than once, a receiver
needs to choose the one to use, which can lead to interoperability problems, since different
implementations may make different choices.

For the purposes of its checks, mimehdr uses the last instance of the header that is present;
other implementations may behave differently, and a strict parser will reject the header
entirely."""


class FIELD_NAME_BAD_SYNTAX(Note):
    category = categories.GENERAL
    level = levels.BAD
    summary = '"%(field_name)s" is not a valid header field-name.'
    text = """\
Header field names are limited to printable US-ASCII characters, excluding the colon; i.e., they
can't contain spaces, tabs, control characters or non-ASCII characters."""


class BAD_SYNTAX(Note):
    category = categories.GENERAL
    level = levels.BAD
    summary = "The %(field_name)s header's syntax isn't valid."
    text = """\
The value for this header doesn't conform to its specified syntax; see [its
definition](%(ref_uri)s) for more information."""


class HEADER_TOO_LARGE(Note):
    category = categories.GENERAL
    level = levels.WARN
    summary = "The %(field_name)s header is very large (%(header_size)s bytes)."
    text = """\
Some implementations limit the size of any single header line."""


class HEADER_NAME_ENCODING(Note):
    category = categories.GENERAL
    level = levels.BAD
    summary = "The %(field_name)s header's name contains non-ASCII characters."
    text = """\
Header field-names can only contain ASCII characters. mimehdr has detected (and possibly
removed) non-ASCII characters in this header name."""


class HEADER_VALUE_ENCODING(Note):
    category = categories.GENERAL
    level = levels.WARN
    summary = "The %(field_name)s header's value contains non-ASCII characters."
    text = """\
Message headers are pure ASCII unless an extension such as internationalised email (RFC 6532) is
in use.

This header has non-ASCII characters, which mimehdr has interpreted as being encoded in
%(encoding)s. If another encoding is used, the results may be unpredictable."""

