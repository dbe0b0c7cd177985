#!/usr/bin/env python

import re
from typing import Any

from mimehdr.headers import (
    Header,
    HeaderEncodingError,
    HeaderSyntaxError,
    HeaderTest,
    LineFormatter,
    Raw,
    BAD_SYNTAX,
    HEADER_TOO_LARGE,
    HEADER_VALUE_ENCODING,
    RE_FLAGS,
    SINGLE_HEADER_REPEAT,
)
from mimehdr.speak import Note, categories, levels
from mimehdr.syntax import rfc2045, rfc5322
from mimehdr.type import AddNoteMethodType, RawLike

VERSION_DIGITS = re.compile(r"[0-9]+")


class MimeVersion(Header):
    """
    The version of MIME a message conforms to, as a (major, minor) pair of bytes.
    """

    canonical_name = "MIME-Version"
    description = """\
The `MIME-Version` header declares that a message conforms to MIME, and which version of it. The
only version defined is 1.0; it needs to be present on any message that uses MIME features such
as multipart bodies or `Content-Transfer-Encoding`."""
    reference = f"{rfc2045.SPEC_URL}#section-4"
    syntax = rfc2045.MIME_Version_commented

    def __init__(self, major: int, minor: int) -> None:
        self._major = self._check_octet(major)
        self._minor = self._check_octet(minor)

    @staticmethod
    def _check_octet(value: int) -> int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"version numbers are integers, not {type(value).__name__}")
        if not 0 <= value <= 255:
            raise ValueError(f"version number {value} doesn't fit in a byte")
        return value

    @property
    def major(self) -> int:
        return self._major

    @property
    def minor(self) -> int:
        return self._minor

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_minor"):
            raise AttributeError(f"{self.__class__.__name__} is immutable")
        super().__setattr__(name, value)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, MimeVersion):
            return (self.major, self.minor) == (other.major, other.minor)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.major, self.minor))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    def __repr__(self) -> str:
        return f"MimeVersion({self.major}, {self.minor})"

    @classmethod
    def default(cls) -> "MimeVersion":
        return MIME_VERSION_1_0

    @classmethod
    def parse_header(cls, raw: RawLike) -> "MimeVersion":
        try:
            field_value = cls.single_value(raw).decode("utf-8")
        except UnicodeDecodeError as why:
            raise HeaderEncodingError(f"{cls.canonical_name} isn't UTF-8") from why
        # Only the first two components are used; anything after a second "." is ignored.
        parts = field_value.split(".")
        if len(parts) < 2:
            raise HeaderSyntaxError(f"no '.' in {cls.canonical_name} {field_value!r}")
        return cls(cls._parse_octet(parts[0]), cls._parse_octet(parts[1]))

    @classmethod
    def _parse_octet(cls, digits: str) -> int:
        if not VERSION_DIGITS.fullmatch(digits):
            raise HeaderSyntaxError(f"{digits[:10]!r} isn't a version number")
        digits = digits.lstrip("0") or "0"
        if len(digits) > 3:
            raise HeaderSyntaxError(f"version number {digits[:10]}... is out of range")
        value = int(digits)
        if value > 255:
            raise HeaderSyntaxError(f"version number {value} is out of range")
        return value

    def fmt_header(self, f: LineFormatter) -> None:
        f.fmt_line(str(self))

    @classmethod
    def lint(cls, field_value: str, add_note: AddNoteMethodType) -> "MimeVersion":
        if "(" in field_value:
            uncommented = re.sub(rfc5322.comment, "", field_value, flags=RE_FLAGS).strip()
            if uncommented != field_value:
                add_note(MIME_VERSION_COMMENT)
                field_value = uncommented
        try:
            version = cls.parse_header(Raw(field_value))
        except HeaderSyntaxError:
            if re.match(rf"^{rfc2045.MIME_Version}$", field_value, RE_FLAGS):
                add_note(MIME_VERSION_RANGE, version=field_value)
            raise
        if field_value.count(".") > 1:
            add_note(MIME_VERSION_EXTRA, version=str(version), field_value=field_value)
        if version != MIME_VERSION_1_0:
            add_note(MIME_VERSION_UNKNOWN, version=str(version))
        return version


MIME_VERSION_1_0 = MimeVersion(1, 0)

# find_header_class() looks the class up by name token.
mime_version = MimeVersion


class MIME_VERSION_COMMENT(Note):
    category = categories.MIME
    level = levels.INFO
    summary = "The %(field_name)s header contains a comment."
    text = """\
`MIME-Version` is a structured header, so it can carry comments in parentheses; e.g.,
`MIME-Version: 1.0 (produced by MetaSend Vx.x)`.

Comments are ignored when checking the header, but they're uncommon, and some parsers don't
expect them. Strict parsers (including this one, outside of these checks) will reject the header."""


class MIME_VERSION_RANGE(Note):
    category = categories.MIME
    level = levels.BAD
    summary = "The %(field_name)s header's version numbers are too large."
    text = """\
The version `%(version)s` is syntactically valid, but its numbers don't fit in a byte (0 to 255),
so mimehdr can't represent it."""


class MIME_VERSION_EXTRA(Note):
    category = categories.MIME
    level = levels.WARN
    summary = "The %(field_name)s header has more than two version numbers."
    text = """\
A MIME version is two numbers separated by a single dot; e.g., `1.0`.

The value `%(field_value)s` has extra numbers after the second one. mimehdr has used
`%(version)s` and ignored the rest, but other implementations may reject the header instead."""


class MIME_VERSION_UNKNOWN(Note):
    category = categories.MIME
    level = levels.WARN
    summary = "The %(field_name)s header declares an unknown version (%(version)s)."
    text = """\
The only version of MIME that has been defined is 1.0. Messages that declare any other version
are unlikely to be interpreted correctly by receivers; see
[RFC2045](https://tools.ietf.org/html/rfc2045#section-4)."""


class MimeVersionTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b"1.0"]
    expected_out = MIME_VERSION_1_0
    expected_err = []  # type: ignore


class MimeVersionZeroOneTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b"0.1"]
    expected_out = MimeVersion(0, 1)
    expected_err = [MIME_VERSION_UNKNOWN]


class MimeVersionCaseTest(HeaderTest):
    name = "mime-version"
    inputs = [b"1.0"]
    expected_out = MIME_VERSION_1_0
    expected_err = []  # type: ignore


class MimeVersionSpaceTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b" 1.0 "]
    expected_out = MIME_VERSION_1_0
    expected_err = []  # type: ignore


class MimeVersionEmptyTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b""]
    expected_out = None
    expected_err = [BAD_SYNTAX]


class MimeVersionNoDotTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b"1"]
    expected_out = None
    expected_err = [BAD_SYNTAX]


class MimeVersionTextTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b"abc.0"]
    expected_out = None
    expected_err = [BAD_SYNTAX]


class MimeVersionRangeTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b"256.0"]
    expected_out = None
    expected_err = [MIME_VERSION_RANGE]


class MimeVersionExtraTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b"1.0.5"]
    expected_out = MIME_VERSION_1_0
    expected_err = [BAD_SYNTAX, MIME_VERSION_EXTRA]


class MimeVersionCommentTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b"1.0 (produced by MetaSend Vx.x)"]
    expected_out = MIME_VERSION_1_0
    expected_err = [MIME_VERSION_COMMENT]


class MimeVersionRepeatTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b"2.0", b"1.0"]
    expected_out = MIME_VERSION_1_0
    expected_err = [SINGLE_HEADER_REPEAT]


class MimeVersionRepeatBadTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b"1.0", b"1"]
    expected_out = None
    expected_err = [SINGLE_HEADER_REPEAT, BAD_SYNTAX]


class MimeVersionEncodingTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b"1.\xff"]
    expected_out = None
    expected_err = [HEADER_VALUE_ENCODING, BAD_SYNTAX]


class MimeVersionLongTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b"9" * 5000 + b".0"]
    expected_out = None
    expected_err = [HEADER_TOO_LARGE, MIME_VERSION_RANGE]


class MimeVersionLeadingZerosTest(HeaderTest):
    name = "MIME-Version"
    inputs = [b"0" * 5000 + b"1.0"]
    expected_out = MIME_VERSION_1_0
    expected_err = [HEADER_TOO_LARGE]
