#!/usr/bin/env python

"""
Typed header fields, and the machinery to find, parse, format and check them.

Headers holds the fields of a message; HeaderProcessor.process() builds one from a list of
(name, value) byte tuples, making notes about any problems it finds along the way.
"""

from functools import partial
import re
import sys
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)
import unittest

from mimehdr.speak import Note, display_bytes
from mimehdr.syntax import rfc5322
from mimehdr.type import (
    AddNoteMethodType,
    RawHeaderListType,
    RawLike,
    StrHeaderListType,
)

from ._notes import *

RE_FLAGS = re.VERBOSE | re.IGNORECASE
CRLF = "\r\n"

### configuration
MAX_HDR_SIZE = 4 * 1024


class HeaderError(ValueError):
    """A header field is malformed."""


class HeaderCountError(HeaderError):
    """A single-valued header field is missing, or occurs more than once."""


class HeaderEncodingError(HeaderError):
    """A header field value isn't valid UTF-8."""


class HeaderSyntaxError(HeaderError):
    """A header field value doesn't match its grammar."""


RawValueType = Union[bytes, bytearray, memoryview, str]


class Raw:
    """
    The raw occurrences of one header field, in the order they were seen.

    str values are stored as their UTF-8 encoding.
    """

    def __init__(self, values: Union[RawValueType, Iterable[RawValueType]] = ()) -> None:
        if isinstance(values, (bytes, bytearray, memoryview, str)):
            values = [values]
        self._values: List[bytes] = [self._to_bytes(value) for value in values]

    @staticmethod
    def _to_bytes(value: RawValueType) -> bytes:
        if isinstance(value, str):
            return value.encode("utf-8")
        return bytes(value)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._values)

    def __getitem__(self, index: int) -> bytes:
        return self._values[index]

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Raw):
            return self._values == other._values
        return NotImplemented

    def __repr__(self) -> str:
        return f"<Raw {[display_bytes(v) for v in self._values]}>"

    def one(self) -> Optional[bytes]:
        "Return the only occurrence, or None if there isn't exactly one."
        if len(self._values) == 1:
            return self._values[0]
        return None

    def push(self, value: RawValueType) -> None:
        "Add another occurrence."
        self._values.append(self._to_bytes(value))


class LineFormatter:
    """
    Writes header lines for one field name to out.
    """

    def __init__(self, name: str, out: List[str]) -> None:
        self.name = name
        self.out = out

    def fmt_line(self, value: Any) -> None:
        self.out.append(f"{self.name}: {value}{CRLF}")


class Header:
    """
    A typed header field value.

    Subclasses supply the field's name and how to parse and format it. They are found by
    find_header_class(), which looks in mimehdr.headers.<name_token> for an attribute called
    <name_token>.
    """

    canonical_name: str = None
    description: str = None
    reference: str = None
    syntax: Union[str, bool] = None  # Verbose regular expression to match.

    @classmethod
    def header_name(cls) -> str:
        return cls.canonical_name

    @classmethod
    def parse_header(cls, raw: RawLike) -> "Header":
        """
        Given the raw occurrences of the field, return a value or raise HeaderError.
        """
        raise NotImplementedError

    def fmt_header(self, f: LineFormatter) -> None:
        """
        Write the value to f.
        """
        raise NotImplementedError

    @classmethod
    def lint(cls, field_value: str, add_note: AddNoteMethodType) -> "Header":
        """
        Parse a single decoded field value on behalf of HeaderProcessor, making notes about
        anything questionable. Raises HeaderError if it can't be parsed.
        """
        return cls.parse_header(Raw(field_value))

    @staticmethod
    def single_value(raw: RawLike) -> bytes:
        """
        Return the only occurrence in raw; raise HeaderCountError if there isn't exactly one.
        """
        value = raw.one()
        if value is None:
            raise HeaderCountError(f"expected one value, got {len(raw)}")
        return value


HeaderType = TypeVar("HeaderType", bound=Header)


class _Field:
    "A field in a Headers collection; raw, typed or both."

    def __init__(self, name: str) -> None:
        self.name = name
        self.raw: Optional[Raw] = None
        self.typed: Optional[Header] = None

    def lines(self) -> List[str]:
        out: List[str] = []
        if self.typed is not None:
            self.typed.fmt_header(LineFormatter(self.name, out))
        elif self.raw is not None:
            for value in self.raw:
                out.append(f"{self.name}: {value.decode('utf-8', 'replace')}{CRLF}")
        return out


class Headers:
    """
    A collection of header fields, keyed by case-insensitive name.

    Fields can be set either as typed values or as raw occurrences; typed values are parsed
    from raw ones on demand, and cached.
    """

    def __init__(self) -> None:
        self._fields: Dict[str, _Field] = {}

    @classmethod
    def from_raw(cls, headers: RawHeaderListType) -> "Headers":
        "Build a collection from (bytes name, bytes value) tuples, without checking them."
        out = cls()
        for name, value in headers:
            out.append_raw(name.decode("ascii", "ignore").strip(), value.strip())
        return out

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, key: Union[str, Type[Header]]) -> bool:
        return self._key(key) in self._fields

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        for field in self._fields.values():
            for line in field.lines():
                name, value = line[: -len(CRLF)].split(": ", 1)
                yield name, value

    def __str__(self) -> str:
        return "".join(line for field in self._fields.values() for line in field.lines())

    def __repr__(self) -> str:
        return f"<Headers {list(self._fields)}>"

    @staticmethod
    def _key(key: Union[str, Type[Header]]) -> str:
        if isinstance(key, str):
            return key.strip().lower()
        return key.header_name().lower()

    def names(self) -> List[str]:
        "The field names present, as first seen."
        return [field.name for field in self._fields.values()]

    def set(self, value: Header) -> None:
        "Set a typed value, replacing anything already present for its name."
        field = _Field(value.header_name())
        field.typed = value
        self._fields[self._key(type(value))] = field

    def get(self, header_cls: Type[HeaderType]) -> Optional[HeaderType]:
        "Return the typed value for header_cls, or None if it's absent or malformed."
        try:
            return self.get_or_raise(header_cls)
        except HeaderError:
            return None

    def get_or_raise(self, header_cls: Type[HeaderType]) -> Optional[HeaderType]:
        "Return the typed value for header_cls, or None if it's absent. Raises HeaderError."
        field = self._fields.get(self._key(header_cls))
        if field is None:
            return None
        if isinstance(field.typed, header_cls):
            return field.typed
        if field.raw is None:
            raise HeaderError(f"{field.name} holds a different type")
        value = header_cls.parse_header(field.raw)
        field.typed = value
        return value  # type: ignore

    def has(self, header_cls: Type[Header]) -> bool:
        return header_cls in self

    def set_raw(self, name: str, value: Union[RawValueType, Iterable[RawValueType]]) -> None:
        "Set the raw occurrences for name, replacing anything already present."
        field = _Field(name.strip())
        field.raw = Raw(value)
        self._fields[self._key(name)] = field

    def append_raw(self, name: str, value: RawValueType) -> None:
        "Add a raw occurrence for name. Any cached typed value is dropped."
        key = self._key(name)
        field = self._fields.get(key)
        if field is None:
            field = self._fields[key] = _Field(name.strip())
        if field.raw is None:
            field.raw = Raw([line_value(l) for l in field.lines()])
        field.raw.push(value)
        field.typed = None

    def get_raw(self, name: str) -> Optional[Raw]:
        "Return the raw occurrences for name; typed values are formatted first."
        field = self._fields.get(self._key(name))
        if field is None:
            return None
        if field.raw is None:
            return Raw([line_value(l) for l in field.lines()])
        return field.raw

    def remove(self, key: Union[str, Type[Header]]) -> None:
        self._fields.pop(self._key(key), None)


def line_value(line: str) -> str:
    "Return the value part of a formatted header line."
    return line[: -len(CRLF)].split(":", 1)[1].strip()


def find_header_class(header_name: str) -> Optional[Type[Header]]:
    """
    Return the typed header class for the given field name, or None if there isn't one.
    """
    name_token = header_name_token(header_name)
    hdr_module = find_header_module(name_token)
    if hdr_module is None:
        return None
    header_cls = getattr(hdr_module, name_token, None)
    if isinstance(header_cls, type) and issubclass(header_cls, Header):
        return header_cls
    return None


def find_header_module(header_name: str) -> Any:
    """
    Return a module for the given field name, or None if it can't be found.
    """
    name_token = header_name_token(header_name)
    if not name_token or name_token[0] == "_":  # these are special
        return None
    try:
        module_name = f"mimehdr.headers.{name_token}"
        __import__(module_name)
        return sys.modules[module_name]
    except (ImportError, KeyError, TypeError, ValueError):
        return None


def header_name_token(header_name: str) -> str:
    """
    Return a tokenised, python-friendly name for a header.
    """
    return header_name.strip().replace("-", "_").lower()


class HeaderProcessor:
    """
    Parses and runs checks on a set of headers.
    """

    def __init__(self, add_note: AddNoteMethodType, max_header_size: int = MAX_HDR_SIZE) -> None:
        self.add_note = add_note
        self.max_header_size = max_header_size

    def process(self, headers: RawHeaderListType) -> Tuple[StrHeaderListType, Headers]:
        """
        Given a list of (bytes name, bytes value) headers and:
         - call add_note as appropriate
         - parse the fields that have a typed header class
        Returns:
         - a list of unicode header tuples
         - a Headers collection; fields that couldn't be parsed are left raw
        """
        unicode_headers = []  # unicode version of the header tuples
        parsed_headers = Headers()
        offset = 0  # what number header we're on

        for name, value in headers:
            offset += 1
            add_note = partial(self.add_note, f"offset-{offset}")

            header_size = len(name) + len(value)

            # decode the header to make it unicode clean
            try:
                str_name = name.decode("ascii", "strict")
            except UnicodeError:
                str_name = name.decode("ascii", "ignore")
                add_note(HEADER_NAME_ENCODING, field_name=display_bytes(name))
            str_name = str_name.strip()
            str_value = self.decode_value(value, partial(add_note, field_name=str_name))
            unicode_headers.append((str_name, str_value))

            if not re.match(rf"^{rfc5322.field_name}$", str_name, RE_FLAGS):
                add_note(FIELD_NAME_BAD_SYNTAX, field_name=str_name)
            if header_size > self.max_header_size:
                add_note(HEADER_TOO_LARGE, field_name=str_name, header_size=f"{header_size:,}")
            parsed_headers.append_raw(str_name, value.strip())

        # check each of the complete header values and get the parsed value
        for str_name in parsed_headers.names():
            header_cls = find_header_class(str_name)
            if header_cls is None:
                continue
            header_add_note = partial(
                self.add_note,
                f"header-{header_name_token(str_name)}",
                field_name=header_cls.canonical_name,
            )
            field_values = [
                v for (n, v) in unicode_headers if n.lower() == str_name.lower()
            ]
            typed_value = self.check_field(header_cls, field_values, header_add_note)
            if typed_value is not None:
                parsed_headers.set(typed_value)

        return unicode_headers, parsed_headers

    @staticmethod
    def decode_value(value: bytes, add_note: AddNoteMethodType) -> str:
        try:
            return value.decode("ascii", "strict").strip()
        except UnicodeError:
            pass
        try:
            str_value = value.decode("utf-8", "strict")
            encoding = "UTF-8"
        except UnicodeError:
            str_value = value.decode("iso-8859-1", "replace")
            encoding = "ISO-8859-1"
        add_note(HEADER_VALUE_ENCODING, encoding=encoding)
        return str_value.strip()

    def check_field(
        self, header_cls: Type[Header], field_values: List[str], add_note: AddNoteMethodType
    ) -> Optional[Header]:
        """
        Check the values of one field, and return its parsed value (or None).

        Values larger than max_header_size aren't matched against the syntax.
        """
        if header_cls.syntax:
            for field_value in field_values:
                if len(field_value) > self.max_header_size:
                    continue
                if not re.match(rf"^\s*(?:{header_cls.syntax})\s*$", field_value, RE_FLAGS):
                    add_note(BAD_SYNTAX, ref_uri=header_cls.reference)
        if len(field_values) > 1:
            add_note(SINGLE_HEADER_REPEAT)
            field_values = field_values[-1:]
        try:
            return header_cls.lint(field_values[0], add_note)
        except HeaderError:
            return None  # we assume that the parser made a note of the problem.


class HeaderTest(unittest.TestCase):
    """
    Testing machinery for headers.
    """

    name: str = None
    inputs: List[bytes] = []
    expected_out: Any = None
    expected_err: List[Type[Note]] = []

    def setUp(self) -> None:
        "Test setup."
        self.notes: List[Note] = []
        self.note_classes: List[str] = []

    def add_note(self, subject: str, note: Type[Note], **kw: Union[str, int]) -> None:
        "Record the classes of notes set."
        self.notes.append(note(subject, kw))
        self.note_classes.append(note.__name__)

    def test_header(self) -> Any:
        "Test the header."
        if not self.name:
            return self.skipTest("")
        name = self.name.encode("utf-8")
        hp = HeaderProcessor(self.add_note)
        _, parsed_headers = hp.process([(name, inp) for inp in self.inputs])
        header_cls = find_header_class(self.name)
        self.assertIsNotNone(header_cls, "HEADER CLASS NOT FOUND")
        out = parsed_headers.get(header_cls)
        self.assertEqual(self.expected_out, out)
        diff = {n.__name__ for n in self.expected_err}.symmetric_difference(
            set(self.note_classes)
        )
        for note in self.notes:  # check formatting
            note.vars.update({"field_name": self.name})
            self.assertTrue(note.text % note.vars)
            self.assertTrue(note.summary % note.vars)
        self.assertEqual(len(diff), 0, f"Mismatched notes: {diff}")
        return None
