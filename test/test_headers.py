#!/usr/bin/env python3

import unittest

from mimehdr.headers import (
    HeaderCountError,
    HeaderProcessor,
    Headers,
    LineFormatter,
    Raw,
    line_value,
)
from mimehdr.headers.mime_version import MIME_VERSION_1_0, MimeVersion
from mimehdr.speak import display_bytes


class TestRaw(unittest.TestCase):
    def test_one(self):
        self.assertEqual(Raw(b"1.0").one(), b"1.0")
        self.assertEqual(Raw("1.0").one(), b"1.0")
        self.assertIsNone(Raw().one())
        self.assertIsNone(Raw([b"1.0", b"2.0"]).one())

    def test_push(self):
        raw = Raw(b"a")
        raw.push("b")
        self.assertEqual(len(raw), 2)
        self.assertEqual(list(raw), [b"a", b"b"])
        self.assertEqual(raw[1], b"b")
        self.assertEqual(raw, Raw([b"a", b"b"]))

    def test_buffers(self):
        self.assertEqual(Raw(bytearray(b"1.0")).one(), b"1.0")
        self.assertEqual(Raw(memoryview(b"1.0")).one(), b"1.0")
        self.assertEqual(list(Raw([bytearray(b"a"), memoryview(b"b")])), [b"a", b"b"])
        self.assertEqual(MimeVersion.parse_header(Raw(bytearray(b"0.1"))), MimeVersion(0, 1))

    def test_single_value(self):
        self.assertEqual(MimeVersion.single_value(Raw(b"x")), b"x")
        with self.assertRaises(HeaderCountError):
            MimeVersion.single_value(Raw())
        with self.assertRaises(HeaderCountError):
            MimeVersion.single_value(Raw([b"x", b"y"]))


class TestDisplayBytes(unittest.TestCase):
    def test_display_bytes(self):
        i = 0
        for (inbytes, expected_str) in [
            (b"Subject", "Subject"),
            (b"Subj\xe9ct", "Subj\\xe9ct"),
            (b"a\tb", "a\\tb"),
            ("h\u00e9".encode("utf-8"), "h\u00e9"),
            (b"x" * 50, "x" * 40),
        ]:
            out_str = display_bytes(inbytes)
            self.assertEqual(expected_str, out_str,
                "[%s] %s != %s" % (i, str(expected_str), str(out_str)))
            i += 1


class TestLineFormatter(unittest.TestCase):
    def test_fmt_line(self):
        out = []
        f = LineFormatter("X-Test", out)
        f.fmt_line("a")
        f.fmt_line(1)
        self.assertEqual(out, ["X-Test: a\r\n", "X-Test: 1\r\n"])
        self.assertEqual(line_value(out[0]), "a")


class TestHeaders(unittest.TestCase):
    def test_empty(self):
        headers = Headers()
        self.assertEqual(len(headers), 0)
        self.assertIsNone(headers.get(MimeVersion))
        self.assertIsNone(headers.get_raw("MIME-Version"))
        self.assertEqual(str(headers), "")

    def test_case_insensitive(self):
        headers = Headers()
        headers.set_raw("mime-version", b"1.0")
        self.assertTrue(headers.has(MimeVersion))
        self.assertIn("MIME-VERSION", headers)
        self.assertEqual(headers.get(MimeVersion), MIME_VERSION_1_0)
        self.assertEqual(headers.get_raw("Mime-Version"), Raw(b"1.0"))

    def test_typed_to_raw(self):
        headers = Headers()
        headers.set(MimeVersion(0, 1))
        self.assertEqual(headers.get_raw("MIME-Version"), Raw(b"0.1"))

    def test_append_raw(self):
        headers = Headers()
        headers.set(MIME_VERSION_1_0)
        headers.append_raw("MIME-Version", "2.0")
        self.assertEqual(headers.get_raw("MIME-Version"), Raw([b"1.0", b"2.0"]))
        self.assertIsNone(headers.get(MimeVersion))
        self.assertEqual(str(headers), "MIME-Version: 1.0\r\nMIME-Version: 2.0\r\n")

    def test_set_replaces(self):
        headers = Headers()
        headers.set_raw("MIME-Version", [b"1.0", b"2.0"])
        headers.set(MIME_VERSION_1_0)
        self.assertEqual(len(headers), 1)
        self.assertEqual(headers.get(MimeVersion), MIME_VERSION_1_0)

    def test_remove(self):
        headers = Headers()
        headers.set(MIME_VERSION_1_0)
        headers.set_raw("Subject", "hi")
        headers.remove(MimeVersion)
        self.assertFalse(headers.has(MimeVersion))
        headers.remove("subject")
        self.assertEqual(len(headers), 0)
        headers.remove("not-there")

    def test_order_and_iteration(self):
        headers = Headers()
        headers.set_raw("Subject", "hi")
        headers.set(MIME_VERSION_1_0)
        headers.append_raw("Received", "a")
        headers.append_raw("received", "b")
        self.assertEqual(headers.names(), ["Subject", "MIME-Version", "Received"])
        self.assertEqual(
            list(headers),
            [
                ("Subject", "hi"),
                ("MIME-Version", "1.0"),
                ("Received", "a"),
                ("Received", "b"),
            ],
        )
        self.assertEqual(
            str(headers),
            "Subject: hi\r\nMIME-Version: 1.0\r\nReceived: a\r\nReceived: b\r\n",
        )

    def test_cached_parse(self):
        headers = Headers()
        headers.set_raw("MIME-Version", "1.0")
        first = headers.get(MimeVersion)
        self.assertIs(headers.get(MimeVersion), first)

    def test_from_raw(self):
        headers = Headers.from_raw(
            [(b"MIME-Version", b" 1.0"), (b"Subject", b" hi ")]
        )
        self.assertEqual(headers.get(MimeVersion), MIME_VERSION_1_0)
        self.assertEqual(headers.get_raw("subject"), Raw(b"hi"))


class TestHeaderProcessor(unittest.TestCase):
    def setUp(self):
        self.notes = []

    def add_note(self, subject, note, **kw):
        self.notes.append((subject, note.__name__, kw))

    def test_process(self):
        hp = HeaderProcessor(self.add_note)
        str_headers, parsed = hp.process(
            [(b"Subject", b" hello "), (b"MIME-Version", b" 1.0")]
        )
        self.assertEqual(str_headers, [("Subject", "hello"), ("MIME-Version", "1.0")])
        self.assertEqual(parsed.get(MimeVersion), MIME_VERSION_1_0)
        self.assertEqual(parsed.get_raw("Subject"), Raw(b"hello"))
        self.assertEqual(self.notes, [])

    def test_note_subjects(self):
        hp = HeaderProcessor(self.add_note)
        hp.process([(b"Subject", b"a"), (b"MIME-Version", b"9.9")])
        self.assertEqual(
            self.notes,
            [
                (
                    "header-mime_version",
                    "MIME_VERSION_UNKNOWN",
                    {"field_name": "MIME-Version", "version": "9.9"},
                )
            ],
        )

    def test_max_header_size(self):
        hp = HeaderProcessor(self.add_note, max_header_size=10)
        hp.process([(b"Subject", b"0123456789")])
        self.assertEqual([n[1] for n in self.notes], ["HEADER_TOO_LARGE"])
        self.assertEqual(self.notes[0][0], "offset-1")

    def test_long_value_skips_syntax(self):
        hp = HeaderProcessor(self.add_note)
        _, parsed = hp.process([(b"MIME-Version", b"1.0" + b" " * 8000 + b"x")])
        self.assertEqual([n[1] for n in self.notes], ["HEADER_TOO_LARGE"])
        self.assertIsNone(parsed.get(MimeVersion))

    def test_long_version(self):
        hp = HeaderProcessor(self.add_note)
        _, parsed = hp.process([(b"MIME-Version", b"9" * 5000 + b".0")])
        self.assertEqual(
            [n[1] for n in self.notes], ["HEADER_TOO_LARGE", "MIME_VERSION_RANGE"]
        )
        self.assertIsNone(parsed.get(MimeVersion))

    def test_unparseable_left_raw(self):
        hp = HeaderProcessor(self.add_note)
        _, parsed = hp.process([(b"MIME-Version", b"one.zero")])
        self.assertIsNone(parsed.get(MimeVersion))
        self.assertEqual(parsed.get_raw("MIME-Version"), Raw(b"one.zero"))


if __name__ == "__main__":
    unittest.main()
