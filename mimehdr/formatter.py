"""
Text output for mimehdr.
"""

from html.parser import HTMLParser
import re
import textwrap
from typing import Any, Callable, Dict, List, Optional, Type, Union

from mimehdr.headers import Headers
from mimehdr.headers.mime_version import MimeVersion
from mimehdr.speak import Note, categories, levels

NL = "\n"


class NoteCollector:
    """
    Collects the notes made while processing a header block.
    """

    def __init__(self) -> None:
        self.notes: List[Note] = []

    def add_note(self, subject: str, note: Type[Note], **kw: Union[str, int]) -> None:
        self.notes.append(note(subject, kw))

    def has_level(self, level: levels) -> bool:
        return any(note.level == level for note in self.notes)


class TextFormatter:
    """
    Format the results of checking a header block as text.
    """

    note_categories = [
        categories.GENERAL,
        categories.MIME,
    ]

    def __init__(self, output: Callable[[str], None], params: Dict[str, Any] = None) -> None:
        self.output = output
        self.kw = params or {}
        self.verbose = self.kw.get("verbose", False)

    def format_results(self, source: str, headers: Headers, notes: List[Note]) -> None:
        self.output(self.colorize(None, source) + NL)
        version = headers.get(MimeVersion)
        self.output(f"{MimeVersion.canonical_name}: {version or '(none)'}{NL}")
        self.output(self.format_recommendations(notes) + NL)

    def format_recommendations(self, notes: List[Note]) -> str:
        return "".join(
            [
                self.format_recommendation(notes, category)
                for category in self.note_categories
            ]
        )

    def format_recommendation(self, notes: List[Note], category: categories) -> str:
        notes = [note for note in notes if note.category == category]
        if not notes:
            return ""
        out = [f"* {category.value}:"]
        for note in notes:
            out.append(f"  * {self.colorize(note.level, str(note.show_summary()))}")
            if self.verbose:
                out.append("")
                out.extend("    " + line for line in self.format_text(note))
                out.append("")
        out.append(NL)
        return NL.join(out)

    @staticmethod
    def format_text(note: Note) -> List[str]:
        return textwrap.wrap(strip_tags(re.sub(r"(?m)\s\s+", " ", note.show_text())))

    def colorize(self, level: Optional[levels], instr: str) -> str:
        if self.kw.get("tty_out", False):
            color_end = "\033[0;39m"
            if level == levels.GOOD:
                color_start = "\033[1;32m"
            elif level == levels.BAD:
                color_start = "\033[1;31m"
            elif level == levels.WARN:
                color_start = "\033[1;33m"
            else:
                color_start = "\033[1;34m"
            return color_start + instr + color_end
        return instr


class MLStripper(HTMLParser):
    def __init__(self) -> None:
        HTMLParser.__init__(self)
        self.reset()
        self.fed: List[str] = []

    def handle_data(self, data: str) -> None:
        self.fed.append(data)

    def get_data(self) -> str:
        return "".join(self.fed)


def strip_tags(html: str) -> str:
    stripper = MLStripper()
    stripper.feed(html)
    return stripper.get_data()
