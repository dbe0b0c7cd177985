"""
Notes: what mimehdr says about the headers it checks.

summary is plain text; text is markdown, and its variables are escaped before rendering.
"""

from enum import Enum
from typing import Dict, Union

from markdown import markdown
from markupsafe import Markup, escape


class categories(Enum):
    "Note classifications."
    GENERAL = "General"
    MIME = "MIME"


class levels(Enum):
    "Note levels."
    GOOD = "good"
    WARN = "warning"
    BAD = "bad"
    INFO = "info"


class Note:
    """
    A note about a header field, or the header block it arrived in.
    """

    category = None  # type: categories
    level = None  # type: levels
    summary = ""
    text = ""

    def __init__(self, subject: str, vrs: Dict[str, Union[str, int]] = None) -> None:
        self.subject = subject
        self.vars = vrs or {}

    def show_summary(self) -> Markup:
        "The summary, with variables filled in."
        return Markup(self.summary % self.vars)

    def show_text(self) -> Markup:
        "The text rendered as HTML."
        return Markup(
            markdown(
                self.text % {k: escape(str(v)) for k, v in self.vars.items()},
                output_format="html",
            )
        )


def display_bytes(inbytes: bytes, truncate: int = 40) -> str:
    "Show bytes as text; undecodable and unprintable characters are escaped."
    instr = inbytes[:truncate].decode("utf-8", "backslashreplace")
    return "".join(
        char if char.isprintable() else char.encode("unicode_escape").decode("ascii")
        for char in instr
    )
