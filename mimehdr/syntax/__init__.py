#!/usr/bin/env python

import re
import sys

__all__ = [
    "rfc2045",
    "rfc5234",
    "rfc5322",
]


def check_regex() -> None:
    """Grab all the regex in this module."""
    for module_name in __all__:
        full_name = f"mimehdr.syntax.{module_name}"
        __import__(full_name)
        module = sys.modules[full_name]
        for attr_name in dir(module):
            attr_value = getattr(module, attr_name, None)
            if isinstance(attr_value, str) and not attr_name.startswith("_"):
                try:
                    re.compile(attr_value, re.VERBOSE)
                except re.error as why:
                    print("*", module_name, attr_name, why)


if __name__ == "__main__":
    check_regex()
