"""
Regex for RFC2045

  https://tools.ietf.org/html/rfc2045#section-4

They should be processed with re.VERBOSE.
"""

from .rfc5234 import DIGIT
from .rfc5322 import CFWS

# pylint: disable=invalid-name

SPEC_URL = "https://tools.ietf.org/html/rfc2045"


# version := "MIME-Version" ":" 1*DIGIT "." 1*DIGIT
#
# Note that despite the syntactic freedom this gives, there is
# only a single MIME version at present, "1.0".

MIME_Version = rf"(?: {DIGIT}+ \. {DIGIT}+ )"

# RFC 822 comments are allowed around the version number, in keeping with
# the structured field rules of RFC 822 / RFC 5322:
#
#   MIME-Version: 1.0 (produced by MetaSend Vx.x)

MIME_Version_commented = rf"(?: {CFWS}? {MIME_Version} {CFWS}? )"
