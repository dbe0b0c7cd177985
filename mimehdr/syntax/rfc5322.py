"""
Regex for RFC5322

Only the productions needed to read a header block and the comments that
may appear in structured field bodies:

  https://tools.ietf.org/html/rfc5322#section-3.2.2

They should be processed with re.VERBOSE.
"""

from .rfc5234 import VCHAR, WSP, CRLF

# pylint: disable=invalid-name

SPEC_URL = "https://tools.ietf.org/html/rfc5322"


# quoted-pair     =   ("\" (VCHAR / WSP)) / obs-qp

quoted_pair = rf"(?: \\ (?: {VCHAR} | {WSP} ) )"

# ctext           =   %d33-39 /          ; Printable US-ASCII
#                     %d42-91 /          ;  characters not including
#                     %d93-126 /         ;  "(", ")", or "\"
#                     obs-ctext

ctext = r"[\x21-\x27\x2a-\x5b\x5d-\x7e]"

# ccontent        =   ctext / quoted-pair / comment
#
# Nested comments aren't expressible as a regex; they're matched one level deep.

_inner_comment = rf"(?: \( (?: {WSP}* (?: {ctext} | {quoted_pair} ) )* {WSP}* \) )"

ccontent = rf"(?: {ctext} | {quoted_pair} | {_inner_comment} )"

# FWS             =   ([*WSP CRLF] 1*WSP) /  obs-FWS

FWS = rf"(?: (?: {WSP}* {CRLF} )? {WSP}{{1,}} )"

# comment         =   "(" *([FWS] ccontent) [FWS] ")"

comment = rf"(?: \( (?: {FWS}? {ccontent} )* {FWS}? \) )"

# CFWS            =   (1*([FWS] comment) [FWS]) / FWS

CFWS = rf"(?: (?: {FWS}? {comment} ){{1,}} {FWS}? | {FWS} )"

# ftext           =   %d33-57 /          ; Printable US-ASCII
#                     %d59-126           ;  characters not including
#                                        ;  ":".

ftext = r"[\x21-\x39\x3b-\x7e]"

# field-name      =   1*ftext

field_name = rf"{ftext}+"
