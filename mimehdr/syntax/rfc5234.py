"""
Regex for ABNF

These regex are directly derived from the core ABNF in RFC5234:

  https://tools.ietf.org/html/rfc5234#appendix-B.1

They should be processed with re.VERBOSE.
"""


# CR             =  %x0D
#                     ; carriage return

CR = r"[\x0D]"

# LF             =  %x0A
#                     ; linefeed

LF = r"[\x0A]"

# CRLF           =  CR LF
#                     ; Internet standard newline

CRLF = rf"(?: {CR} {LF} )"

# DIGIT          =  %x30-39
#                     ; 0-9

DIGIT = r"[\x30-\x39]"

# HTAB           =  %x09
#                     ; horizontal tab

HTAB = r"[\x09]"

# SP             =  %x20

SP = r"[\x20]"

# VCHAR          =  %x21-7E
#                     ; visible (printing) characters

VCHAR = r"[\x21-\x7E]"

# WSP            =  SP / HTAB
#                     ; white space

WSP = rf"(?: {SP} | {HTAB} )"
