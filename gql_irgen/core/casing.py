"""Identifier casing with initialism awareness.

Splits identifiers into words and re-cases them so that well-known
initialisms (API, ID, URL, ...) are kept upper case as a unit:

    to_exported("user_id")    -> "UserID"
    to_exported("htmlParser") -> "HTMLParser"
    to_field("UserID")        -> "userID"
    to_snake("UserID")        -> "user_id"
    de_initialism("UserID")   -> "UserId"

Only identifier-shaped input is supported: letters, digits, ``-``, ``_`` and
whitespace.
"""

from typing import NamedTuple

# Mixed-case form -> upper-case initialism.
# Only add entries that are highly unlikely to be ordinary words.
INITIALISMS: dict[str, str] = {
    "Acl": "ACL",
    "Api": "API",
    "Ascii": "ASCII",
    "Cpu": "CPU",
    "Css": "CSS",
    "Csv": "CSV",
    "Dns": "DNS",
    "Eof": "EOF",
    "Guid": "GUID",
    "Html": "HTML",
    "Http": "HTTP",
    "Https": "HTTPS",
    "Icmp": "ICMP",
    "Id": "ID",
    "Ip": "IP",
    "Json": "JSON",
    "Kvk": "KVK",
    "Lhs": "LHS",
    "Pdf": "PDF",
    "Pgp": "PGP",
    "Qps": "QPS",
    "Qr": "QR",
    "Ram": "RAM",
    "Rhs": "RHS",
    "Rpc": "RPC",
    "Sla": "SLA",
    "Smtp": "SMTP",
    "Sql": "SQL",
    "Ssh": "SSH",
    "Svg": "SVG",
    "Tcp": "TCP",
    "Tls": "TLS",
    "Ttl": "TTL",
    "Udp": "UDP",
    "Ui": "UI",
    "Uid": "UID",
    "Uri": "URI",
    "Url": "URL",
    "Utf8": "UTF8",
    "Uuid": "UUID",
    "Vm": "VM",
    "Xml": "XML",
    "Xmpp": "XMPP",
    "Xsrf": "XSRF",
    "Xss": "XSS",
}

# Upper-case initialism -> mixed-case form.
INITIALISMS_REV: dict[str, str] = {upper: mixed for mixed, upper in INITIALISMS.items()}


class Word(NamedTuple):
    """A word produced by split_words."""
    text: str
    # The upper-cased word is itself a known initialism
    matches_initialism: bool
    # An initialism was seen while this word was being consumed (URLs)
    has_initialism: bool


def is_delimiter(char: str) -> bool:
    """Return True for word separators: '-', '_' or whitespace."""
    return char in ("-", "_") or char.isspace()


def _trim_delimiters(name: str) -> str:
    start, end = 0, len(name)
    while start < end and is_delimiter(name[start]):
        start += 1
    while end > start and is_delimiter(name[end - 1]):
        end -= 1
    return name[start:end]


def split_words(name: str) -> list[Word]:
    """Split an identifier into words.

    A word ends at the end of the string, before a run of delimiters, or on a
    lower -> non-lower transition. Delimiter runs are dropped, except that a
    single delimiter between two digits is kept (``v1_2`` stays apart). A
    pending upper-case initialism is cut early when the next character is not
    lower case, so ``IDFoo`` gives ``ID``, ``Foo`` while ``URLs`` stays whole.

    Args:
        name: The identifier to split.

    Returns:
        The words in order; empty when nothing but delimiters was given.
    """
    chars = list(_trim_delimiters(name))
    words: list[Word] = []
    start = i = 0
    has_initialism = False

    while i + 1 <= len(chars):
        end_of_word = False
        if i + 1 == len(chars):
            end_of_word = True
        elif is_delimiter(chars[i + 1]):
            end_of_word = True
            run = 1
            while i + run + 1 < len(chars) and is_delimiter(chars[i + run + 1]):
                run += 1
            # keep one delimiter between two digits
            if i + run + 1 < len(chars) and chars[i].isdigit() and chars[i + run + 1].isdigit():
                run -= 1
            del chars[i + 1:i + run + 1]
        elif chars[i].islower() and not chars[i + 1].islower():
            end_of_word = True
        i += 1

        text = "".join(chars[start:i])
        if not end_of_word and text in INITIALISMS_REV and not chars[i].islower():
            # IDFoo -> ID, Foo
            pass
        elif not end_of_word:
            if text in INITIALISMS_REV:
                has_initialism = True
            continue

        matches = text.upper() in INITIALISMS_REV
        if matches:
            has_initialism = True
        words.append(Word(text, matches, has_initialism))
        has_initialism = False
        start = i

    return words


def upper_first(s: str) -> str:
    """Upper-case the first character only."""
    if not s:
        return ""
    return s[0].upper() + s[1:]


def lower_first(s: str) -> str:
    """Lower-case the first character only."""
    if not s:
        return ""
    return s[0].lower() + s[1:]


def to_exported(name: str) -> str:
    """Render a name in exported (PascalCase) form with upper-case initialisms.

    Words that are initialisms are upper-cased, plain all-upper or all-lower
    words are title-cased, and mixed words such as ``FOo`` keep their casing.
    """
    if name == "_":
        return "_"
    parts = []
    for word in split_words(name):
        text = word.text
        if word.matches_initialism:
            text = text.upper()
        elif not word.has_initialism:
            if text.upper() == text or text.lower() == text:
                # FOO or foo -> Foo
                text = upper_first(text.lower())
        parts.append(text)
    return "".join(parts)


def to_field(name: str) -> str:
    """Exported form with a lower-case first character."""
    return lower_first(to_exported(name))


def to_snake(name: str) -> str:
    """Render a name in snake_case: ``UserID`` -> ``user_id``."""
    parts = [word.text.strip("-_").lower() for word in split_words(name)]
    return "_".join(part for part in parts if part)


def to_camel(name: str) -> str:
    """Plain PascalCase without initialism handling: ``api_key`` -> ``ApiKey``."""
    return "".join(upper_first(word.text.lower()) for word in split_words(name))


def short_name(name: str) -> str:
    """Lower-cased concatenation of the ASCII upper-case letters of a name.

    ``OrderItem`` -> ``oi``; used as a terse loop variable.
    """
    return "".join(c for c in name if "A" <= c <= "Z").lower()


def _replace_suffix(s: str, table: dict[str, str]) -> str:
    # longest candidate first so HTTPS wins over a shorter accidental match
    for size in range(5, 1, -1):
        if len(s) >= size and s[-size:] in table:
            return s[:-size] + table[s[-size:]]
    return s


def de_initialism(s: str) -> str:
    """Replace a trailing upper-case initialism with its mixed form.

    ``UserID`` -> ``UserId``, ``PageURL`` -> ``PageUrl``.
    """
    return _replace_suffix(s, INITIALISMS_REV)


def suffix_initialism(s: str) -> str:
    """Inverse of de_initialism: ``UserId`` -> ``UserID``."""
    return _replace_suffix(s, INITIALISMS)
