"""
Common constants shared by the value codec, the literal escaper and the
request interceptor.
"""


class TypeTag:
    UNDEFINED = "u"
    BOOLEAN = "b"
    NUMBER = "n"
    CALLABLE = "f"
    NULL = "o"
    TEXT = "s"


# Structural delimiters, in decode dispatch order
SEQUENCE_SEPARATOR = ","
ENTRY_SEPARATOR = "&"
KEY_VALUE_SEPARATOR = "="

# Characters `encodeURIComponent` leaves untouched, beyond letters, digits and `-_.~`
URI_COMPONENT_SAFE = "!*'()"

# A `b`-tagged scalar decodes to True whenever its text is non-empty, so
# "bfalse" decodes to True. Stored URLs depend on it; opt out per codec.
BOOLEAN_PRESENCE_IS_TRUE = True

# Ordered (pattern, replacement) pairs for OData string literals.
# "%" must run before any rule that emits a percent sequence.
ODATA_LITERAL_SUBSTITUTIONS = (
    ("'", "''"),
    ("%", "%25"),
    ("+", "%2B"),
    ("/", "%2F"),
    ("?", "%3F"),
    ("#", "%23"),
    ("&", "%26"),
    ("[", "%5B"),
    ("]", "%5D"),
)
ODATA_WHITESPACE_REPLACEMENT = "%20"

# Server-managed fields removed from write payloads
DEFAULT_STRIPPED_FIELDS = frozenset(
    {
        "@odata.context",
        "@odata.etag",
        "__CreatedOn",
        "__ModifiedOn",
        "__Owner",
    }
)

WRITE_METHODS = frozenset({"create", "update", "patch"})
SYNC_METHODS = frozenset({"create", "read", "update", "patch", "delete"})

JSON_MEDIA_TYPE = "application/json; charset=utf-8"
