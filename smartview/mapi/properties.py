"""MAPI property tags, types, and names used when describing property values."""

# --- Property types (low word of a tag) ---
PT_UNSPECIFIED = 0x0000
PT_NULL = 0x0001
PT_SHORT = 0x0002  # PT_I2
PT_LONG = 0x0003
PT_FLOAT = 0x0004  # 32-bit float
PT_DOUBLE = 0x0005  # 64-bit float
PT_CURRENCY = 0x0006  # 64-bit integer, 4 implied decimal places
PT_APPTIME = 0x0007  # double, days since 1899-12-30
PT_ERROR = 0x000A  # SCODE
PT_BOOLEAN = 0x000B  # 16-bit boolean
PT_OBJECT = 0x000D  # embedded object
PT_LONG_LONG = 0x0014  # PT_I8
PT_STRING8 = 0x001E  # 8-bit string
PT_UNICODE = 0x001F  # UTF-16LE string
PT_SYSTIME = 0x0040  # FILETIME
PT_GUID = 0x0048  # PT_CLSID
PT_SRESTRICTION = 0x00FD
PT_ACTIONS = 0x00FE
PT_BINARY = 0x0102

MV_FLAG = 0x1000
PT_MV_STRING8 = MV_FLAG | PT_STRING8
PT_MV_UNICODE = MV_FLAG | PT_UNICODE  # Multi-valued Unicode string
PT_MV_BINARY = MV_FLAG | PT_BINARY  # Multi-valued binary

PROP_TYPE_NAMES = {
    PT_UNSPECIFIED: 'PT_UNSPECIFIED',
    PT_NULL: 'PT_NULL',
    PT_SHORT: 'PT_I2',
    PT_LONG: 'PT_LONG',
    PT_FLOAT: 'PT_R4',
    PT_DOUBLE: 'PT_DOUBLE',
    PT_CURRENCY: 'PT_CURRENCY',
    PT_APPTIME: 'PT_APPTIME',
    PT_ERROR: 'PT_ERROR',
    PT_BOOLEAN: 'PT_BOOLEAN',
    PT_OBJECT: 'PT_OBJECT',
    PT_LONG_LONG: 'PT_I8',
    PT_STRING8: 'PT_STRING8',
    PT_UNICODE: 'PT_UNICODE',
    PT_SYSTIME: 'PT_SYSTIME',
    PT_GUID: 'PT_CLSID',
    PT_SRESTRICTION: 'PT_SRESTRICTION',
    PT_ACTIONS: 'PT_ACTIONS',
    PT_BINARY: 'PT_BINARY',
    PT_MV_STRING8: 'PT_MV_STRING8',
    PT_MV_UNICODE: 'PT_MV_UNICODE',
    PT_MV_BINARY: 'PT_MV_BINARY',
}


def prop_tag(prop_id, prop_type):
    return (prop_id << 16) | prop_type


def prop_id(tag):
    return (tag >> 16) & 0xFFFF


def prop_type(tag):
    return tag & 0xFFFF


def is_named_id(pid):
    """Named properties are mapped into IDs 0x8000-0xFFFE."""
    return 0x8000 <= pid <= 0xFFFE


def prop_type_name(ptype):
    return PROP_TYPE_NAMES.get(ptype, f"0x{ptype:04X}")


# --- Identity ---
PR_ENTRYID = prop_tag(0x0FFF, PT_BINARY)
PR_RECORD_KEY = prop_tag(0x0FF9, PT_BINARY)
PR_SEARCH_KEY = prop_tag(0x300B, PT_BINARY)
PR_PARENT_ENTRYID = prop_tag(0x0E09, PT_BINARY)
PR_CHANGE_KEY = prop_tag(0x65E2, PT_BINARY)
PR_PREDECESSOR_CHANGE_LIST = prop_tag(0x65E3, PT_BINARY)
PR_DISPLAY_NAME = prop_tag(0x3001, PT_UNICODE)

# --- Envelope ---
PR_MESSAGE_CLASS = prop_tag(0x001A, PT_UNICODE)
PR_SUBJECT = prop_tag(0x0037, PT_UNICODE)
PR_SUBJECT_PREFIX = prop_tag(0x003D, PT_UNICODE)
PR_NORMALIZED_SUBJECT = prop_tag(0x0E1D, PT_UNICODE)
PR_ORIGINAL_SUBJECT = prop_tag(0x0049, PT_UNICODE)
PR_IMPORTANCE = prop_tag(0x0017, PT_LONG)
PR_PRIORITY = prop_tag(0x0026, PT_LONG)
PR_SENSITIVITY = prop_tag(0x0036, PT_LONG)
PR_MESSAGE_FLAGS = prop_tag(0x0E07, PT_LONG)
PR_MESSAGE_SIZE = prop_tag(0x0E08, PT_LONG)
PR_HASATTACH = prop_tag(0x0E1B, PT_BOOLEAN)
PR_DISPLAY_TO = prop_tag(0x0E04, PT_UNICODE)
PR_DISPLAY_CC = prop_tag(0x0E03, PT_UNICODE)
PR_BODY = prop_tag(0x1000, PT_UNICODE)
PR_HTML = prop_tag(0x1013, PT_BINARY)

# --- Times ---
PR_CLIENT_SUBMIT_TIME = prop_tag(0x0039, PT_SYSTIME)
PR_MESSAGE_DELIVERY_TIME = prop_tag(0x0E06, PT_SYSTIME)
PR_CREATION_TIME = prop_tag(0x3007, PT_SYSTIME)
PR_LAST_MODIFICATION_TIME = prop_tag(0x3008, PT_SYSTIME)

# --- Threading ---
PR_CONVERSATION_TOPIC = prop_tag(0x0070, PT_UNICODE)
PR_CONVERSATION_INDEX = prop_tag(0x0071, PT_BINARY)
PR_CONVERSATION_ID = prop_tag(0x3013, PT_BINARY)
PR_CONVERSATION_INDEX_TRACKING = prop_tag(0x3016, PT_BOOLEAN)
PR_INTERNET_MESSAGE_ID = prop_tag(0x1035, PT_UNICODE)
PR_INTERNET_REFERENCES = prop_tag(0x1039, PT_UNICODE)
PR_IN_REPLY_TO_ID = prop_tag(0x1042, PT_UNICODE)
PR_LAST_VERB_EXECUTED = prop_tag(0x1081, PT_LONG)
PR_LAST_VERB_EXECUTION_TIME = prop_tag(0x1082, PT_SYSTIME)

# --- Addressing ---
PR_SENDER_NAME = prop_tag(0x0C1A, PT_UNICODE)
PR_SENDER_ADDRTYPE = prop_tag(0x0C1E, PT_UNICODE)
PR_SENDER_EMAIL_ADDRESS = prop_tag(0x0C1F, PT_UNICODE)
PR_SENT_REPRESENTING_NAME = prop_tag(0x0042, PT_UNICODE)
PR_RECIPIENT_TYPE = prop_tag(0x0C15, PT_LONG)
PR_ADDRTYPE = prop_tag(0x3002, PT_UNICODE)
PR_EMAIL_ADDRESS = prop_tag(0x3003, PT_UNICODE)

# --- Attachments ---
PR_ATTACH_NUM = prop_tag(0x0E21, PT_LONG)
PR_ATTACH_DATA_BIN = prop_tag(0x3701, PT_BINARY)
PR_ATTACH_FILENAME = prop_tag(0x3704, PT_UNICODE)
PR_ATTACH_METHOD = prop_tag(0x3705, PT_LONG)
PR_ATTACH_LONG_FILENAME = prop_tag(0x3707, PT_UNICODE)

# --- Rules ---
PR_RULE_ID = prop_tag(0x6674, PT_LONG_LONG)
PR_RULE_SEQUENCE = prop_tag(0x6676, PT_LONG)
PR_RULE_STATE = prop_tag(0x6677, PT_LONG)
PR_RULE_CONDITION = prop_tag(0x6679, PT_SRESTRICTION)
PR_RULE_ACTIONS = prop_tag(0x6680, PT_ACTIONS)
PR_RULE_PROVIDER = prop_tag(0x6681, PT_UNICODE)
PR_RULE_NAME = prop_tag(0x6682, PT_UNICODE)
PR_EXTENDED_RULE_MSG_CONDITION = prop_tag(0x0E9A, PT_BINARY)


# Built from the PR_* constants above; first definition wins.
PROP_TAG_NAMES = {}
for _name, _tag in list(globals().items()):
    if _name.startswith('PR_'):
        PROP_TAG_NAMES.setdefault(_tag, _name)
del _name, _tag


def prop_tag_name(tag):
    """Best-guess name for a tag; falls back to matching on the ID alone."""
    name = PROP_TAG_NAMES.get(tag)
    if name:
        return name
    pid = prop_id(tag)
    for known, known_name in PROP_TAG_NAMES.items():
        if prop_id(known) == pid:
            return known_name
    return None


# --- Common SCODEs ---
ERROR_NAMES = {
    0x00000000: 'S_OK',
    0x00040380: 'MAPI_W_ERRORS_RETURNED',
    0x80004005: 'MAPI_E_CALL_FAILED',
    0x8007000E: 'MAPI_E_NOT_ENOUGH_MEMORY',
    0x80070005: 'MAPI_E_NO_ACCESS',
    0x80070057: 'MAPI_E_INVALID_PARAMETER',
    0x80040102: 'MAPI_E_NO_SUPPORT',
    0x80040106: 'MAPI_E_UNKNOWN_FLAGS',
    0x8004010F: 'MAPI_E_NOT_FOUND',
    0x80040116: 'MAPI_E_CORRUPT_DATA',
    0x8004011D: 'MAPI_E_NOT_ENOUGH_RESOURCES',
}


def error_name(scode):
    return ERROR_NAMES.get(scode & 0xFFFFFFFF)
