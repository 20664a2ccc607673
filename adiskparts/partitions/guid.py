import re
import uuid

from adiskparts.exceptions import GUIDParseError

# https://uefi.org/specs/UEFI/2.10/Apx_A_GUID_and_Time_Formats.html
# On disk the first three fields are little-endian, the rest is stored
# byte-for-byte. This is exactly the bytes_le layout of uuid.UUID.

NULL_GUID = uuid.UUID(int=0)

GUID_RE = re.compile(r'^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$')

def guid_from_bytes(data:bytes):
    if len(data) != 16:
        raise ValueError('GUID must be 16 bytes, got %d' % len(data))
    return uuid.UUID(bytes_le=bytes(data))

def guid_to_bytes(guid:uuid.UUID):
    return guid.bytes_le

def guid_to_string(guid:uuid.UUID):
    return str(guid).upper()

def guid_from_string(s:str):
    """
    Parses the canonical XXXXXXXX-XXXX-XXXX-XXXX-XXXXXXXXXXXX form.
    Braces, URNs and unhyphenated hex are rejected.
    """
    if not isinstance(s, str) or GUID_RE.match(s) is None:
        raise GUIDParseError('Invalid GUID string: %r' % (s,))
    return uuid.UUID(s)

def is_null_guid(guid:uuid.UUID):
    return guid == NULL_GUID
