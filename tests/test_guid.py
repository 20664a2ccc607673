import os
import uuid
import pytest
from config import *

from adiskparts.exceptions import GUIDParseError
from adiskparts.partitions.guid import guid_from_bytes, guid_to_bytes, guid_to_string, guid_from_string, is_null_guid, NULL_GUID


def test_guid_mixed_endian_decode():
    guid = guid_from_bytes(EFI_SYSTEM_GUID_LE)
    assert guid_to_string(guid) == EFI_SYSTEM_GUID

def test_guid_to_bytes_is_on_disk_layout():
    guid = guid_from_string(EFI_SYSTEM_GUID)
    assert guid_to_bytes(guid) == EFI_SYSTEM_GUID_LE

@pytest.mark.parametrize('raw', [
    b'\x00' * 16,
    b'\xFF' * 16,
    EFI_SYSTEM_GUID_LE,
    bytes(range(16)),
    os.urandom(16),
])
def test_guid_string_roundtrip(raw):
    guid = guid_from_bytes(raw)
    assert guid_from_string(guid_to_string(guid)) == guid
    assert guid_to_bytes(guid_from_string(guid_to_string(guid))) == raw

def test_guid_string_is_canonical_uppercase():
    guid = guid_from_bytes(b'\xFF' * 16)
    assert guid_to_string(guid) == 'FFFFFFFF-FFFF-FFFF-FFFF-FFFFFFFFFFFF'
    assert guid_to_string(NULL_GUID) == '00000000-0000-0000-0000-000000000000'

def test_guid_from_string_ignores_case():
    assert guid_from_string(EFI_SYSTEM_GUID.lower()) == guid_from_string(EFI_SYSTEM_GUID)

@pytest.mark.parametrize('text', [
    '',
    'not a guid',
    '{C12A7328-F81F-11D2-BA4B-00A0C93EC93B}',
    'C12A7328F81F11D2BA4B00A0C93EC93B',
    'urn:uuid:c12a7328-f81f-11d2-ba4b-00a0c93ec93b',
    'C12A7328-F81F-11D2-BA4B-00A0C93EC93',
    'G12A7328-F81F-11D2-BA4B-00A0C93EC93B',
    None,
])
def test_guid_from_string_rejects_malformed(text):
    with pytest.raises(GUIDParseError):
        guid_from_string(text)

def test_guid_parse_error_is_value_error():
    with pytest.raises(ValueError):
        guid_from_string('xyz')

def test_guid_from_bytes_wrong_length():
    with pytest.raises(ValueError):
        guid_from_bytes(b'\x00' * 15)

def test_null_guid():
    assert is_null_guid(guid_from_bytes(b'\x00' * 16)) is True
    assert is_null_guid(guid_from_bytes(EFI_SYSTEM_GUID_LE)) is False
