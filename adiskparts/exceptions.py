import enum


class DiskError(Exception):
    """Base class for every error raised by adiskparts"""


class SectorReadError(DiskError, IOError):
    """A sector could not be read in full"""
    def __init__(self, lba:int, msg:str = None):
        self.lba = lba
        if msg is None:
            msg = 'Failed to read sector at LBA %d' % lba
        super().__init__(msg)


class GUIDParseError(DiskError, ValueError):
    pass


class HeaderErrorReason(enum.Enum):
    BAD_SIGNATURE = 'bad signature'
    BAD_SIZE = 'bad header size'
    BAD_ENTRY_SIZE = 'bad partition entry size'
    TOO_MANY_ENTRIES = 'too many partition entries'
    CRC_MISMATCH = 'header CRC32 mismatch'


class HeaderError(DiskError):
    """The GPT header failed structural validation"""
    def __init__(self, reason:HeaderErrorReason, msg:str = None):
        self.reason = reason
        if msg is None:
            msg = 'Invalid GPT header: %s' % reason.value
        super().__init__(msg)


class AssemblyError(DiskError):
    pass


class NoValidBootSectorError(AssemblyError):
    def __init__(self, msg:str = 'No valid boot sector (missing 0x55AA signature)'):
        super().__init__(msg)


class InvalidGPTHeaderError(AssemblyError):
    def __init__(self, reason:HeaderErrorReason, msg:str = None):
        self.reason = reason
        if msg is None:
            msg = 'Protective MBR found but the GPT header is invalid: %s' % reason.value
        super().__init__(msg)
