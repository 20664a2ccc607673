import io
import enum
import zlib

from adiskparts import logger
from adiskparts.exceptions import HeaderError, HeaderErrorReason
from adiskparts.partitions.guid import guid_from_bytes, guid_to_string, is_null_guid
from adiskparts.partitions.name import decode_partition_name
from adiskparts.partitions.parttypes import lookup
from adiskparts.utils import ceil_d

SECTOR_SIZE = 512
GPT_SIGNATURE = b'\x45\x46\x49\x20\x50\x41\x52\x54' # EFI PART
GPT_HEADER_MIN_SIZE = 92
GPT_ENTRY_MIN_SIZE = 128
MAX_PARTITION_ENTRIES = 4096

class GPTAttributes(enum.IntFlag):
    NONE = 0
    REQUIRED = 1 << 0
    NO_BLOCK_IO_PROTOCOL = 1 << 1
    LEGACY_BIOS_BOOTABLE = 1 << 2

# https://en.wikipedia.org/wiki/GUID_Partition_Table
class GPT:
    def __init__(self):
        self.Signature = None
        self.Revision = None
        self.HeaderSize = None
        self.HeaderCRC32 = None
        self.Reserved = None
        self.CurrentLBA = None
        self.BackupLBA = None
        self.FirstUsableLBA = None
        self.LastUsableLBA = None
        self.DiskGUID = None
        self.PartitionEntriesStart = None
        self.NumberOfPartitionEntries = None
        self.SizeOfPartitionEntry = None
        self.PartitionEntryArrayCRC32 = None
        self.PartitionEntries = []

    @staticmethod
    async def from_disk(disk, max_entries = MAX_PARTITION_ENTRIES):
        hdrdata = await disk.read_LBA(1)
        gpt = GPT.from_bytes(hdrdata, max_entries)
        async for entry in gpt.enumerate_entries(disk):
            if entry.is_empty() is True:
                continue
            gpt.PartitionEntries.append(entry)
        return gpt

    @staticmethod
    def from_bytes(data, max_entries = MAX_PARTITION_ENTRIES):
        if len(data) < SECTOR_SIZE:
            raise ValueError('GPT header sector must be %d bytes, got %d' % (SECTOR_SIZE, len(data)))
        return GPT.from_buffer(io.BytesIO(data), max_entries)

    @staticmethod
    def from_buffer(buff, max_entries = MAX_PARTITION_ENTRIES):
        start = buff.tell()
        gpt = GPT()
        gpt.Signature = buff.read(8)
        if gpt.Signature != GPT_SIGNATURE:
            raise HeaderError(HeaderErrorReason.BAD_SIGNATURE, 'Invalid GPT signature %r' % gpt.Signature)
        gpt.Revision = int.from_bytes(buff.read(4), 'little')
        gpt.HeaderSize = int.from_bytes(buff.read(4), 'little')
        if gpt.HeaderSize < GPT_HEADER_MIN_SIZE or gpt.HeaderSize > SECTOR_SIZE:
            raise HeaderError(HeaderErrorReason.BAD_SIZE, 'Invalid GPT header size %d' % gpt.HeaderSize)
        gpt.HeaderCRC32 = int.from_bytes(buff.read(4), 'little')
        gpt.Reserved = int.from_bytes(buff.read(4), 'little')
        gpt.CurrentLBA = int.from_bytes(buff.read(8), 'little')
        gpt.BackupLBA = int.from_bytes(buff.read(8), 'little')
        gpt.FirstUsableLBA = int.from_bytes(buff.read(8), 'little')
        gpt.LastUsableLBA = int.from_bytes(buff.read(8), 'little')
        gpt.DiskGUID = guid_from_bytes(buff.read(16))
        gpt.PartitionEntriesStart = int.from_bytes(buff.read(8), 'little')
        gpt.NumberOfPartitionEntries = int.from_bytes(buff.read(4), 'little')
        gpt.SizeOfPartitionEntry = int.from_bytes(buff.read(4), 'little')
        gpt.PartitionEntryArrayCRC32 = int.from_bytes(buff.read(4), 'little')

        if gpt.SizeOfPartitionEntry < GPT_ENTRY_MIN_SIZE or gpt.SizeOfPartitionEntry > SECTOR_SIZE:
            raise HeaderError(HeaderErrorReason.BAD_ENTRY_SIZE, 'Invalid GPT partition entry size %d' % gpt.SizeOfPartitionEntry)
        if gpt.NumberOfPartitionEntries > max_entries:
            raise HeaderError(
                HeaderErrorReason.TOO_MANY_ENTRIES,
                'GPT header claims %d partition entries (max %d)' % (gpt.NumberOfPartitionEntries, max_entries)
            )

        buff.seek(start, 0)
        raw = bytearray(buff.read(gpt.HeaderSize))
        raw[16:20] = b'\x00\x00\x00\x00'
        crc = zlib.crc32(raw) & 0xFFFFFFFF
        if crc != gpt.HeaderCRC32:
            raise HeaderError(
                HeaderErrorReason.CRC_MISMATCH,
                'GPT header CRC32 mismatch. Stored: 0x%08X Calculated: 0x%08X' % (gpt.HeaderCRC32, crc)
            )
        return gpt

    def get_revision(self):
        return '%d.%d' % (self.Revision >> 16, self.Revision & 0xFFFF)

    def get_entry_array_size(self):
        return self.NumberOfPartitionEntries * self.SizeOfPartitionEntry

    def get_entry_array_sectors(self):
        return ceil_d(self.get_entry_array_size(), SECTOR_SIZE)

    async def enumerate_entries(self, disk):
        """
        Yields every slot of the partition entry array, empty ones included.
        Entries are located by absolute byte offset, so an entry may span
        two sectors when the entry size does not divide the sector size.
        """
        base = self.PartitionEntriesStart * SECTOR_SIZE
        window_lba = None
        window = b''
        for i in range(self.NumberOfPartitionEntries):
            lba, offset = divmod(base + i * self.SizeOfPartitionEntry, SECTOR_SIZE)
            if window_lba is None or lba >= window_lba + len(window) // SECTOR_SIZE:
                window_lba = lba
                window = b''
            elif lba != window_lba:
                window = window[(lba - window_lba) * SECTOR_SIZE:]
                window_lba = lba

            needed = offset + self.SizeOfPartitionEntry
            while len(window) < needed:
                next_lba = window_lba + len(window) // SECTOR_SIZE
                logger.debug('[GPT] Reading partition entry sector at LBA %d' % next_lba)
                window += await disk.read_LBA(next_lba)

            entry = GPTPartitionEntry.from_bytes(window[offset:needed])
            entry.index = i
            yield entry

    def __str__(self):
        res = []
        res.append('GPT')
        res.append('Signature: {}'.format(self.Signature.decode('ascii')))
        res.append('Revision: {}'.format(self.get_revision()))
        res.append('HeaderSize: {}'.format(self.HeaderSize))
        res.append('HeaderCRC32: 0x{:08X}'.format(self.HeaderCRC32))
        res.append('CurrentLBA: {}'.format(self.CurrentLBA))
        res.append('BackupLBA: {}'.format(self.BackupLBA))
        res.append('FirstUsableLBA: {}'.format(self.FirstUsableLBA))
        res.append('LastUsableLBA: {}'.format(self.LastUsableLBA))
        res.append('DiskGUID: {}'.format(guid_to_string(self.DiskGUID)))
        res.append('PartitionEntriesStart: {}'.format(self.PartitionEntriesStart))
        res.append('NumberOfPartitionEntries: {}'.format(self.NumberOfPartitionEntries))
        res.append('SizeOfPartitionEntry: {}'.format(self.SizeOfPartitionEntry))
        res.append('PartitionEntryArrayCRC32: 0x{:08X}'.format(self.PartitionEntryArrayCRC32))
        if len(self.PartitionEntries) > 0:
            res.append('PartitionEntries:')
            for pe in self.PartitionEntries:
                res.append('  {}'.format(pe.to_line()))
        return '\n'.join(res)

class GPTPartitionEntry:
    def __init__(self):
        self.index = None
        self.PartitionTypeGUID = None
        self.UniquePartitionGUID = None
        self.FirstLBA = None
        self.LastLBA = None
        self.Attributes = None
        self.PartitionName = None
        self.PartitionType = None

    @staticmethod
    def from_bytes(data):
        if len(data) < GPT_ENTRY_MIN_SIZE:
            raise ValueError('GPT partition entry must be at least %d bytes, got %d' % (GPT_ENTRY_MIN_SIZE, len(data)))
        return GPTPartitionEntry.from_buffer(io.BytesIO(data))

    @staticmethod
    def from_buffer(buff):
        entry = GPTPartitionEntry()
        entry.PartitionTypeGUID = guid_from_bytes(buff.read(16))
        entry.UniquePartitionGUID = guid_from_bytes(buff.read(16))
        entry.FirstLBA = int.from_bytes(buff.read(8), 'little')
        entry.LastLBA = int.from_bytes(buff.read(8), 'little')
        entry.Attributes = int.from_bytes(buff.read(8), 'little')
        entry.PartitionName = decode_partition_name(buff.read(72))
        entry.PartitionType = lookup(entry.PartitionTypeGUID)
        return entry

    def is_empty(self):
        return is_null_guid(self.PartitionTypeGUID)

    def get_attributes(self):
        return GPTAttributes(self.Attributes & 0x7)

    def get_type_attributes(self):
        # bits 48-63 are defined per partition type
        return self.Attributes >> 48

    def to_line(self):
        return '{} - {} {} "{}"'.format(self.FirstLBA, self.LastLBA, self.PartitionType.description, self.PartitionName)

    def __str__(self):
        res = []
        res.append('GPTPartitionEntry')
        res.append('PartitionTypeGUID: {}'.format(guid_to_string(self.PartitionTypeGUID)))
        res.append('UniquePartitionGUID: {}'.format(guid_to_string(self.UniquePartitionGUID)))
        res.append('FirstLBA: {}'.format(self.FirstLBA))
        res.append('LastLBA: {}'.format(self.LastLBA))
        res.append('Attributes: 0x{:016X}'.format(self.Attributes))
        res.append('PartitionName: {}'.format(self.PartitionName))
        res.append('PartitionType: {} ({})'.format(self.PartitionType.description, self.PartitionType.os))
        return '\n'.join(res)
