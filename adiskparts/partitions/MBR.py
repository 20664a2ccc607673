import io
import enum

from adiskparts import logger
from adiskparts.partitions.parttypes import lookup

SECTOR_SIZE = 512
MBR_SIGNATURE = b'\x55\xAA' # 0xAA55 little-endian
MBR_TYPE_UNUSED = 0x00
MBR_TYPE_GPT = 0xEE
PARTITION_TABLE_OFFSET = 0x01BE

class MBRClass(enum.Enum):
    INVALID = 0
    TRADITIONAL = 1
    PROTECTIVE_GPT = 2

# https://en.wikipedia.org/wiki/Master_boot_record
class MBR:
    def __init__(self):
        self.bootsector_code = None
        self.disk_signature = None
        self.copy_protected = None
        self.partition_table = []
        self.boot_signature = None

    @staticmethod
    def from_bytes(data):
        if len(data) < SECTOR_SIZE:
            raise ValueError('Boot sector must be %d bytes, got %d' % (SECTOR_SIZE, len(data)))
        return MBR.from_buffer(io.BytesIO(data))

    @staticmethod
    def from_buffer(buff):
        mbr = MBR()
        mbr.bootsector_code = buff.read(446)
        mbr.disk_signature = int.from_bytes(mbr.bootsector_code[440:444], 'little')
        mbr.copy_protected = int.from_bytes(mbr.bootsector_code[444:446], 'little')
        buff.seek(PARTITION_TABLE_OFFSET, 0)
        for i in range(4):
            pt = MBRPartitionEntry.from_buffer(buff)
            pt.index = i
            mbr.partition_table.append(pt)
        mbr.boot_signature = buff.read(2)
        return mbr

    @staticmethod
    def classify(data, strict = False):
        """
        Tells a traditional MBR apart from a GPT protective one.
        With strict=True the 0xEE entry must be the only used slot,
        otherwise any 0xEE entry marks the disk as GPT.
        """
        if len(data) < SECTOR_SIZE:
            raise ValueError('Boot sector must be %d bytes, got %d' % (SECTOR_SIZE, len(data)))
        return MBR.from_bytes(data).get_class(strict)

    def is_valid(self):
        return self.boot_signature == MBR_SIGNATURE

    def get_class(self, strict = False):
        if self.is_valid() is False:
            return MBRClass.INVALID
        used = self.get_partitions()
        protective = [pt for pt in used if pt.partition_type == MBR_TYPE_GPT]
        if len(protective) == 0:
            return MBRClass.TRADITIONAL
        if strict is True and len(used) != 1:
            logger.debug('[MBR] 0xEE entry next to %d other entries, not a protective MBR in strict mode' % (len(used) - 1))
            return MBRClass.TRADITIONAL
        return MBRClass.PROTECTIVE_GPT

    def extract_partitions(self):
        return list(self.partition_table)

    def get_partitions(self):
        return [pt for pt in self.partition_table if pt.is_empty() is False]

    def __str__(self):
        res = []
        res.append('MBR')
        res.append('Disk Signature: {:08X}'.format(self.disk_signature))
        res.append('Boot Signature: {}'.format(self.boot_signature.hex()))
        res.append('Partition Table:')
        for pt in self.partition_table:
            res.append('  [{}] {}'.format(pt.index, pt.to_line()))
        return '\n'.join(res)

class MBRPartitionEntry:
    def __init__(self):
        self.index = None
        self.status = None
        self.start_chs = None
        self.partition_type = None
        self.end_chs = None
        self.FirstLBA = None
        self.size = None

    @staticmethod
    def from_bytes(data):
        return MBRPartitionEntry.from_buffer(io.BytesIO(data))

    @staticmethod
    def from_buffer(buff):
        entry = MBRPartitionEntry()
        entry.status = int.from_bytes(buff.read(1), 'little')
        entry.start_chs = buff.read(3)
        entry.partition_type = int.from_bytes(buff.read(1), 'little')
        entry.end_chs = buff.read(3)
        entry.FirstLBA = int.from_bytes(buff.read(4), 'little', signed=False)
        entry.size = int.from_bytes(buff.read(4), 'little', signed=False)
        return entry

    @property
    def LastLBA(self):
        return self.FirstLBA + self.size - 1

    def is_empty(self):
        return self.partition_type == MBR_TYPE_UNUSED

    def is_bootable(self):
        return self.status == 0x80

    def get_type_info(self):
        return lookup(self.partition_type)

    @staticmethod
    def decode_chs(chs:bytes):
        """Returns (cylinder, head, sector) from the packed 3 byte CHS field"""
        head = chs[0]
        sector = chs[1] & 0x3F
        cylinder = ((chs[1] & 0xC0) << 2) | chs[2]
        return cylinder, head, sector

    def to_line(self):
        if self.is_empty() is True:
            return 'empty'
        return '{} type=0x{:02X} start={} size={} ({})'.format(
            '*' if self.is_bootable() else ' ',
            self.partition_type,
            self.FirstLBA,
            self.size,
            self.get_type_info().description
        )

    def __str__(self):
        res = []
        res.append('MBR Partition Entry')
        res.append('Status: 0x{:02X}'.format(self.status))
        res.append('Start CHS: {}'.format(self.decode_chs(self.start_chs)))
        res.append('Partition Type: 0x{:02X}'.format(self.partition_type))
        res.append('End CHS: {}'.format(self.decode_chs(self.end_chs)))
        res.append('FirstLBA: {}'.format(self.FirstLBA))
        res.append('Size: {}'.format(self.size))
        return '\n'.join(res)
