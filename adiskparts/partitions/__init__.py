from adiskparts import logger
from adiskparts.exceptions import HeaderError, InvalidGPTHeaderError, NoValidBootSectorError
from adiskparts.partitions.MBR import MBR, MBRClass, MBRPartitionEntry, SECTOR_SIZE
from adiskparts.partitions.GPT import GPT, GPTPartitionEntry, MAX_PARTITION_ENTRIES
from adiskparts.partitions.guid import guid_to_string
from adiskparts.partitions.parttypes import lookup
from adiskparts.utils import config_bool, config_int

class Partition:
    def __init__(self):
        self.index = None
        self.start_LBA = None
        self.end_LBA = None
        self.size_bytes = None
        self.type_description = None
        self.type_os = None
        self.type_id = None
        self.name = ''
        self.unique_guid = None

    @staticmethod
    def from_raw_partition(raw_partition):
        if isinstance(raw_partition, MBRPartitionEntry):
            info = lookup(raw_partition.partition_type)
            part = Partition()
            part.index = raw_partition.index
            part.start_LBA = raw_partition.FirstLBA
            part.end_LBA = raw_partition.LastLBA
            part.size_bytes = raw_partition.size * SECTOR_SIZE
            part.type_description = info.description
            part.type_os = info.os
            part.type_id = '0x%02X' % raw_partition.partition_type
            return part

        elif isinstance(raw_partition, GPTPartitionEntry):
            type_guid = guid_to_string(raw_partition.PartitionTypeGUID)
            info = lookup(type_guid)
            part = Partition()
            part.index = raw_partition.index
            part.start_LBA = raw_partition.FirstLBA
            part.end_LBA = raw_partition.LastLBA
            if raw_partition.LastLBA < raw_partition.FirstLBA:
                logger.warning('[PARTFINDER] GPT entry %d ends before it starts (%d < %d), reporting size 0' % (
                    raw_partition.index, raw_partition.LastLBA, raw_partition.FirstLBA
                ))
                part.size_bytes = 0
            else:
                part.size_bytes = (raw_partition.LastLBA - raw_partition.FirstLBA + 1) * SECTOR_SIZE
            part.type_description = info.description
            part.type_os = info.os
            part.type_id = type_guid
            part.name = raw_partition.PartitionName
            part.unique_guid = guid_to_string(raw_partition.UniquePartitionGUID)
            return part
        else:
            raise TypeError('Unknown partition entry type %s' % type(raw_partition).__name__)

    def __str__(self):
        return 'Partition: {} - {} ({} bytes) {} "{}"'.format(self.start_LBA, self.end_LBA, self.size_bytes, self.type_description, self.name)

class MBRScheme:
    name = 'MBR'

    def __init__(self, mbr, partitions):
        self.mbr = mbr
        self.partitions = partitions

    def __str__(self):
        t = 'Scheme: MBR (disk signature {:08X})\n'.format(self.mbr.disk_signature)
        t += 'Partitions:\n'
        for p in self.partitions:
            t += '  {}\n'.format(p)
        return t

class GPTScheme:
    name = 'GPT'

    def __init__(self, protective_mbr, header, partitions):
        self.protective_mbr = protective_mbr
        self.header = header
        self.partitions = partitions

    def __str__(self):
        t = 'Scheme: GPT (disk {})\n'.format(guid_to_string(self.header.DiskGUID))
        t += 'Partitions:\n'
        for p in self.partitions:
            t += '  {}\n'.format(p)
        return t

class PartitionFinder:
    """
    Reads LBA 0 and, for protective MBRs, the GPT header at LBA 1 and its
    entry array, producing an MBRScheme or GPTScheme.
    """
    def __init__(self, disk, max_entries = None, strict_protective = None):
        config = getattr(disk, 'config', None) or {}
        if max_entries is None:
            max_entries = config_int(config, 'maxentries', MAX_PARTITION_ENTRIES)
        if strict_protective is None:
            strict_protective = config_bool(config, 'strictpmbr', False)
        self.disk = disk
        self.max_entries = max_entries
        self.strict_protective = strict_protective
        self.scheme = None
        self.partitions = []

    @staticmethod
    async def from_disk(disk, max_entries = None, strict_protective = None):
        pf = PartitionFinder(disk, max_entries, strict_protective)
        await pf.assemble()
        return pf

    async def assemble(self):
        bootsector = await self.disk.read_LBA(0)
        mbr = MBR.from_bytes(bootsector)
        mbrclass = mbr.get_class(self.strict_protective)
        logger.debug('[PARTFINDER] Boot sector classified as %s' % mbrclass.name)

        if mbrclass == MBRClass.INVALID:
            raise NoValidBootSectorError()

        if mbrclass == MBRClass.TRADITIONAL:
            partitions = [Partition.from_raw_partition(pt) for pt in mbr.get_partitions()]
            self.scheme = MBRScheme(mbr, partitions)
            self.partitions = partitions
            return self.scheme

        try:
            header = await GPT.from_disk(self.disk, self.max_entries)
        except HeaderError as e:
            raise InvalidGPTHeaderError(e.reason, str(e)) from e

        partitions = [Partition.from_raw_partition(entry) for entry in header.PartitionEntries]
        logger.debug('[PARTFINDER] %d of %d GPT entries in use' % (len(partitions), header.NumberOfPartitionEntries))
        self.scheme = GPTScheme(mbr, header, partitions)
        self.partitions = partitions
        return self.scheme

    async def find_partitions(self):
        if self.scheme is None:
            await self.assemble()
        return self.partitions

    def __str__(self):
        t = 'Partitions:\n'
        for p in self.partitions:
            t += '  {}\n'.format(p)
        return t

async def assemble(disk, max_entries = None, strict_protective = None):
    pf = PartitionFinder(disk, max_entries, strict_protective)
    return await pf.assemble()
