import pytest
from config import *

from adiskparts.datasource import DataSource
from adiskparts.disks import Disk
from adiskparts.exceptions import (
    HeaderErrorReason, InvalidGPTHeaderError, NoValidBootSectorError, AssemblyError, SectorReadError,
)
from adiskparts.partitions import PartitionFinder, Partition, MBRScheme, GPTScheme, assemble


@pytest.mark.asyncio
async def test_assemble_mbr():
    disk = MemoryDisk(make_mbr_disk([(0x80, 0x07, 2048, 204800)]))
    scheme = await assemble(disk)
    assert isinstance(scheme, MBRScheme)
    assert scheme.name == 'MBR'
    assert len(scheme.partitions) == 1
    part = scheme.partitions[0]
    assert part.index == 0
    assert part.start_LBA == 2048
    assert part.end_LBA == 206847
    assert part.size_bytes == 104857600
    assert 'NTFS' in part.type_description
    assert part.type_os == 'Windows'
    assert part.type_id == '0x07'
    assert part.name == ''
    # MBR disks never touch LBA 1
    assert disk.reads == [0]

@pytest.mark.asyncio
async def test_assemble_mbr_skips_empty_slots():
    disk = MemoryDisk(make_mbr_disk([(0x00, 0x00, 0, 0), (0x00, 0x83, 100, 50), (0x00, 0x00, 0, 0), (0x00, 0x99, 200, 10)]))
    scheme = await assemble(disk)
    assert [p.index for p in scheme.partitions] == [1, 3]
    assert scheme.partitions[0].type_description == 'Linux'
    assert scheme.partitions[1].type_description == 'Unknown'

@pytest.mark.asyncio
async def test_assemble_mbr_no_partitions():
    scheme = await assemble(MemoryDisk(make_mbr_disk([])))
    assert isinstance(scheme, MBRScheme)
    assert scheme.partitions == []

@pytest.mark.asyncio
async def test_assemble_gpt():
    entries = {0: dict(type_guid=EFI_SYSTEM_GUID, unique_guid=DISK_GUID, first_lba=34, last_lba=2081, name='EFI System')}
    disk = MemoryDisk(make_gpt_disk(entries))
    scheme = await assemble(disk)
    assert isinstance(scheme, GPTScheme)
    assert scheme.name == 'GPT'
    assert scheme.protective_mbr.get_partitions()[0].partition_type == 0xEE
    assert scheme.header.NumberOfPartitionEntries == 128
    assert len(scheme.header.PartitionEntries) == 1
    assert len(scheme.partitions) == 1
    part = scheme.partitions[0]
    assert part.index == 0
    assert part.start_LBA == 34
    assert part.end_LBA == 2081
    assert part.size_bytes == 2048 * 512
    assert part.type_description == 'EFI System Partition'
    assert part.type_id == EFI_SYSTEM_GUID
    assert part.unique_guid == DISK_GUID
    assert part.name == 'EFI System'

@pytest.mark.asyncio
async def test_assemble_gpt_keeps_slot_index():
    entries = {
        3: dict(type_guid=BASIC_DATA_GUID, first_lba=34, last_lba=1000, name='data'),
        127: dict(type_guid=LINUX_FS_GUID, first_lba=1001, last_lba=4000, name='root'),
    }
    scheme = await assemble(MemoryDisk(make_gpt_disk(entries)))
    assert [p.index for p in scheme.partitions] == [3, 127]
    assert [p.name for p in scheme.partitions] == ['data', 'root']

@pytest.mark.asyncio
async def test_assemble_gpt_empty_table():
    scheme = await assemble(MemoryDisk(make_gpt_disk({})))
    assert isinstance(scheme, GPTScheme)
    assert scheme.partitions == []

@pytest.mark.asyncio
async def test_assemble_gpt_bad_signature():
    image = bytearray(make_gpt_disk({0: dict(type_guid=EFI_SYSTEM_GUID, first_lba=34, last_lba=2081)}))
    image[SECTOR_SIZE:SECTOR_SIZE+8] = b'EFI PARX'
    with pytest.raises(InvalidGPTHeaderError) as e:
        await assemble(MemoryDisk(bytes(image)))
    assert e.value.reason == HeaderErrorReason.BAD_SIGNATURE
    assert isinstance(e.value, AssemblyError)

@pytest.mark.asyncio
async def test_assemble_gpt_crc_mismatch():
    image = bytearray(make_gpt_disk({}))
    image[SECTOR_SIZE + 48] ^= 0xFF
    with pytest.raises(InvalidGPTHeaderError) as e:
        await assemble(MemoryDisk(bytes(image)))
    assert e.value.reason == HeaderErrorReason.CRC_MISMATCH

@pytest.mark.asyncio
async def test_assemble_no_boot_signature():
    image = bytearray(make_mbr_disk([(0x80, 0x07, 2048, 204800)]))
    image[510:512] = b'\x00\x00'
    with pytest.raises(NoValidBootSectorError):
        await assemble(MemoryDisk(bytes(image)))

@pytest.mark.asyncio
async def test_assemble_blank_disk():
    with pytest.raises(NoValidBootSectorError):
        await assemble(MemoryDisk(b'\x00' * 4096))

@pytest.mark.asyncio
async def test_assemble_too_small():
    with pytest.raises(SectorReadError) as e:
        await assemble(MemoryDisk(b'\x00' * 100))
    assert e.value.lba == 0

@pytest.mark.asyncio
async def test_assemble_gpt_missing_header_sector():
    with pytest.raises(SectorReadError) as e:
        await assemble(MemoryDisk(make_protective_mbr()))
    assert e.value.lba == 1

@pytest.mark.asyncio
async def test_assemble_hybrid_mbr():
    entries = {0: dict(type_guid=BASIC_DATA_GUID, first_lba=2048, last_lba=4000, name='data')}
    mbr = make_mbr([(0x00, 0xEE, 1, 2047), (0x80, 0x07, 2048, 1953)])
    image = make_gpt_disk(entries, mbr=mbr)

    scheme = await assemble(MemoryDisk(image))
    assert isinstance(scheme, GPTScheme)

    scheme = await assemble(MemoryDisk(image), strict_protective=True)
    assert isinstance(scheme, MBRScheme)
    assert len(scheme.partitions) == 2

    scheme = await assemble(MemoryDisk(image, {'strictpmbr': ['1']}))
    assert isinstance(scheme, MBRScheme)

@pytest.mark.asyncio
async def test_assemble_inverted_range():
    entries = {0: dict(type_guid=BASIC_DATA_GUID, first_lba=2000, last_lba=1000, name='broken')}
    scheme = await assemble(MemoryDisk(make_gpt_disk(entries)))
    part = scheme.partitions[0]
    assert part.start_LBA == 2000
    assert part.end_LBA == 1000
    assert part.size_bytes == 0

@pytest.mark.asyncio
async def test_assemble_max_entries():
    image = make_gpt_disk({}, num_entries=256)
    with pytest.raises(InvalidGPTHeaderError) as e:
        await assemble(MemoryDisk(image), max_entries=128)
    assert e.value.reason == HeaderErrorReason.TOO_MANY_ENTRIES

    with pytest.raises(InvalidGPTHeaderError) as e:
        await assemble(MemoryDisk(image, {'maxentries': ['128']}))
    assert e.value.reason == HeaderErrorReason.TOO_MANY_ENTRIES

    scheme = await assemble(MemoryDisk(image, {'maxentries': ['128']}), max_entries=256)
    assert isinstance(scheme, GPTScheme)

@pytest.mark.asyncio
async def test_partition_finder_is_restartable():
    disk = MemoryDisk(make_gpt_disk({0: dict(type_guid=EFI_SYSTEM_GUID, first_lba=34, last_lba=2081)}))
    pf = await PartitionFinder.from_disk(disk)
    first = [(p.index, p.start_LBA, p.end_LBA) for p in pf.partitions]
    await pf.assemble()
    second = [(p.index, p.start_LBA, p.end_LBA) for p in pf.partitions]
    assert first == second == [(0, 34, 2081)]
    assert 'Partitions:' in str(pf)

@pytest.mark.asyncio
async def test_partition_finder_find_partitions():
    pf = PartitionFinder(MemoryDisk(make_mbr_disk([(0x00, 0x83, 100, 50)])))
    assert pf.scheme is None
    parts = await pf.find_partitions()
    assert len(parts) == 1
    assert isinstance(pf.scheme, MBRScheme)

def test_partition_from_unknown_entry():
    with pytest.raises(TypeError):
        Partition.from_raw_partition(object())

@pytest.mark.asyncio
async def test_disk_list_partitions(tmp_path):
    entries = {
        0: dict(type_guid=EFI_SYSTEM_GUID, first_lba=34, last_lba=2081, name='EFI System'),
        1: dict(type_guid=BASIC_DATA_GUID, first_lba=2082, last_lba=4000, name='data'),
    }
    path = write_image(tmp_path, make_gpt_disk(entries))
    ds = await DataSource.from_url(str(path))
    try:
        disk = await Disk.from_datasource(ds)
        parts = await disk.list_partitions()
        assert [p.name for p in parts] == ['EFI System', 'data']
        scheme = await disk.get_partition_scheme()
        assert isinstance(scheme, GPTScheme)
    finally:
        await ds.close()

@pytest.mark.asyncio
async def test_disk_url_max_entries(tmp_path):
    path = write_image(tmp_path, make_gpt_disk({}, num_entries=256))
    ds = await DataSource.from_url('file://%s?maxentries=64' % path)
    try:
        disk = await Disk.from_datasource(ds)
        with pytest.raises(InvalidGPTHeaderError) as e:
            await disk.get_partition_scheme()
        assert e.value.reason == HeaderErrorReason.TOO_MANY_ENTRIES
    finally:
        await ds.close()
