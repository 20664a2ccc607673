import sys
import asyncio
import traceback
from typing import List

import tqdm

from adiskparts import logger
from adiskparts._version import __banner__
from adiskparts.datasource import DataSource
from adiskparts.disks import Disk
from adiskparts.exceptions import DiskError
from adiskparts.partitions import PartitionFinder, GPTScheme
from adiskparts.utils import hexdump


def format_size(size:int):
    for unit in ['B', 'KiB', 'MiB', 'GiB', 'TiB']:
        if size < 1024 or unit == 'TiB':
            break
        size /= 1024
    if unit == 'B':
        return '%d B' % size
    return '%.1f %s' % (size, unit)

def format_partition_table(partitions):
    lines = []
    lines.append('%-3s %-12s %-12s %-10s %-36s %s' % ('#', 'Start LBA', 'End LBA', 'Size', 'Type', 'Name'))
    for part in partitions:
        lines.append('%-3d %-12d %-12d %-10s %-36s %s' % (
            part.index,
            part.start_LBA,
            part.end_LBA,
            format_size(part.size_bytes),
            part.type_description,
            part.name
        ))
    return '\n'.join(lines)

def format_scheme(device:str, scheme):
    t = []
    t.append('Device: %s' % device)
    t.append('Scheme: %s' % scheme.name)
    if isinstance(scheme, GPTScheme):
        t.append(str(scheme.header))
    if len(scheme.partitions) == 0:
        t.append('No partitions found!')
    else:
        t.append(format_partition_table(scheme.partitions))
    return '\n'.join(t)

async def analyze(device:str, dump:bool = False, max_entries:int = None, strict_protective:bool = None, out = print):
    """Prints the partition table of one device. Returns True on success."""
    datasource = None
    try:
        datasource = await DataSource.from_url(device)
        disk = await Disk.from_datasource(datasource)
        if dump is True:
            out('LBA 0 of %s:' % device)
            out(hexdump(await disk.read_LBA(0)))
        pf = await PartitionFinder.from_disk(disk, max_entries, strict_protective)
        if dump is True and isinstance(pf.scheme, GPTScheme):
            out('LBA 1 of %s:' % device)
            out(hexdump(await disk.read_LBA(1), base=512))
        out(format_scheme(device, pf.scheme))
        return True
    except (DiskError, OSError, ValueError) as e:
        logger.error('%s: %s' % (device, e))
        logger.debug('Traceback:\n%s' % ''.join(traceback.format_exception(type(e), e, e.__traceback__)))
        return False
    finally:
        if datasource is not None:
            await datasource.close()

async def amain(devices:List[str], dump:bool = False, max_entries:int = None, strict_protective:bool = None, progress:bool = False):
    failed = 0
    out = tqdm.tqdm.write if progress is True else print
    for device in tqdm.tqdm(devices, desc='Devices', unit='dev', disable=not progress):
        out('')
        out('Analyzing device: %s' % device)
        ok = await analyze(device, dump, max_entries, strict_protective, out)
        if ok is False:
            failed += 1
    return 0 if failed == 0 else 1

def main():
    import argparse
    import logging

    parser = argparse.ArgumentParser(description='Lists MBR / GPT partition tables of disks and disk images')
    parser.add_argument('-v', '--verbose', action='count', default=0)
    parser.add_argument('-d', '--dump', action='store_true', help='Hex dump the boot sector (and the GPT header sector)')
    parser.add_argument('--strict-protective', action='store_true', default=None, help='Only treat the MBR as protective if the 0xEE entry is the sole entry')
    parser.add_argument('--max-entries', type=int, default=None, help='Reject GPT headers declaring more partition entries than this')
    parser.add_argument('--progress', action='store_true', help='Show a progress bar over the device list')
    parser.add_argument('devices', nargs='+', help='Device, image path or datasource URL (file://, file+gz://)')

    args = parser.parse_args()
    print(__banner__)

    if args.verbose >=1:
        logger.setLevel(logging.DEBUG)

    if args.verbose > 2:
        print('setting deepdebug')
        logger.setLevel(1) #enabling deep debug
        logging.basicConfig(level=logging.DEBUG)

    sys.exit(
        asyncio.run(
            amain(
                args.devices,
                args.dump,
                args.max_entries,
                args.strict_protective,
                args.progress
            ),
            debug = args.verbose > 2
        )
    )

if __name__ == '__main__':
    main()
