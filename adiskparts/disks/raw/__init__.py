import zlib

from adiskparts import logger
from adiskparts.disks import Disk
from adiskparts.datasource import DataSource
from adiskparts.exceptions import SectorReadError
from adiskparts.utils import config_int
from cachetools import LRUCache

class RAWDisk(Disk):
    def __init__(self):
        super().__init__()
        self.__stream:DataSource = None
        self.__sector_size = 512
        self.__lba_cache = None

    async def setup(self, ds:DataSource):
        self.__stream = ds
        self.config = ds.config or {}
        self.__lba_cache = LRUCache(maxsize=config_int(self.config, 'cachesize', 100, min_value=1))

    @staticmethod
    async def from_datasource(ds:DataSource):
        disk = RAWDisk()
        await disk.setup(ds)
        return disk

    def __add_to_cache_return(self, lba:int, data:bytes):
        self.__lba_cache[lba] = data
        return data

    async def read_LBA(self, lba:int):
        if lba in self.__lba_cache:
            return self.__lba_cache[lba]

        if lba < 0:
            raise SectorReadError(lba, 'Negative LBA %d' % lba)
        try:
            await self.__stream.seek(lba * self.__sector_size, 0)
            data = await self.__stream.read(self.__sector_size)
        except (OSError, EOFError, zlib.error) as e:
            # truncated or corrupt gzip streams fail with EOFError / zlib.error
            raise SectorReadError(lba, 'Failed to read sector at LBA %d: %s' % (lba, e)) from e
        if len(data) != self.__sector_size:
            raise SectorReadError(lba, 'Short read at LBA %d: wanted %d bytes, got %d' % (lba, self.__sector_size, len(data)))
        logger.debug('[RAWDISK] Read LBA %d' % lba)
        return self.__add_to_cache_return(lba, data)

    def __str__(self):
        t = []
        t.append('Type       : RAW Disk')
        t.append('Datasource : %s' % self.__stream)
        t.append('Sector Size: %d' % self.__sector_size)
        return '\n'.join(t)
