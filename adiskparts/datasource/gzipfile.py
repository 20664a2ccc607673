import gzip
from adiskparts.datasource import DataSource


class GzipFileSource(DataSource):
    """ A DataSource that reads from a gzip compressed disk image """
    def __init__(self, config):
        super().__init__(config)
        self.__stream = None
        self.__offset = 0

    @staticmethod
    async def from_config(config):
        ds = GzipFileSource(config)
        await ds.setup()
        return ds

    @staticmethod
    async def from_file(path:str):
        ds = GzipFileSource({'path': str(path)})
        await ds.setup()
        return ds

    async def setup(self):
        self.__stream = gzip.open(self.config['path'], 'rb')

    async def read(self, size:int):
        self.__stream.seek(self.__offset, 0)
        data = self.__stream.read(size)
        self.__offset += len(data)
        return data

    async def seek(self, offset:int, whence:int=0):
        if whence == 0:
            self.__offset = offset
        elif whence == 1:
            self.__offset += offset
        elif whence == 2:
            # the uncompressed size is only known after a full pass
            raise ValueError('Seeking relative to the end is not supported on gzip streams')
        else:
            raise ValueError('Invalid whence value')

    async def close(self):
        if self.__stream is not None:
            self.__stream.close()

    async def tell(self):
        return self.__offset

    def __str__(self):
        return 'GzipFileSource(%s)' % self.config['path']
