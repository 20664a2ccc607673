from adiskparts.datasource import DataSource

class FileSource(DataSource):
    """ A DataSource that reads from a plain file or block device """
    def __init__(self, config):
        super().__init__(config)
        self.__stream = None
        self.__size = None
        self.__offset = 0

    @staticmethod
    async def from_config(config):
        ds = FileSource(config)
        await ds.setup()
        return ds

    @staticmethod
    async def from_file(path:str):
        ds = FileSource({'path': str(path)})
        await ds.setup()
        return ds

    async def setup(self):
        self.__stream = open(self.config['path'], 'rb')
        # block devices report st_size 0, ask the stream instead
        self.__size = self.__stream.seek(0, 2)
        self.__stream.seek(0, 0)

    async def read(self, size:int):
        self.__stream.seek(self.__offset, 0)
        data = self.__stream.read(size)
        self.__offset += len(data)
        return data

    async def seek(self, offset:int, whence:int = 0):
        if whence == 0:
            self.__offset = offset
        elif whence == 1:
            self.__offset += offset
        elif whence == 2:
            self.__offset = self.__size + offset
        else:
            raise ValueError('Invalid whence value')

    async def close(self):
        if self.__stream is not None:
            self.__stream.close()

    async def tell(self):
        return self.__offset

    def __str__(self):
        return 'FileSource(%s, %d bytes)' % (self.config['path'], self.__size if self.__size is not None else 0)
