from adiskparts.partitions import PartitionFinder

class Disk:
    def __init__(self):
        self.config = {}

    async def read_LBA(self, lba:int):
        raise NotImplementedError()

    async def get_partition_scheme(self, max_entries = None, strict_protective = None):
        pf = await PartitionFinder.from_disk(self, max_entries, strict_protective)
        return pf.scheme

    async def list_partitions(self, max_entries = None, strict_protective = None):
        pf = await PartitionFinder.from_disk(self, max_entries, strict_protective)
        return await pf.find_partitions()

    @staticmethod
    async def from_datasource(ds):
        from adiskparts.disks.raw import RAWDisk

        if ds.config is None:
            raise Exception('Datasource config is None')
        return await RAWDisk.from_datasource(ds)
