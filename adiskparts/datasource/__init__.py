from urllib.parse import urlparse, parse_qs
from adiskparts import logger

class DataSource:
    def __init__(self, config):
        self.config = config

    async def setup(self):
        pass

    async def read(self, size:int):
        raise NotImplementedError()

    async def seek(self, offset:int, whence:int):
        raise NotImplementedError()

    async def close(self):
        raise NotImplementedError()

    async def tell(self):
        raise NotImplementedError()

    @staticmethod
    def parse_url(url:str):
        """
        Turns a datasource URL into a config dict.
        Query parameters (eg. ?cachesize=10&maxentries=256) are merged into the config.
        """
        url_e = urlparse(url)
        schemes = url_e.scheme.upper().split('+')
        config = {
            'url': url,
            'schemes': schemes,
            'path': url_e.netloc + url_e.path,
        }
        for key, values in parse_qs(url_e.query).items():
            config[key.lower()] = values
        return config

    @staticmethod
    async def from_url(url:str):
        if url.find('://') == -1:
            # Assume file://
            url = 'file://' + url

        config = DataSource.parse_url(url)
        schemes = config['schemes']
        logger.debug('[DATASOURCE] Schemes: %s Path: %s' % (schemes, config['path']))

        if 'GZ' in schemes or 'GZIP' in schemes or config['path'].upper().endswith('.GZ'):
            from adiskparts.datasource.gzipfile import GzipFileSource
            return await GzipFileSource.from_config(config)

        if 'FILE' in schemes:
            from adiskparts.datasource.file import FileSource
            return await FileSource.from_config(config)

        raise ValueError('Unsupported datasource scheme "%s"' % '+'.join(schemes))
