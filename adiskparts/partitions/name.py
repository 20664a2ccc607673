from adiskparts import logger

NAME_FIELD_SIZE = 72
NAME_MAX_UNITS = NAME_FIELD_SIZE // 2

def decode_partition_name(raw:bytes):
    """
    Decodes the 72 byte GPT partition name field (UTF-16LE code units).
    Stops at the first NUL unit. Broken surrogates become U+FFFD instead of failing.
    """
    raw = bytes(raw[:NAME_FIELD_SIZE])
    end = len(raw) - (len(raw) % 2)
    for i in range(0, end, 2):
        if raw[i] == 0 and raw[i+1] == 0:
            end = i
            break
    name = raw[:end].decode('utf-16-le', errors='replace')
    if '\ufffd' in name:
        logger.debug('[NAME] Partition name contains invalid code units: %s' % raw[:end].hex())
    return name
