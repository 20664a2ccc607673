
def ceil_d(x, y):
    return (x + (y-1)) // y

def ascii_dump(data:bytes):
    return ''.join(chr(c) if 0x20 <= c < 0x7F else '.' for c in data)

def hexdump(data:bytes, width:int = 16, base:int = 0):
    """
    Classic hex + ASCII dump, one line per `width` bytes.
    Non-printable characters are shown as '.'
    """
    lines = []
    for off in range(0, len(data), width):
        chunk = data[off:off+width]
        hexpart = ' '.join('%02x' % c for c in chunk)
        lines.append('%08x  %-*s  %s' % (base + off, width*3 - 1, hexpart, ascii_dump(chunk)))
    return '\n'.join(lines)

def config_get(config:dict, key:str, default = None):
    # query string values arrive as lists from parse_qs
    value = config.get(key, default)
    if isinstance(value, (list, tuple)):
        value = value[-1] if len(value) > 0 else default
    return value

def config_int(config:dict, key:str, default:int, min_value:int = None):
    value = config_get(config, key, default)
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise ValueError('Config value "%s" must be an integer, got %r' % (key, value))
    if min_value is not None and value < min_value:
        raise ValueError('Config value "%s" must be at least %d, got %d' % (key, min_value, value))
    return value

def config_bool(config:dict, key:str, default:bool = False):
    value = config_get(config, key, default)
    if isinstance(value, bool):
        return value
    if str(value).lower() in ('1', 'true', 'yes', 'on'):
        return True
    if str(value).lower() in ('0', 'false', 'no', 'off', ''):
        return False
    raise ValueError('Config value "%s" must be a boolean, got %r' % (key, value))
