
__version__ = "0.1.0"
__banner__ = \
"""
# adiskparts %s 
# MBR / GPT partition table lister
""" % __version__
