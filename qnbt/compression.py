"""
Compression applied around NBT documents.

NBT files are usually gzip compressed (level.dat, player data), while chunks stored in region files are usually zlib compressed.
The reader and writer only ever see uncompressed bytes; these functions convert to and from them.

Every function takes a compression parameter that can be None, "gzip", or "zlib".
Any other value raises a ValueError.
"""
import gzip
import logging
import zlib

from io import BytesIO

logger = logging.getLogger( __name__ )

#Supported values for compression parameters
COMPRESSIONS = ( None, "gzip", "zlib" )

def checkCompression( compression ):
    """Raises ValueError if compression isn't one of COMPRESSIONS."""
    if compression not in COMPRESSIONS:
        raise ValueError( "Unknown compression type \"{}\".".format( compression ) )

def decompress( data, compression ):
    """
    Returns the uncompressed contents of data, a bytes-like object.
    If compression is None, data is returned as-is.
    """
    checkCompression( compression )
    if compression is None:
        return data
    logger.debug( "Decompressing {:d} bytes of {} data.".format( len( data ), compression ) )
    if compression == "gzip":
        return gzip.decompress( data )
    return zlib.decompress( data )

def compress( data, compression, level=9 ):
    """
    Returns data, a bytes-like object, compressed with the given compression.
    level is the compression level, 0 (none) to 9 (best). Defaults to 9.
    If compression is None, data is returned as-is.
    """
    checkCompression( compression )
    if compression is None:
        return data
    logger.debug( "Compressing {:d} bytes with {}.".format( len( data ), compression ) )
    if compression == "gzip":
        return gzip.compress( data, compresslevel=level )
    return zlib.compress( data, level )

def openReader( input, compression ):
    """
    Returns a readable file-like object that yields the uncompressed contents of input, a readable binary file-like object.

    For gzip, input is decompressed as it is read.
    zlib data is read and decompressed all at once.
    If compression is None, input itself is returned.
    The caller owns input; closing the returned object does not close input.
    """
    checkCompression( compression )
    if compression is None:
        return input
    elif compression == "gzip":
        return gzip.GzipFile( fileobj=input, mode="rb" )
    return BytesIO( zlib.decompress( input.read() ) )
