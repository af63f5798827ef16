"""
Reads binary NBT into a tree of tags.

Each tag's payload is decoded by a function in _READERS, indexed by tagType.
Decoders take the input and d, how many more levels of TAG_List / TAG_Compound may be opened.
"""
import logging

from collections import namedtuple
from io import BytesIO

from qnbt.compression import decompress, openReader
from qnbt.tag import (
    TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound, TAG_Int_Array, TAG_Long_Array
)
from qnbt.shared import (
    NBTFormatError, NestingLimitError,
    TAG_END,
    MAX_DEPTH,
    describeTag,

    readTagType  as _rtt,  readByte          as _rb,   readShort           as _rs,
    readInt      as _ri,   readLong          as _rl,   readFloat           as _rf,
    readDouble   as _rd,   readString        as _rst,  readTagListHeader   as _rlh,
    readArray    as _ra,   assertValidTagType as _avtt
)

logger = logging.getLogger( __name__ )

NamedTag = namedtuple( "NamedTag", ( "name", "tag" ) )
NamedTag.__doc__ = \
    """
    The result of reading an NBT document: the root tag and its name.
    Most documents have a TAG_Compound root named "".
    """

def _readByte( i, d ):
    return TAG_Byte( _rb( i ) )

def _readShort( i, d ):
    return TAG_Short( _rs( i ) )

def _readInt( i, d ):
    return TAG_Int( _ri( i ) )

def _readLong( i, d ):
    return TAG_Long( _rl( i ) )

def _readFloat( i, d ):
    return TAG_Float( _rf( i ) )

def _readDouble( i, d ):
    return TAG_Double( _rd( i ) )

def _readByteArray( i, d ):
    return _ra( i, TAG_Byte_Array() )

def _readString( i, d ):
    return TAG_String( _rst( i ) )

def _readList( i, d ):
    if d == 0:
        raise NestingLimitError()
    t, l = _rlh( i )

    tag = TAG_List()
    #An empty list is always a list of TAG_End, whatever type the header claims.
    if l == 0:
        return tag

    tag.listTagType = t
    a = super( TAG_List, tag ).append
    r = _READERS[ t ]
    d -= 1
    for _ in range( l ):
        a( r( i, d ) )

    return tag

def _readCompound( i, d ):
    if d == 0:
        raise NestingLimitError()
    d -= 1

    tag = TAG_Compound()
    si = super( TAG_Compound, tag ).__setitem__

    tt = _rtt( i )
    while tt != TAG_END:
        #Check that the tagType is valid.
        _avtt( tt )

        #A repeated name replaces the earlier tag but keeps its position.
        name = _rst( i )
        si( name, _READERS[tt]( i, d ) )
        tt = _rtt( i )

    return tag

def _readIntArray( i, d ):
    return _ra( i, TAG_Int_Array() )

def _readLongArray( i, d ):
    return _ra( i, TAG_Long_Array() )

#Tuple of payload decoders indexed by tagType.
_READERS = (
    None,               #TAG_END
    _readByte,          #TAG_BYTE
    _readShort,         #TAG_SHORT
    _readInt,           #TAG_INT
    _readLong,          #TAG_LONG
    _readFloat,         #TAG_FLOAT
    _readDouble,        #TAG_DOUBLE
    _readByteArray,     #TAG_BYTE_ARRAY
    _readString,        #TAG_STRING
    _readList,          #TAG_LIST
    _readCompound,      #TAG_COMPOUND
    _readIntArray,      #TAG_INT_ARRAY
    _readLongArray      #TAG_LONG_ARRAY
)

def readNamedTag( input, maxdepth=MAX_DEPTH ):
    """
    Reads a single named tag from input and returns it as a NamedTag( name, tag ).

    input is a readable binary file-like object containing uncompressed NBT data.
    maxdepth is how deeply TAG_Lists / TAG_Compounds may be nested. Defaults to MAX_DEPTH.
        The root tag, if it is a TAG_List or TAG_Compound, counts as the first level.

    Any type of root tag is accepted.
    Raises an NBTFormatError (or subclass) if the data is malformed:
        * UnexpectedEndError if the data ends early, including when input is empty.
        * UnknownTagTypeError if a tag has an unknown type.
        * OutOfBoundsError if an array or list has a negative length.
        * ModifiedUTF8Error if a string can't be decoded.
        * ListTypeError if a TAG_List of TAG_End has entries.
        * NestingLimitError if tags are nested more deeply than maxdepth.
        * NBTFormatError if the root tag is a TAG_End.
    If input is seekable, the error's offset attribute is set to the position in input at which reading stopped.
    """
    try:
        tt = _rtt( input )
        if tt == TAG_END:
            raise NBTFormatError( "Document is empty; the root tag is a TAG_End." )
        _avtt( tt )
        name = _rst( input )
        tag = _READERS[tt]( input, maxdepth )
    except NBTFormatError as e:
        if e.offset is None and getattr( input, "seekable", None ) is not None and input.seekable():
            e.offset = input.tell()
        raise

    logger.debug( "Read {} \"{}\".".format( describeTag( tt ), name ) )
    return NamedTag( name, tag )

def read( source, compression=None, maxdepth=MAX_DEPTH ):
    """
    Reads an NBT document from source and returns it as a NamedTag( name, tag ).

    source can be a bytes-like object (bytes, bytearray, memoryview) or a readable binary file-like object.
    compression is an optional parameter that can be None, "gzip", or "zlib". Defaults to None.
    maxdepth is how deeply TAG_Lists / TAG_Compounds may be nested. Defaults to MAX_DEPTH.

    Example:
        with open( "level.dat", "rb" ) as file:
            name, root = qnbt.read( file, "gzip" )
        print( root["Data"]["LevelName"] )

    See help( readNamedTag ) for the errors that can be raised.
    """
    if isinstance( source, ( bytes, bytearray, memoryview ) ):
        return readNamedTag( BytesIO( decompress( source, compression ) ), maxdepth )

    input = openReader( source, compression )
    try:
        return readNamedTag( input, maxdepth )
    finally:
        if input is not source:
            input.close()
