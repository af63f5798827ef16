"""
Writes a tree of tags as binary NBT.

Each tag's payload is encoded by a function in _WRITERS, indexed by tagType.
Encoders take the tag, the output and d, how many more levels of TAG_List / TAG_Compound may be opened.
"""
import logging

from io import BytesIO

from qnbt.compression import compress, checkCompression
from qnbt.shared import (
    WrongTagError, ConversionError, OutOfBoundsError, NestingLimitError,
    TAG_END,
    MAX_ARRAY_LENGTH, MAX_DEPTH,
    describeTag,

    writeTagName       as _wtn, writeByte   as _wb,  writeShort  as _ws,
    writeInt           as _wi,  writeLong   as _wl,  writeFloat  as _wf,
    writeDouble        as _wd,  writeString as _wst, writeArray  as _wa,
    writeTagListHeader as _wlh
)

logger = logging.getLogger( __name__ )

def _writeByte( t, o, d ):
    _wb( t, o )

def _writeShort( t, o, d ):
    _ws( t, o )

def _writeInt( t, o, d ):
    _wi( t, o )

def _writeLong( t, o, d ):
    _wl( t, o )

def _writeFloat( t, o, d ):
    _wf( t, o )

def _writeDouble( t, o, d ):
    _wd( t, o )

def _writeString( t, o, d ):
    _wst( t, o )

def _writeArray( t, o, d ):
    if len( t ) > MAX_ARRAY_LENGTH:
        raise OutOfBoundsError( len( t ), 0, MAX_ARRAY_LENGTH )
    _wa( t, o )

def _writeList( t, o, d ):
    if d == 0:
        raise NestingLimitError()
    l = len( t )
    #Empty lists are always written as lists of TAG_End.
    if l == 0:
        _wlh( TAG_END, 0, o )
        return
    if l > MAX_ARRAY_LENGTH:
        raise OutOfBoundsError( l, 0, MAX_ARRAY_LENGTH )

    ltt = t.listTagType
    #Check every tag before writing the header so a bad list writes nothing.
    for v in t:
        tt = getattr( v, "tagType", None )
        if tt is None:
            raise ConversionError( v )
        if tt != ltt:
            raise WrongTagError( ltt, tt )

    _wlh( ltt, l, o )
    w = _WRITERS[ ltt ]
    d -= 1
    for v in t:
        w( v, o, d )

def _writeCompound( t, o, d ):
    if d == 0:
        raise NestingLimitError()
    d -= 1
    for n,v in t.items():
        tt = v.tagType
        _wtn( tt, n, o )
        _WRITERS[ tt ]( v, o, d )
    o.write( b"\0" )

#Tuple of payload encoders indexed by tagType.
_WRITERS = (
    None,           #TAG_END
    _writeByte,     #TAG_BYTE
    _writeShort,    #TAG_SHORT
    _writeInt,      #TAG_INT
    _writeLong,     #TAG_LONG
    _writeFloat,    #TAG_FLOAT
    _writeDouble,   #TAG_DOUBLE
    _writeArray,    #TAG_BYTE_ARRAY
    _writeString,   #TAG_STRING
    _writeList,     #TAG_LIST
    _writeCompound, #TAG_COMPOUND
    _writeArray,    #TAG_INT_ARRAY
    _writeArray     #TAG_LONG_ARRAY
)

def writeNamedTag( output, name, tag, maxdepth=MAX_DEPTH ):
    """
    Writes tag to output as a named tag: its tagType, then name, then its payload.

    output is a writable binary file-like object. Nothing is compressed.
    name is the name to write for the tag (a str).
    tag is the tag to write (e.g. a TAG_Compound).
    maxdepth is how deeply TAG_Lists / TAG_Compounds may be nested. Defaults to MAX_DEPTH.

    Raises StringTooLongError if name or a TAG_String / tag name in tag is longer than 65535 bytes when encoded.
    Raises WrongTagError if a TAG_List contains a tag that doesn't match its listTagType.
    Raises ConversionError if tag, or a value in a TAG_List, isn't a tag.
    Raises NestingLimitError if tag is nested more deeply than maxdepth.
    Bytes may already have been written to output when an error is raised.
    """
    tt = getattr( tag, "tagType", None )
    if tt is None:
        raise ConversionError( tag )
    _wtn( tt, name, output )
    _WRITERS[ tt ]( tag, output, maxdepth )

def write( tag, target=None, name="", compression=None, maxdepth=MAX_DEPTH ):
    """
    Writes tag as an NBT document.

    tag is the root tag to write. This is usually a TAG_Compound.
    target is an optional writable binary file-like object.
        If it is None (the default), the document is returned as bytes instead.
    name is the name of the root tag. Defaults to "".
    compression is an optional parameter that can be None, "gzip", or "zlib". Defaults to None.
    maxdepth is how deeply TAG_Lists / TAG_Compounds may be nested. Defaults to MAX_DEPTH.

    The document is encoded in full before anything is written to target, so target is left untouched if an error is raised.
    See help( writeNamedTag ) for the errors that can be raised.

    Example:
        with open( "level.dat", "wb" ) as file:
            qnbt.write( root, file, compression="gzip" )
    """
    checkCompression( compression )

    o = BytesIO()
    writeNamedTag( o, name, tag, maxdepth )
    data = compress( o.getvalue(), compression )
    logger.debug( "Wrote {} \"{}\" ({:d} bytes).".format( describeTag( tag.tagType ), name, len( data ) ) )

    if target is None:
        return data
    target.write( data )
