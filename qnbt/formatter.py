"""
Formats a tree of tags as SNBT text that qnbt.parse() reads back to an equal tree.
"""
import math
import re

from qnbt.shared import (
    ConversionError, WrongTagError, NestingLimitError,
    MAX_DEPTH,
    _BARE, _NUMBER_START, _SPECIAL_FLOAT, _F
)

#Characters escaped inside double / single quoted strings
_DQ_ESCAPE = re.compile( r"[\\\"\x00-\x1f\x7f\ud800-\udfff]" )
_SQ_ESCAPE = re.compile( r"[\\'\x00-\x1f\x7f\ud800-\udfff]" )

_ESCAPES = {
    "\\": "\\\\",
    "\"": "\\\"",
    "'":  "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f"
}

def _escape( m ):
    c = m.group()
    e = _ESCAPES.get( c )
    if e is None:
        return "\\u{:04x}".format( ord( c ) )
    return e

def isBare( s ):
    """Returns True if the str s can be written as an SNBT key or string without quotes."""
    return (
        _BARE.fullmatch( s ) is not None and
        _NUMBER_START.match( s ) is None and
        s != "true" and s != "false" and
        _SPECIAL_FLOAT.fullmatch( s ) is None
    )

def quote( s ):
    """
    Returns s as a quoted SNBT string.
    Double quotes are used unless s contains a double quote but no single quote.
    """
    if "\"" in s and "'" not in s:
        return "'" + _SQ_ESCAPE.sub( _escape, s ) + "'"
    return "\"" + _DQ_ESCAPE.sub( _escape, s ) + "\""

def _string( s ):
    return s if isBare( s ) else quote( s )

#Shortest text that reads back as the same binary32 value
def _floatText( v ):
    for digits in range( 1, 10 ):
        s = "{:.{}g}".format( v, digits )
        #Near FLOAT_MAX, a short candidate can round up past the largest binary32 value.
        try:
            if _F.unpack( _F.pack( float( s ) ) )[0] == v:
                return s
        except OverflowError:
            continue
    return repr( v )

def _nonFinite( v ):
    if math.isnan( v ):
        return "NaN"
    return "Infinity" if v > 0 else "-Infinity"

def _formatByte( t, indent, prefix, d ):
    return "{:d}b".format( t )

def _formatShort( t, indent, prefix, d ):
    return "{:d}s".format( t )

def _formatInt( t, indent, prefix, d ):
    return "{:d}".format( t )

def _formatLong( t, indent, prefix, d ):
    return "{:d}L".format( t )

def _formatFloat( t, indent, prefix, d ):
    v = float( t )
    if not math.isfinite( v ):
        return _nonFinite( v ) + "f"
    return _floatText( v ) + "f"

def _formatDouble( t, indent, prefix, d ):
    v = float( t )
    if not math.isfinite( v ):
        return _nonFinite( v ) + "d"
    return repr( v ) + "d"

def _makeArrayFormatter( letter ):
    def _formatArray( t, indent, prefix, d ):
        if len( t ) == 0:
            return "[{};]".format( letter )
        if indent is None:
            return "[{};{}]".format( letter, ",".join( [ "{:d}".format( v ) for v in t ] ) )
        return "[{}; {}]".format( letter, ", ".join( [ "{:d}".format( v ) for v in t ] ) )
    return _formatArray

def _formatString( t, indent, prefix, d ):
    return _string( t )

#Containers call each other through _FORMATTERS directly; each level of nesting is one stack frame.
#d is how many more TAG_Lists / TAG_Compounds may be opened.
def _formatList( t, indent, prefix, d ):
    if d == 0:
        raise NestingLimitError()
    if len( t ) == 0:
        return "[]"
    f = _FORMATTERS[ _checkList( t ) ]
    d -= 1
    parts = []
    if indent is None:
        for v in t:
            parts.append( f( v, None, None, d ) )
        return "[" + ",".join( parts ) + "]"

    inner = prefix + indent
    for v in t:
        parts.append( inner + f( v, indent, inner, d ) )
    return "[\n" + ",\n".join( parts ) + "\n" + prefix + "]"

def _formatCompound( t, indent, prefix, d ):
    if d == 0:
        raise NestingLimitError()
    if len( t ) == 0:
        return "{}"
    d -= 1
    parts = []
    if indent is None:
        for n,v in t.items():
            parts.append( _string( n ) + ":" + _FORMATTERS[ _tagType( v ) ]( v, None, None, d ) )
        return "{" + ",".join( parts ) + "}"

    inner = prefix + indent
    for n,v in t.items():
        parts.append( inner + _string( n ) + ": " + _FORMATTERS[ _tagType( v ) ]( v, indent, inner, d ) )
    return "{\n" + ",\n".join( parts ) + "\n" + prefix + "}"

#Tuple of formatters indexed by tagType.
_FORMATTERS = (
    None,                       #TAG_END
    _formatByte,                #TAG_BYTE
    _formatShort,               #TAG_SHORT
    _formatInt,                 #TAG_INT
    _formatLong,                #TAG_LONG
    _formatFloat,               #TAG_FLOAT
    _formatDouble,              #TAG_DOUBLE
    _makeArrayFormatter( "B" ), #TAG_BYTE_ARRAY
    _formatString,              #TAG_STRING
    _formatList,                #TAG_LIST
    _formatCompound,            #TAG_COMPOUND
    _makeArrayFormatter( "I" ), #TAG_INT_ARRAY
    _makeArrayFormatter( "L" )  #TAG_LONG_ARRAY
)

def _tagType( t ):
    tt = getattr( t, "tagType", None )
    if tt is None:
        raise ConversionError( t )
    return tt

#Returns the listTagType of the non-empty list t after checking every value in t is of that type
def _checkList( t ):
    ltt = t.listTagType
    for v in t:
        tt = _tagType( v )
        if tt != ltt:
            raise WrongTagError( ltt, tt )
    return ltt

def toSNBT( tag, indent=None, maxdepth=MAX_DEPTH ):
    """
    Returns tag formatted as SNBT.

    indent is an optional parameter that selects the layout:
        None (the default) writes everything on one line without any whitespace, e.g. {pos:[1,2,3],name:"Steve Smith"}
        An int indents each level by that many spaces; a str indents each level with that str.
            Every compound field and list element goes on its own line.
            Numeric arrays stay on one line, e.g. [I; 1, 2, 3].
    maxdepth is how deeply TAG_Lists / TAG_Compounds may be nested. Defaults to MAX_DEPTH.

    Keys and strings are only quoted when they need to be.
    Raises NestingLimitError if tag is nested more deeply than maxdepth.

    Example:
        >>> print( qnbt.toSNBT( qnbt.parse( "{a:1b,b:[1,2]}" ), 4 ) )
        {
            a: 1b,
            b: [
                1,
                2
            ]
        }
    """
    if isinstance( indent, int ):
        indent = " " * indent
    return _FORMATTERS[ _tagType( tag ) ]( tag, indent, "", maxdepth )
