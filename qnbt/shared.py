import re
import sys
from struct import calcsize, Struct
from array import array

#Tag Types
#A TAG_End is a nameless tag that terminates TAG_Compound and is the tagType of an empty TAG_List.
#It has no payload and is never a value in its own right.
TAG_END        = 0
TAG_BYTE       = 1  #A TAG_Byte payload stores a 1-byte signed integer. Booleans are stored as TAG_Byte 0 / 1.
TAG_SHORT      = 2  #A TAG_Short payload stores a 2-byte big-endian signed integer.
TAG_INT        = 3  #A TAG_Int payload stores a 4-byte big-endian signed integer.
TAG_LONG       = 4  #A TAG_Long payload stores an 8-byte big-endian signed integer.
TAG_FLOAT      = 5  #A TAG_Float payload stores a big-endian float (a 4-byte IEEE 754-2008, aka binary32).
TAG_DOUBLE     = 6  #A TAG_Double payload stores a big-endian double (an 8-byte IEEE 754-2008, aka binary64).
TAG_BYTE_ARRAY = 7  #A TAG_Byte_Array's payload is the length of the array (a 4-byte big-endian signed integer), followed by exactly that many signed bytes.
TAG_STRING     = 8  #A TAG_String starts with the length of the encoded string _in bytes_ (a 2-byte big-endian unsigned integer), followed by the string encoded as modified UTF-8.
TAG_LIST       = 9  #A TAG_List's payload is a single byte encoding the tagType, followed by the length of the list (a 4-byte big-endian signed integer), followed by that many payloads of the specified tag.
TAG_COMPOUND   = 10 #A TAG_Compound's payload consists of several pairs of named tag headers + tag payloads and is terminated by a TAG_End (null byte).
TAG_INT_ARRAY  = 11 #A TAG_Int_Array's payload is the length of the array (a 4-byte big-endian signed integer) followed by that many 4-byte big-endian signed integers.
TAG_LONG_ARRAY = 12 #A TAG_Long_Array's payload is the length of the array (a 4-byte big-endian signed integer) followed by that many 8-byte big-endian signed integers.

#Internal names of tags (indexed by tag type) as defined by the NBT specification
TAG_NAMES = (
    "TAG_End",
    "TAG_Byte",
    "TAG_Short",
    "TAG_Int",
    "TAG_Long",
    "TAG_Float",
    "TAG_Double",
    "TAG_Byte_Array",
    "TAG_String",
    "TAG_List",
    "TAG_Compound",
    "TAG_Int_Array",
    "TAG_Long_Array"
)

#Total number of tags supported by this version of the library.
TAG_COUNT = len( TAG_NAMES )

#Limits
#MAX_DEPTH bounds how deeply TAG_Lists / TAG_Compounds may nest when reading or writing binary NBT and when parsing or formatting SNBT.
#The root container counts as the first level.
MAX_DEPTH         = 512
#Largest number of bytes a modified UTF-8 string may occupy (the length prefix is an unsigned short).
MAX_STRING_LENGTH = 65535
#Largest number of entries a TAG_List or array may hold (the length prefix is a signed int).
MAX_ARRAY_LENGTH  = 2147483647

#Datatypes for signed 4-byte and 8-byte integers.
#array's typecodes are native C types whose sizes can vary from system to system.
#We /need/ a 4-byte and an 8-byte integer type: select them here, or fail if they are not available.
if calcsize( "i" ) == 4:
    SIGNED_INT_TYPE = "i"
elif calcsize( "l" ) == 4:
    SIGNED_INT_TYPE = "l"
else:
    raise OSError( "No 4-byte datatype available." )

if calcsize( "q" ) == 8:
    SIGNED_LONG_TYPE = "q"
else:
    raise OSError( "No 8-byte datatype available." )

SIGNED_BYTE_TYPE = "b"

#array stores its items in native byte order; NBT is big-endian.
_SWAP = sys.byteorder == "little"

#SNBT tokens
#Characters that may appear in an unquoted SNBT key or string.
_BARE = re.compile( r"[A-Za-z0-9_\-.+]+" )
#A bare token that starts like this is always read as a number, never as a string.
_NUMBER_START = re.compile( r"[-+]?(?:[0-9]|\.[0-9])" )
#Numeric literal: sign, digits with an optional fraction (or a fraction alone), optional exponent, optional type suffix.
_NUMBER = re.compile( r"(?P<num>[-+]?(?:[0-9]+(?P<frac>\.[0-9]*)?|(?P<lead>\.[0-9]+))(?P<exp>[eE][-+]?[0-9]+)?)(?P<suffix>[bBsSlLfFdD]?)" )
#Non-finite floats need a type suffix; without one, these are plain strings.
_SPECIAL_FLOAT = re.compile( r"(?P<sign>[-+]?)(?P<name>NaN|Infinity)(?P<suffix>[dDfF])" )

#Structs
_TL = Struct( ">Bi" )   #Tag list info (unsigned tagType, signed length)
_UB = Struct( ">B"  )   #Unsigned byte (tag types)
_B  = Struct( ">b"  )   #Signed byte (1 byte)
_S  = Struct( ">h"  )   #Signed big-endian short (2 bytes)
_US = Struct( ">H"  )   #Unsigned big-endian short (2 bytes, string lengths)
_I  = Struct( ">i"  )   #Signed big-endian int (4 bytes)
_L  = Struct( ">q"  )   #Signed big-endian long (8 bytes)
_F  = Struct( ">f"  )   #Big-endian float (4 bytes)
_D  = Struct( ">d"  )   #Big-endian double (8 bytes)

class NBTError( Exception ):
    """Base class for every exception raised by qnbt."""
    pass

class NBTFormatError( NBTError ):
    """
    This exception is raised when reading or writing binary data that violates the NBT specification.

    offset is the position in the input stream at which reading failed, or None if it isn't known.
    """
    offset = None

    def describe( self ):
        """Returns a description of the error without positional information."""
        return super().__str__()

    def __str__( self ):
        s = self.describe()
        if self.offset is None:
            return s
        return "{} (at byte {:d})".format( s, self.offset )

class UnexpectedEndError( NBTFormatError, EOFError ):
    """
    UnexpectedEndError( needed, got )

    This exception is raised when the input ends before a complete NBT document could be read.
    """
    def describe( self ):
        return "End of data reached prematurely: needed {:d} byte{}, got {:d}.".format( self.args[0], "s" if self.args[0] != 1 else "", self.args[1] )

class UnknownTagTypeError( NBTFormatError ):
    """
    UnknownTagTypeError( tagType )

    This exception is raised when a tag with an invalid or unrecognized type is read or written.
    See "Tag Types" above for valid tag types.
    """
    def describe( self ):
        return "Unknown or unsupported tag type: {:d}".format( self.args[0] )

class OutOfBoundsError( NBTFormatError, ValueError ):
    """
    OutOfBoundsError( value, min, max )

    This exception is raised when reading, writing or constructing a value that is outside of the valid range for that type.
    This error can be raised for numeric types (byte, short, int, long, float) if the type cannot represent the value,
    or for lengths of strings, lists and arrays if the length is negative or too long to be represented.
    """
    def describe( self ):
        return "Value {} is outside of expected range [{},{}].".format( *self.args )

class StringTooLongError( OutOfBoundsError ):
    """
    StringTooLongError( length, min, max )

    This exception is raised when writing a string (a TAG_String or a tag name) whose modified UTF-8 encoding is longer than MAX_STRING_LENGTH bytes.
    """
    def describe( self ):
        return "String is {:d} bytes long when encoded, but at most {:d} bytes can be written.".format( self.args[0], self.args[2] )

class ModifiedUTF8Error( NBTFormatError ):
    """
    ModifiedUTF8Error( reason )

    This exception is raised when the bytes of a string are not valid modified UTF-8.
    """
    def describe( self ):
        return "Invalid modified UTF-8 string: {}".format( self.args[0] )

class ListTypeError( NBTFormatError ):
    """
    ListTypeError( length )

    This exception is raised when a TAG_List declared to hold TAG_End claims to have entries.
    """
    def describe( self ):
        return "A TAG_List of TAG_End must be empty, but claims {:d} entries.".format( self.args[0] )

class NestingLimitError( NBTFormatError ):
    """
    NestingLimitError()

    This exception is raised when TAG_Lists / TAG_Compounds are nested more deeply than the configured maximum depth.
    """
    def describe( self ):
        return "Tags are nested more deeply than the maximum depth allows."

class WrongTagError( NBTError, TypeError ):
    """
    WrongTagError( expected, given )

    This exception is raised when a tag is viewed as the wrong type of tag, or when the wrong type of tag is added to a TAG_List.
    According to the NBT specification, TAG_Lists are only permitted to contain tags of a single type.
    """
    def __str__( self ):
        return "Expected {}, but received {} instead.".format( describeTag( self.args[0] ), describeTag( self.args[1] ) )

class MissingTagError( NBTError, KeyError ):
    """
    MissingTagError( name )

    This exception is raised by the typed getters of TAG_Compound (e.g. get_int()) when there is no tag with the requested name.
    """
    def __str__( self ):
        return "There is no tag with the name \"{}\" in this TAG_Compound.".format( self.args[0] )

class ConversionError( NBTError, TypeError ):
    """
    ConversionError( value )

    This exception is raised when failing to find a tag class to convert a non-tag value to.
    This often happens when value is an int or float; these types don't have tag mappings because there are multiple possible conversions.
    In other words, the type to convert to would be ambiguous:
        * int could be converted TAG_Byte, TAG_Short, TAG_Int, or TAG_Long.
        * float could be converted TAG_Float or TAG_Double.
    If you run into this problem, you can fix it by specifying the tag type you want to convert to.
    e.g.
        comp["myNumber"] = 5                             #Instead of this...
        comp["myNumber"] = TAG_Int( 5 )                  #...try this

        ls = TAG_List( [ 10, 11, 12 ] )                  #Instead of this...
        ls = TAG_List( [ 10, 11, 12 ], TAG_Int )         #...try this
    """
    def __str__( self ):
        return "Unable to convert value of type \"{}\" to a tag.".format( self.args[0].__class__.__name__ )

class SNBTError( NBTError, ValueError ):
    """
    SNBTError( message, text, position )

    Base class of the exceptions raised when parsing malformed SNBT.

    position is the 0-based index of the offending character in text.
    line and column are the same location, 1-based.
    snippet is the text around position (up to 15 characters either side, on the same line).
    """
    def __init__( self, message, text, position ):
        super().__init__( message, position )
        self.message  = message
        self.position = position
        self.line     = text.count( "\n", 0, position ) + 1
        self.column   = position - text.rfind( "\n", 0, position )

        linestart = position - self.column + 1
        lineend = text.find( "\n", position )
        if lineend == -1:
            lineend = len( text )
        self.snippet = text[ max( linestart, position - 15 ) : min( lineend, position + 15 ) ]

    def __str__( self ):
        if self.snippet:
            return "{} at line {:d}, column {:d}, near '{}'".format( self.message, self.line, self.column, self.snippet )
        return "{} at line {:d}, column {:d}".format( self.message, self.line, self.column )

class SNBTEndError( SNBTError ):
    """Raised when the SNBT text ends while more input was expected."""
    pass

class UnexpectedTokenError( SNBTError ):
    """Raised when a character or token appears where SNBT's grammar doesn't allow it."""
    pass

class MissingValueError( UnexpectedTokenError ):
    """Raised when a delimiter appears where a value was expected, e.g. the "}" in {foo:}."""
    pass

class TrailingCommaError( SNBTError ):
    """Raised when a compound, list or array ends with a comma."""
    pass

class UnterminatedStringError( SNBTError ):
    """Raised when a quoted string has no closing quote."""
    pass

class InvalidEscapeError( SNBTError ):
    """Raised when a quoted string contains an unknown or malformed escape sequence."""
    pass

class InvalidNumberError( SNBTError ):
    """Raised when a numeric literal is malformed or doesn't fit the type selected by its suffix."""
    pass

class MixedListError( SNBTError ):
    """
    MixedListError( expected, given, text, position )

    Raised when a list or array contains an element of a different type than the elements before it.
    expected and given are the tagTypes of the list and of the offending element.
    """
    def __init__( self, expected, given, text, position ):
        super().__init__( "Can't insert {} into a list of {}".format( describeTag( given ), describeTag( expected ) ), text, position )
        self.expected = expected
        self.given    = given

class SNBTNestingError( SNBTError ):
    """Raised when SNBT compounds / lists are nested more deeply than the maximum depth allows."""
    pass

def describeTag( tagType ):
    """
    Returns a short description of a tag with the given tagType, including the internal name and numeric type (e.g. TAG_Compound (10) ).
    tagType is expected to be a number.
    If tagType does not represent a valid tag, returns "Unknown (<tagType>)".
    """
    if tagType < 0 or tagType >= TAG_COUNT:
        return "Unknown ({:d})".format( tagType )
    return "{} ({:d})".format( TAG_NAMES[tagType], tagType )

#_avtt
def assertValidTagType( tagType ):
    """Raises UnknownTagTypeError if the given tagType is unrecognized"""
    if tagType < 0 or tagType >= TAG_COUNT:
        raise UnknownTagTypeError( tagType )

#Modified UTF-8
#Java (and therefore NBT) encodes strings with two differences from standard UTF-8:
#   1. U+0000 is encoded as the 2-byte sequence C0 80, so encoded strings never contain a null byte.
#   2. Characters above U+FFFF are split into a UTF-16 surrogate pair and each surrogate is encoded as its own 3-byte sequence.
#Standard UTF-8's 4-byte sequences never appear.
_FOUR_BYTE_LEAD = re.compile( b"[\xf0-\xff]" )

def encodeModifiedUTF8( s ):
    """Encodes the str s as modified UTF-8 and returns the bytes."""
    if s.isascii():
        b = s.encode( "ascii" )
    else:
        #Turn every character into its UTF-16 code unit(s) so supplementary characters become two lone surrogates
        units = s.encode( "utf-16-be", "surrogatepass" )
        b = "".join( [ chr( u ) for u, in _US.iter_unpack( units ) ] ).encode( "utf-8", "surrogatepass" )
    if b"\0" in b:
        b = b.replace( b"\0", b"\xc0\x80" )
    return b

def decodeModifiedUTF8( b ):
    """
    Decodes the bytes-like object b from modified UTF-8 and returns a str.
    Raises ModifiedUTF8Error if b is not valid modified UTF-8.
    Unpaired surrogates are kept in the returned str, the same way Java keeps them.
    """
    b = bytes( b )
    if b.isascii():
        return b.decode( "ascii" )
    if _FOUR_BYTE_LEAD.search( b ) is not None:
        raise ModifiedUTF8Error( "4-byte sequences are not allowed" )
    try:
        s = b.replace( b"\xc0\x80", b"\0" ).decode( "utf-8", "surrogatepass" )
    except UnicodeDecodeError as e:
        raise ModifiedUTF8Error( "{} at byte {:d}".format( e.reason, e.start ) ) from e
    #Join surrogate pairs back into supplementary characters
    return s.encode( "utf-16-be", "surrogatepass" ).decode( "utf-16-be", "surrogatepass" )

#_r
def read( i, n ):
    """
    Reads n bytes from i (a readable file-like object).
    Raises an UnexpectedEndError if the end of the input is encountered before n bytes can be read.
    """
    b = i.read( n )
    if len( b ) != n:
        raise UnexpectedEndError( n, len( b ) )
    return b

#_rtt
def readTagType( i ):
    """Reads the 1-byte tagType that starts a named tag header or a TAG_List header."""
    return read( i, 1 )[0]

#_wtt
def writeTagType( tagType, o ):
    """Writes a 1-byte tagType."""
    o.write( _UB.pack( tagType ) )

#_wtn
def writeTagName( tagType, name, o ):
    """
    Writes a named tag header.
    tagType is the numerical ID of the tag directly following this header.
    name is the name of the tag.
    """
    o.write( _UB.pack( tagType ) )
    writeString( name, o )

#_rb
def readByte( i ):
    """
    Reads a TAG_Byte payload.
    i is a file-like object to read bytes from.
    """
    return _B.unpack( read( i, 1 ) )[0]
#_wb
def writeByte( v, o ):
    """Writes a TAG_Byte payload."""
    o.write( _B.pack( v ) )

#_rs
def readShort( i ):
    """Reads a TAG_Short payload."""
    return _S.unpack( read( i, 2 ) )[0]
#_ws
def writeShort( v, o ):
    """Writes a TAG_Short payload."""
    o.write( _S.pack( v ) )

#_ri
def readInt( i ):
    """Reads a TAG_Int payload."""
    return _I.unpack( read( i, 4 ) )[0]
#_wi
def writeInt( v, o ):
    """Writes a TAG_Int payload."""
    o.write( _I.pack( v ) )

#_rl
def readLong( i ):
    """Reads a TAG_Long payload."""
    return _L.unpack( read( i, 8 ) )[0]
#_wl
def writeLong( v, o ):
    """Writes a TAG_Long payload."""
    o.write( _L.pack( v ) )

#_rf
def readFloat( i ):
    """Reads a TAG_Float payload."""
    return _F.unpack( read( i, 4 ) )[0]
#_wf
def writeFloat( v, o ):
    """Writes a TAG_Float payload."""
    o.write( _F.pack( v ) )

#_rd
def readDouble( i ):
    """Reads a TAG_Double payload."""
    return _D.unpack( read( i, 8 ) )[0]
#_wd
def writeDouble( v, o ):
    """Writes a TAG_Double payload."""
    o.write( _D.pack( v ) )

#_rst
def readString( i ):
    """Reads a TAG_String payload (or a tag name)."""
    l = _US.unpack( read( i, 2 ) )[0]
    return decodeModifiedUTF8( read( i, l ) )

#_wst
def writeString( v, o ):
    """
    Writes a TAG_String payload (or a tag name).
    Raises StringTooLongError if the encoded string doesn't fit in the 2-byte length prefix; nothing is written in that case.
    """
    b = encodeModifiedUTF8( v )
    length = len( b )
    if length > MAX_STRING_LENGTH:
        raise StringTooLongError( length, 0, MAX_STRING_LENGTH )
    o.write( _US.pack( length ) )
    o.write( b )

#_rlh
def readTagListHeader( i ):
    """
    Reads a TAG_List header.

    Returns a tuple ( tagType, length ).
    tagType is the numerical ID of the tags contained in this list.
    length is how many tags are stored in the list.

    Raises UnknownTagTypeError if tagType is unknown.
    Raises OutOfBoundsError if the length of the list is negative.
    Raises ListTypeError if the list holds TAG_End but isn't empty.
    """
    t, l = _TL.unpack( read( i, 5 ) )
    assertValidTagType( t )
    if l < 0:
        raise OutOfBoundsError( l, 0, MAX_ARRAY_LENGTH )
    if t == TAG_END and l != 0:
        raise ListTypeError( l )
    return t, l

#_wlh
def writeTagListHeader( t, l, o ):
    """Writes a TAG_List header."""
    o.write( _TL.pack( t, l ) )

#_rah
def readArrayHeader( i ):
    """
    Reads a TAG_Byte_Array, TAG_Int_Array or TAG_Long_Array header.
    Returns the length (in elements) of the array.
    If the length is negative, raises an OutOfBoundsError.
    """
    l = _I.unpack( read( i, 4 ) )[0]
    if l < 0:
        raise OutOfBoundsError( l, 0, MAX_ARRAY_LENGTH )
    return l

#_ra
def readArray( i, a ):
    """
    Reads a TAG_Byte_Array, TAG_Int_Array or TAG_Long_Array payload into a, an empty array of the appropriate typecode.
    Returns a.
    """
    l = readArrayHeader( i )
    if l > 0:
        a.frombytes( read( i, l * a.itemsize ) )
        if _SWAP and a.itemsize > 1:
            a.byteswap()
    return a

#_wa
def writeArray( a, o ):
    """Writes a TAG_Byte_Array, TAG_Int_Array or TAG_Long_Array payload from a, an array of the appropriate typecode."""
    o.write( _I.pack( len( a ) ) )
    if _SWAP and a.itemsize > 1:
        #Swap a copy; the caller's array stays native-endian
        a = array( a.typecode, a )
        a.byteswap()
    o.write( a.tobytes() )
