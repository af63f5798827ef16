"""
Parses SNBT (stringified NBT), the text form of NBT used by Minecraft commands, into a tree of tags.

Example:
    >>> tag = qnbt.parse( '{name:"Steve",pos:[0.5d,64d,-12.5d],flags:[B;1,0,1]}' )
    >>> tag["pos"]
    TAG_List([TAG_Double(0.5), TAG_Double(64.0), TAG_Double(-12.5)])
    >>> tag["flags"]
    TAG_Byte_Array([1, 0, 1])
"""
import logging
import math
import re

from qnbt.tag import (
    TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound, TAG_Int_Array, TAG_Long_Array
)
from qnbt.shared import (
    OutOfBoundsError, WrongTagError,
    SNBTEndError, UnexpectedTokenError, MissingValueError, TrailingCommaError, UnterminatedStringError,
    InvalidEscapeError, InvalidNumberError, MixedListError, SNBTNestingError,
    TAG_STRING, TAG_LIST, TAG_COMPOUND,
    MAX_DEPTH,
    describeTag,
    _BARE, _NUMBER_START, _NUMBER, _SPECIAL_FLOAT
)

logger = logging.getLogger( __name__ )

_WHITESPACE = re.compile( r"[ \t\r\n]*" )

#"[B;", "[I;" or "[L;" starts a typed array instead of a list
_ARRAY_START = re.compile( r"\[[ \t\r\n]*([BILbil])[ \t\r\n]*;" )

#Everything up to the next quote or backslash inside a quoted string
_DQ_CHUNK = re.compile( r'[^"\\]*' )
_SQ_CHUNK = re.compile( r"[^'\\]*" )

_HEX4 = re.compile( r"[0-9A-Fa-f]{4}" )

_ESCAPES = {
    "\\": "\\",
    "'":  "'",
    "\"": "\"",
    "n":  "\n",
    "r":  "\r",
    "t":  "\t",
    "b":  "\b",
    "f":  "\f"
}

#Tag class selected by a numeric suffix (lowercased)
_SUFFIXES = {
    "b": TAG_Byte,
    "s": TAG_Short,
    "l": TAG_Long,
    "f": TAG_Float,
    "d": TAG_Double
}

#Array tag class and element tag class for each array prefix letter (uppercased)
_ARRAYS = {
    "B": ( TAG_Byte_Array, TAG_Byte ),
    "I": ( TAG_Int_Array,  TAG_Int  ),
    "L": ( TAG_Long_Array, TAG_Long )
}

class _Parser:
    """
    Recursive descent parser over text.
    pos is the index of the next unread character; every method leaves it just past what it consumed.
    """
    def __init__( self, text, maxdepth ):
        self.text = text
        self.pos = 0
        self.maxdepth = maxdepth

    def skip( self ):
        """Moves pos past any whitespace."""
        self.pos = _WHITESPACE.match( self.text, self.pos ).end()

    def peek( self ):
        """Skips whitespace and returns the next character, or None at the end of the text."""
        self.skip()
        if self.pos < len( self.text ):
            return self.text[ self.pos ]
        return None

    def parseValue( self, depth ):
        """
        Reads the value at pos. depth is how many more compounds / lists / arrays may be opened.
        Compounds and lists are read inline; each level of nesting is one stack frame.
        """
        c = self.peek()
        if c is None:
            raise SNBTEndError( "Expected a value but reached the end of the text", self.text, self.pos )

        if c == "{":
            self.enter( depth )
            self.pos += 1

            tag = TAG_Compound()
            if self.peek() == "}":
                self.pos += 1
                return tag

            more = True
            while more:
                key = self.parseKey()
                self.expect( ":" )
                #A repeated key replaces the earlier value but keeps its position.
                tag[ key ] = self.parseValue( depth - 1 )
                more = self.next( "}" )
            return tag

        if c == "[":
            self.enter( depth )
            m = _ARRAY_START.match( self.text, self.pos )
            if m is not None:
                self.pos = m.end()
                return self.parseArray( m.group( 1 ).upper() )
            self.pos += 1

            tag = TAG_List()
            if self.peek() == "]":
                self.pos += 1
                return tag

            more = True
            while more:
                self.skip()
                start = self.pos
                value = self.parseValue( depth - 1 )
                try:
                    tag.append( value )
                except WrongTagError as e:
                    raise MixedListError( e.args[0], e.args[1], self.text, start ) from None
                more = self.next( "]" )
            return tag

        if c == "\"" or c == "'":
            return TAG_String( self.parseQuoted() )
        if c in ",}]":
            raise MissingValueError( "Expected a value but found '{}'".format( c ), self.text, self.pos )

        start = self.pos
        token = self.parseBare( "a value" )
        return self.bareValue( token, start )

    def parseBare( self, what ):
        """Reads an unquoted token at pos. what names the expected token in error messages."""
        m = _BARE.match( self.text, self.pos )
        if m is None:
            raise UnexpectedTokenError( "Expected {} but found '{}'".format( what, self.text[ self.pos ] ), self.text, self.pos )
        self.pos = m.end()
        return m.group()

    def bareValue( self, token, start ):
        """Returns the tag an unquoted token stands for. start is the token's position."""
        if token == "true":
            return TAG_Byte( 1 )
        if token == "false":
            return TAG_Byte( 0 )

        m = _SPECIAL_FLOAT.fullmatch( token )
        if m is not None:
            v = math.nan if m.group( "name" ) == "NaN" else math.inf
            if m.group( "sign" ) == "-":
                v = -v
            return _SUFFIXES[ m.group( "suffix" ).lower() ]( v )

        if _NUMBER_START.match( token ):
            return self.number( token, start )
        return TAG_String( token )

    def number( self, token, start ):
        m = _NUMBER.fullmatch( token )
        if m is None:
            raise InvalidNumberError( "Invalid number \"{}\"".format( token ), self.text, start )

        num = m.group( "num" )
        suffix = m.group( "suffix" ).lower()
        integral = m.group( "frac" ) is None and m.group( "lead" ) is None and m.group( "exp" ) is None
        if suffix:
            c = _SUFFIXES[ suffix ]
        else:
            c = TAG_Int if integral else TAG_Double

        if c.isIntegral:
            if not integral:
                raise InvalidNumberError( "{} must be an integer, but \"{}\" isn't".format( c.__name__, token ), self.text, start )
            #int() refuses literals with more digits than sys.get_int_max_str_digits() allows
            try:
                return c( int( num ) )
            except ( OutOfBoundsError, ValueError ):
                raise InvalidNumberError( "Number \"{}\" is out of range for {}".format( token, c.__name__ ), self.text, start ) from None

        v = float( num )
        if math.isinf( v ):
            raise InvalidNumberError( "Number \"{}\" is too large for {}".format( token, c.__name__ ), self.text, start )
        try:
            return c( v )
        except OutOfBoundsError:
            raise InvalidNumberError( "Number \"{}\" is out of range for {}".format( token, c.__name__ ), self.text, start ) from None

    def parseQuoted( self ):
        """Reads a quoted string at pos and returns it as a str with escapes resolved."""
        text = self.text
        start = self.pos
        quote = text[ start ]
        chunk = _DQ_CHUNK if quote == "\"" else _SQ_CHUNK

        parts = []
        i = start + 1
        while True:
            m = chunk.match( text, i )
            parts.append( m.group() )
            i = m.end()
            if i >= len( text ):
                raise UnterminatedStringError( "Unterminated string", text, start )
            if text[i] == quote:
                self.pos = i + 1
                return "".join( parts )

            #Backslash
            if i + 1 >= len( text ):
                raise UnterminatedStringError( "Unterminated string", text, start )
            e = text[ i + 1 ]
            if e in _ESCAPES:
                parts.append( _ESCAPES[e] )
                i += 2
            elif e == "u":
                h = text[ i + 2 : i + 6 ]
                if _HEX4.fullmatch( h ) is None:
                    raise InvalidEscapeError( "Invalid unicode escape \"\\u{}\"".format( h ), text, i )
                parts.append( chr( int( h, 16 ) ) )
                i += 6
            else:
                raise InvalidEscapeError( "Invalid escape sequence \"\\{}\"".format( e ), text, i )

    def parseKey( self ):
        c = self.peek()
        if c is None:
            raise SNBTEndError( "Expected a key but reached the end of the text", self.text, self.pos )
        if c == "\"" or c == "'":
            return self.parseQuoted()
        return self.parseBare( "a key" )

    def expect( self, c ):
        """Consumes the character c, skipping whitespace before it."""
        n = self.peek()
        if n is None:
            raise SNBTEndError( "Expected '{}' but reached the end of the text".format( c ), self.text, self.pos )
        if n != c:
            raise UnexpectedTokenError( "Expected '{}' but found '{}'".format( c, n ), self.text, self.pos )
        self.pos += 1

    def next( self, close ):
        """
        Consumes the separator after an entry of a compound, list or array.
        Returns True if another entry follows, or False if close (the closing bracket) was consumed.
        """
        c = self.peek()
        if c == ",":
            comma = self.pos
            self.pos += 1
            if self.peek() == close:
                raise TrailingCommaError( "Trailing comma before '{}'".format( close ), self.text, comma )
            return True
        if c == close:
            self.pos += 1
            return False
        if c is None:
            raise SNBTEndError( "Expected ',' or '{}' but reached the end of the text".format( close ), self.text, self.pos )
        raise UnexpectedTokenError( "Expected ',' or '{}' but found '{}'".format( close, c ), self.text, self.pos )

    def enter( self, depth ):
        """Checks that a compound / list / array may be opened at pos."""
        if depth == 0:
            raise SNBTNestingError( "Tags are nested more than {:d} levels deep".format( self.maxdepth ), self.text, self.pos )

    def parseArray( self, letter ):
        """Reads the elements of a typed array after its "[B;" / "[I;" / "[L;" prefix."""
        c, element = _ARRAYS[ letter ]
        values = []
        if self.peek() == "]":
            self.pos += 1
            return c()

        more = True
        while more:
            values.append( self.parseArrayElement( element ) )
            more = self.next( "]" )
        return c( values )

    def parseArrayElement( self, element ):
        """
        Reads one element of a typed array. element is the tag class of the array's elements.
        Unsuffixed integers are read directly as element; anything else must be an element in its own right, e.g. 5b in [B;...].
        """
        c = self.peek()
        start = self.pos
        if c is None:
            raise SNBTEndError( "Expected a value but reached the end of the text", self.text, start )
        if c in ",]":
            raise MissingValueError( "Expected a value but found '{}'".format( c ), self.text, start )

        #Containers and quoted strings can never be array elements
        if c == "{":
            given = TAG_COMPOUND
        elif c == "[":
            m = _ARRAY_START.match( self.text, start )
            given = TAG_LIST if m is None else _ARRAYS[ m.group( 1 ).upper() ][0].tagType
        elif c == "\"" or c == "'":
            given = TAG_STRING
        else:
            token = self.parseBare( "a value" )
            n = _NUMBER.fullmatch( token )
            if n is not None and not n.group( "suffix" ) and n.group( "frac" ) is None and n.group( "lead" ) is None and n.group( "exp" ) is None:
                try:
                    return element( int( n.group( "num" ) ) )
                except ( OutOfBoundsError, ValueError ):
                    raise InvalidNumberError( "Number \"{}\" is out of range for {}".format( token, element.__name__ ), self.text, start ) from None

            value = self.bareValue( token, start )
            if value.tagType == element.tagType:
                return value
            given = value.tagType
        raise MixedListError( element.tagType, given, self.text, start )

def parse( text, maxdepth=MAX_DEPTH ):
    """
    Parses text as SNBT and returns the tag it describes.

    text is a str containing exactly one SNBT value (any type of tag), optionally surrounded by whitespace.
    maxdepth is how deeply compounds, lists and arrays may be nested. Defaults to MAX_DEPTH.

    Numbers take their type from their suffix:
        5b -> TAG_Byte, 5s -> TAG_Short, 5 -> TAG_Int, 5L -> TAG_Long, 5.0f -> TAG_Float, 5.0 or 5d -> TAG_Double
    true and false are TAG_Byte 1 and 0.
    Unquoted text that doesn't start like a number is a TAG_String.

    Raises an SNBTError (or subclass) describing where and why parsing failed.
    SNBTError is a ValueError, so "except ValueError" also catches it.
    """
    p = _Parser( text, maxdepth )
    tag = p.parseValue( maxdepth )
    if p.peek() is not None:
        raise UnexpectedTokenError( "Unexpected '{}' after the end of the value".format( text[ p.pos ] ), text, p.pos )

    logger.debug( "Parsed SNBT {}.".format( describeTag( tag.tagType ) ) )
    return tag
